from setuptools import find_packages, setup

setup(
    name="rosa-cli",
    version="1.0.0",
    license="Apache License 2.0",

    author="Red Hat App-SRE Team",
    author_email="sd-app-sre@redhat.com",
    python_requires=">=3.11",
    description="Command line tool to create and manage Red Hat OpenShift "
                "Service on AWS clusters through the OCM API.",

    packages=find_packages(exclude=('tests',)),

    install_requires=[
        "sretoolbox~=2.5",
        "Click>=7.0,<9.0",
        "rich>=13.0,<15.0",
        "requests>=2.31,<3.0",
        "pydantic>=2.0,<3.0",
        "PyJWT>=2.8,<3.0",
        "boto3>=1.28,<2.0",
        "botocore>=1.31,<2.0",
        "tabulate>=0.9,<0.10",
        "PyYAML>=6.0,<7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-mock>=3.11",
            "pytest-httpserver>=1.0",
            "werkzeug>=2.3",
        ],
    },

    test_suite="rosa.test",

    classifiers=[
        'Development Status :: 4 - Beta',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    entry_points={
        'console_scripts': [
            'rosa = rosa.cli:root',
        ],
    },
)
