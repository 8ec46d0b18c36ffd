from rosa.utils.ocm.base import (
    CS_API_BASE,
    VERSION_PREFIX,
    OCMVersion,
    ValidationError,
)
from rosa.utils.ocm.search_filters import Filter
from rosa.utils.ocm_base_client import OCMBaseClient


def get_versions(
    ocm_api: OCMBaseClient, channel_group: str | None = None
) -> list[OCMVersion]:
    """
    Returns the enabled OpenShift versions, newest first.
    """
    search = Filter().eq("enabled", "true").eq("channel_group", channel_group)
    return [
        OCMVersion(**version)
        for version in ocm_api.get_paginated(
            f"{CS_API_BASE}/versions",
            params={"search": search.render(), "order": "default desc, id desc"},
        )
    ]


def get_version_ids(ocm_api: OCMBaseClient) -> list[str]:
    return [version.short_id for version in get_versions(ocm_api)]


def validate_version(version: str, valid_versions: list[str]) -> str:
    """
    Checks a version given without the openshift-v prefix against the
    valid ones and returns the version id the API expects. An empty
    version passes through so the service default applies.
    """
    if not version:
        return version
    if version not in valid_versions:
        raise ValidationError(
            "A valid version number must be specified\n"
            f"Valid versions: {' '.join(valid_versions)}"
        )
    return f"{VERSION_PREFIX}{version}"
