import logging
import os

ROSA_LOG_LEVEL = "ROSA_LOG_LEVEL"

LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FMT = (
    "[%(asctime)s] [%(levelname)s] "
    "[%(filename)s:%(funcName)s:%(lineno)d] - %(message)s"
)


def init_env(log_level: str | None = None) -> None:
    # store the level in the environment so child processes inherit it
    if log_level:
        os.environ[ROSA_LOG_LEVEL] = log_level

    logging.basicConfig(
        format=LOG_FMT,
        datefmt=LOG_DATEFMT,
        level=getattr(logging, os.environ.get(ROSA_LOG_LEVEL, "WARNING").upper()),
    )
