import json
import os
from pathlib import Path

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
)

OCM_CONFIG = "OCM_CONFIG"
DEFAULT_CONFIG_FILE = "~/.ocm.json"

DEFAULT_URL = "https://api.openshift.com"
DEFAULT_TOKEN_URL = (
    "https://sso.redhat.com/auth/realms/redhat-external/protocol/openid-connect/token"
)
DEFAULT_CLIENT_ID = "cloud-services"
DEFAULT_SCOPES = ["openid"]

URL_ALIASES = {
    "production": DEFAULT_URL,
    "staging": "https://api.stage.openshift.com",
    "integration": "https://api.integration.openshift.com",
}


class ConfigError(Exception):
    pass


class OCMConfig(BaseModel):
    """
    Login configuration shared between invocations. The file layout is
    compatible with the one written by the ocm command line tool.
    """

    access_token: str | None = None
    refresh_token: str | None = None
    client_id: str = DEFAULT_CLIENT_ID
    client_secret: str | None = None
    scopes: list[str] = Field(default_factory=lambda: list(DEFAULT_SCOPES))
    token_url: str = DEFAULT_TOKEN_URL
    url: str = DEFAULT_URL
    insecure: bool = False


def location() -> Path:
    return Path(os.environ.get(OCM_CONFIG) or DEFAULT_CONFIG_FILE).expanduser()


def load() -> OCMConfig | None:
    path = location()
    if not path.exists():
        return None
    try:
        return OCMConfig(**json.loads(path.read_text()))
    except (OSError, ValueError, ValidationError) as e:
        raise ConfigError(f"can't load config file '{path}': {e}") from None


def save(cfg: OCMConfig) -> Path:
    path = location()
    path.parent.mkdir(parents=True, exist_ok=True)
    # holds tokens, created owner-only
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    os.fchmod(fd, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(cfg.model_dump_json(exclude_none=True, indent=2))
    return path


def remove() -> None:
    location().unlink(missing_ok=True)


def resolve_url(env: str) -> str:
    """Map an environment alias to its API URL; anything else is taken as URL."""
    return URL_ALIASES.get(env, env).rstrip("/")
