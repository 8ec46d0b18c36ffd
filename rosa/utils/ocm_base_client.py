import logging
from collections.abc import (
    Generator,
    Mapping,
)
from datetime import (
    UTC,
    datetime,
    timedelta,
)
from types import TracebackType
from typing import Any

import jwt
import requests
from requests import (
    Session,
    codes,
)
from sretoolbox.utils import retry

from rosa.utils import config
from rosa.utils.config import (
    ConfigError,
    OCMConfig,
)

REQUEST_TIMEOUT_SEC = 60
TOKEN_MIN_VALIDITY = timedelta(minutes=10)


class NotLoggedInError(Exception):
    pass


class ConnectionBuildError(Exception):
    pass


def token_claims(token: str) -> dict[str, Any]:
    return jwt.decode(token, options={"verify_signature": False})


def token_expires_within(token: str, validity: timedelta) -> bool:
    """
    True when the token is unusable or expires before now + validity.
    Tokens without an exp claim never expire.
    """
    try:
        claims = token_claims(token)
    except jwt.PyJWTError:
        return True
    expires_at = claims.get("exp")
    if not expires_at:
        return False
    return datetime.fromtimestamp(expires_at, tz=UTC) < datetime.now(tz=UTC) + validity


class OCMBaseClient:
    """
    Thin client for OCM. This class takes care of authentication
    and provides methods for GET, POST, PATCH, DELETE to interact with ocm API.

    The access token is guaranteed to stay valid for at least
    TOKEN_MIN_VALIDITY after construction. It is refreshed with the
    refresh token if one is available, otherwise with the client credentials.
    """

    def __init__(
        self,
        url: str,
        access_token: str | None = None,
        refresh_token: str | None = None,
        access_token_url: str = config.DEFAULT_TOKEN_URL,
        access_token_client_id: str = config.DEFAULT_CLIENT_ID,
        access_token_client_secret: str | None = None,
        scopes: list[str] | None = None,
        insecure: bool = False,
        session: Session | None = None,
    ):
        self._url = url.rstrip("/")
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._access_token_url = access_token_url
        self._access_token_client_id = access_token_client_id
        self._access_token_client_secret = access_token_client_secret
        self._scopes = scopes or []
        self._session = session if session else Session()
        self._session.verify = not insecure
        self._init_access_token()
        self._init_request_headers()

    @property
    def url(self) -> str:
        return self._url

    @property
    def tokens(self) -> tuple[str | None, str | None]:
        return self._access_token, self._refresh_token

    def _init_access_token(self) -> None:
        if self._access_token and not token_expires_within(
            self._access_token, TOKEN_MIN_VALIDITY
        ):
            return

        if self._refresh_token and not token_expires_within(
            self._refresh_token, timedelta(0)
        ):
            data = {
                "grant_type": "refresh_token",
                "client_id": self._access_token_client_id,
                "refresh_token": self._refresh_token,
            }
        elif self._access_token_client_id and self._access_token_client_secret:
            data = {
                "grant_type": "client_credentials",
                "client_id": self._access_token_client_id,
                "client_secret": self._access_token_client_secret,
            }
        else:
            raise ConnectionBuildError(
                "Error creating connection. Not able to get authentication token"
            )

        if self._access_token_client_secret:
            data["client_secret"] = self._access_token_client_secret
        if self._scopes:
            data["scope"] = " ".join(self._scopes)

        tokens = self._request_tokens(data)
        self._access_token = tokens.get("access_token")
        self._refresh_token = tokens.get("refresh_token") or self._refresh_token
        if not self._access_token:
            raise ConnectionBuildError(
                "Error creating connection. Not able to get authentication token"
            )

    @retry()
    def _request_tokens(self, data: Mapping[str, str]) -> dict[str, Any]:
        r = self._session.post(
            self._access_token_url, data=data, timeout=REQUEST_TIMEOUT_SEC
        )
        r.raise_for_status()
        return r.json()

    def _init_request_headers(self) -> None:
        self._session.headers.update({
            "Authorization": f"Bearer {self._access_token}",
            "accept": "application/json",
        })

    def get(self, api_path: str, params: Mapping[str, Any] | None = None) -> Any:
        logging.debug(f"GET {api_path} {params or ''}")
        r = self._session.get(
            f"{self._url}{api_path}",
            params=params,
            timeout=REQUEST_TIMEOUT_SEC,
        )
        try:
            r.raise_for_status()
        except Exception:
            logging.error(r.text)
            raise
        return r.json()

    def get_paginated(
        self,
        api_path: str,
        params: dict[str, Any] | None = None,
        max_page_size: int = 100,
        max_pages: int | None = None,
    ) -> Generator[dict[str, Any], None, None]:
        params_copy = {} if not params else params.copy()
        params_copy["size"] = max_page_size

        while True:
            rs = self.get(api_path, params=params_copy)
            yield from rs.get("items", [])
            current_page = rs.get("page", 0)
            records_on_page = rs.get("size", len(rs.get("items", [])))
            if records_on_page < max_page_size:
                return
            if max_pages is not None and current_page >= max_pages:
                return
            params_copy["page"] = current_page + 1

    def post(
        self,
        api_path: str,
        data: Mapping[str, Any] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        logging.debug(f"POST {api_path}")
        r = self._session.post(
            f"{self._url}{api_path}",
            json=data,
            params=params,
            timeout=REQUEST_TIMEOUT_SEC,
        )
        try:
            r.raise_for_status()
        except Exception as e:
            logging.error(r.text)
            raise e
        if r.status_code == codes.no_content or not r.content:
            return {}
        return r.json()

    def patch(
        self,
        api_path: str,
        data: Mapping[str, Any],
        params: Mapping[str, str] | None = None,
    ) -> Any:
        logging.debug(f"PATCH {api_path}")
        r = self._session.patch(
            f"{self._url}{api_path}",
            json=data,
            params=params,
            timeout=REQUEST_TIMEOUT_SEC,
        )
        try:
            r.raise_for_status()
        except Exception as e:
            logging.error(r.text)
            raise e
        if r.status_code == codes.no_content or not r.content:
            return {}
        return r.json()

    def delete(self, api_path: str) -> None:
        logging.debug(f"DELETE {api_path}")
        r = self._session.delete(f"{self._url}{api_path}", timeout=REQUEST_TIMEOUT_SEC)
        try:
            r.raise_for_status()
        except Exception:
            logging.error(r.text)
            raise

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "OCMBaseClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


def init_ocm_base_client(
    cfg: OCMConfig | None = None,
    session: Session | None = None,
) -> OCMBaseClient:
    """
    Initiate an API client towards the OCM instance stored in the login
    configuration. Refreshed tokens are written back to the configuration
    file when the configuration was loaded from disk.
    """
    persist = cfg is None
    if cfg is None:
        try:
            cfg = config.load()
        except ConfigError as e:
            raise ConnectionBuildError(f"Failed to load config file: {e}") from e
        if cfg is None:
            raise NotLoggedInError("Not logged in, run the 'rosa login' command")

    try:
        client = OCMBaseClient(
            url=cfg.url,
            access_token=cfg.access_token,
            refresh_token=cfg.refresh_token,
            access_token_url=cfg.token_url,
            access_token_client_id=cfg.client_id,
            access_token_client_secret=cfg.client_secret,
            scopes=cfg.scopes,
            insecure=cfg.insecure,
            session=session,
        )
    except requests.RequestException as e:
        raise ConnectionBuildError(
            "Error creating connection. Not able to get authentication token"
        ) from e

    access_token, refresh_token = client.tokens
    if persist and (access_token, refresh_token) != (
        cfg.access_token,
        cfg.refresh_token,
    ):
        cfg.access_token = access_token
        cfg.refresh_token = refresh_token
        config.save(cfg)

    return client
