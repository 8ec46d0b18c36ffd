import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import pytest
from pytest_httpserver import HTTPServer
from werkzeug import Request

from rosa.test.fixtures import (
    CREATOR_ARN,
    OcmUrl,
    build_token,
)
from rosa.utils import config
from rosa.utils.aws_api import Creator
from rosa.utils.config import OCMConfig
from rosa.utils.ocm_base_client import OCMBaseClient


@pytest.fixture
def access_token_url(httpserver: HTTPServer) -> str:
    return httpserver.url_for("/get_token")


@pytest.fixture
def ocm_url(httpserver: HTTPServer) -> str:
    return httpserver.url_for("/").rstrip("/")


@pytest.fixture(autouse=True)
def ocm_auth_mock(httpserver: HTTPServer, access_token_url: str) -> None:
    url = urlparse(access_token_url)
    httpserver.expect_request(url.path, method="post").respond_with_json({
        "access_token": build_token()
    })


@pytest.fixture
def ocm_api(access_token_url: str, ocm_url: str) -> OCMBaseClient:
    return OCMBaseClient(
        access_token_client_id="some_client_id",
        access_token_client_secret="some_client_secret",
        access_token_url=access_token_url,
        url=ocm_url,
    )


@pytest.fixture
def ocm_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    ocm_url: str,
    access_token_url: str,
) -> OCMConfig:
    """
    Writes a logged in configuration with a long lived access token, so
    no token request is needed.
    """
    monkeypatch.setenv(config.OCM_CONFIG, str(tmp_path / "ocm.json"))
    cfg = OCMConfig(
        url=ocm_url,
        token_url=access_token_url,
        access_token=build_token(),
    )
    config.save(cfg)
    return cfg


@pytest.fixture
def no_ocm_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "ocm.json"
    monkeypatch.setenv(config.OCM_CONFIG, str(path))
    return path


@pytest.fixture
def creator() -> Creator:
    return Creator(Arn=CREATOR_ARN, Account="123456789012", UserId="AIDAEXAMPLE")


@pytest.fixture
def register_ocm_url_responses(httpserver: HTTPServer) -> Callable[[list[OcmUrl]], int]:
    def f(urls: list[OcmUrl]) -> int:
        i = 0
        for url in urls:
            i += len(url.responses) or 1
            if not url.responses:
                httpserver.expect_request(
                    url.uri, method=url.method
                ).respond_with_json({})
            else:
                for r in url.responses:
                    httpserver.expect_request(
                        url.uri, method=url.method
                    ).respond_with_data(
                        json.dumps(r, default=str),
                        content_type="application/json",
                    )
        return i

    return f


def _request_matches(
    req: Request, method: str, base_url: str, path: str | None = None
) -> bool:
    if req.method != method:
        return False

    parsed_url = urlparse(req.url)
    if f"{parsed_url.scheme}://{parsed_url.netloc}" != base_url:
        return False

    return not (path and parsed_url.path != path)


@pytest.fixture
def find_ocm_http_request(
    ocm_url: str, httpserver: HTTPServer, access_token_url: str
) -> Callable[[str, str], Request | None]:
    def find_request(method: str, path: str) -> Request | None:
        for req, _ in httpserver.log:
            if req.url == access_token_url:
                # ignore the access token request
                continue
            if _request_matches(req, method, ocm_url, path):
                return req

        return None

    return find_request


@pytest.fixture
def find_all_ocm_http_requests(
    ocm_url: str, httpserver: HTTPServer, access_token_url: str
) -> Callable[..., list[Request]]:
    def find_request(method: str, path: str | None = None) -> list[Request]:
        return [
            req
            for req, _ in httpserver.log
            if req.url != access_token_url
            and _request_matches(req, method, ocm_url, path)
        ]

    return find_request


@pytest.fixture
def read_json() -> Callable[[Request], Any]:
    def f(req: Request) -> Any:
        return json.loads(req.get_data(as_text=True))

    return f
