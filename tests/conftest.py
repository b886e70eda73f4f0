import base64

import pytest
from dynaconf import Dynaconf
from starlette.requests import Request

from reauth.backends.base import BaseBackend
from reauth.conf import Settings
from reauth.errors import BackendError
from tests.types import RequestFactory, SettingsFactory


class FakeBackend(BaseBackend):
    """Backend returning a canned verdict and counting its calls."""

    def __init__(self, result: bool | BackendError = True):
        super().__init__(None)
        self.result = result
        self.calls = 0

    async def authenticate(self, request: Request) -> bool:
        self.calls += 1
        if isinstance(self.result, BackendError):
            raise self.result
        return self.result


@pytest.fixture(scope="session")
def settings_factory() -> SettingsFactory:
    def _get_settings(
        logging: dict | None = None,
        reauth: dict | None = None,
    ) -> Settings:
        logging = logging or {
            "debug": True,
            "rich": False,
        }
        reauth = reauth or {
            "unmatched": "allow",
            "realm": "Restricted",
            "rules": [
                {
                    "path": "/private",
                    "except": ["/private/public"],
                    "backends": [{"gitlab": "url=https://git.example.com/,timeout=5s"}],
                },
            ],
        }
        settings = Dynaconf(
            environments=True,
            settings_files=[],
            ENV_FOR_DYNACONF="testing",
            LOGGING=logging,
            REAUTH=reauth,
        )

        return settings

    return _get_settings


@pytest.fixture
def request_factory() -> RequestFactory:
    def _factory(
        path: str = "/",
        username: str | None = None,
        password: str | None = None,
        authorization: str | None = None,
        host: str | None = None,
    ) -> Request:
        headers = []
        if host is not None:
            headers.append((b"host", host.encode("latin1")))
        if username is not None:
            token = base64.b64encode(f"{username}:{password or ''}".encode()).decode("ascii")
            authorization = f"Basic {token}"
        if authorization is not None:
            headers.append((b"authorization", authorization.encode("latin1")))
        return Request(
            {
                "type": "http",
                "method": "GET",
                "scheme": "http",
                "path": path,
                "query_string": b"",
                "headers": headers,
            }
        )

    return _factory


@pytest.fixture
def fake_backend_factory():
    return FakeBackend
