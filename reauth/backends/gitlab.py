"""
Gitlab backend.

Authenticates requests against gitlab project paths, primarily so that
gitlab-ci jobs can reach otherwise private resources without storing
credentials anywhere: the job presents the project path as the username and
its job token as the password, and the backend checks that gitlab accepts the
token for that project's repository.

Example::

    docker login docker.example.com -u "$CI_PROJECT_PATH" -p "$CI_JOB_TOKEN"

Options:
    url: base URL project paths are resolved against (required).
    username: identity sent to gitlab with the token. Default: gitlab-ci-token.
    timeout: duration bounding the verification call, 0 disables. Default: 1m.
    insecure: skip TLS certificate verification for https targets. Default: false.
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import field_validator
from starlette.requests import Request

from reauth.backends.base import BackendOptions, BaseBackend
from reauth.backends.options import parse_bool, parse_duration
from reauth.credentials import BasicCredentials
from reauth.errors import RedirectRejectedError, UpstreamTimeoutError, UpstreamTransportError

logger = logging.getLogger(__name__)

BACKEND_NAME = "gitlab"
DEFAULT_TIMEOUT = 60.0
DEFAULT_USERNAME = "gitlab-ci-token"
REPOSITORY_SUFFIX = ".git"


def normalize_subject(subject: str) -> str:
    if subject.endswith(REPOSITORY_SUFFIX):
        return subject
    return f"{subject}{REPOSITORY_SUFFIX}"


class GitlabOptions(BackendOptions):
    url: str
    username: str = DEFAULT_USERNAME
    timeout: float = DEFAULT_TIMEOUT
    insecure: bool = False

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(str(e)) from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("an absolute http(s) URL is required")
        return value

    @field_validator("timeout", mode="before")
    @classmethod
    def validate_timeout(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = parse_duration(value)
        if value < 0:
            raise ValueError("timeout must not be negative")
        return value

    @field_validator("insecure", mode="before")
    @classmethod
    def validate_insecure(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_bool(value)
        return value


class GitlabBackend(BaseBackend):
    options_model = GitlabOptions
    options: GitlabOptions

    def __init__(self, options: GitlabOptions):
        super().__init__(options)
        self.base_url = httpx.URL(options.url)

    @property
    def username(self) -> str:
        return self.options.username

    @property
    def timeout(self) -> float | None:
        return self.options.timeout or None

    @property
    def insecure(self) -> bool:
        return self.options.insecure

    def resolve(self, subject: str) -> httpx.URL | None:
        """Resolve a normalized subject against the base URL, None if it can't be."""
        try:
            target = self.base_url.join(subject)
        except httpx.InvalidURL:
            return None
        if (target.scheme, target.host, target.port) != (
            self.base_url.scheme,
            self.base_url.host,
            self.base_url.port,
        ):
            return None
        return target

    def client_options(self, target: httpx.URL) -> dict[str, Any]:
        return {
            "timeout": httpx.Timeout(self.timeout),
            "follow_redirects": False,
            "verify": not (target.scheme == "https" and self.insecure),
        }

    async def authenticate(self, request: Request) -> bool:
        credentials = BasicCredentials.from_authorization_header(
            request.headers.get("authorization")
        )
        if not credentials:
            return False

        target = self.resolve(normalize_subject(credentials.username))
        if target is None:
            logger.info(
                f"Unable to resolve subject {credentials.username!r} against {self.base_url}"
            )
            return False

        try:
            async with asyncio.timeout(self.timeout):
                async with httpx.AsyncClient(**self.client_options(target)) as client:
                    response = await client.get(
                        target,
                        auth=(self.username, credentials.password.encode(credentials.encoding)),
                    )
        except (TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamTimeoutError(
                f"verification against {target} timed out after {self.timeout}s"
            ) from e
        except httpx.RequestError as e:
            raise UpstreamTransportError(f"verification against {target} failed: {e}") from e

        if response.is_redirect:
            raise RedirectRejectedError(str(target), response.headers.get("location"))

        if response.status_code != 200:
            logger.debug(f"Verification against {target} denied ({response.status_code})")
            return False

        return True
