from reauth.backends.base import BackendOptions, BaseBackend
from reauth.backends.gitlab import BACKEND_NAME as GITLAB, GitlabBackend
from reauth.backends.registry import BackendRegistry


def create_registry() -> BackendRegistry:
    registry = BackendRegistry()
    registry.register(GITLAB, GitlabBackend.from_options)
    return registry


__all__ = [
    "BackendOptions",
    "BackendRegistry",
    "BaseBackend",
    "GitlabBackend",
    "create_registry",
]
