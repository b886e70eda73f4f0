import pytest

from reauth.backends import GitlabBackend, create_registry
from reauth.backends.registry import BackendRegistry
from reauth.errors import BackendNotFoundError, ConfigurationError, DuplicateBackendError


def test_register_and_lookup(mocker):
    registry = BackendRegistry()
    constructor = mocker.MagicMock()

    registry.register("custom", constructor)

    assert registry.lookup("custom") is constructor
    assert "custom" in registry


def test_register_twice_fails(mocker):
    registry = BackendRegistry()
    registry.register("custom", mocker.MagicMock())

    with pytest.raises(DuplicateBackendError, match="backend 'custom' is already registered"):
        registry.register("custom", mocker.MagicMock())


def test_lookup_unregistered_name():
    registry = BackendRegistry()

    with pytest.raises(BackendNotFoundError, match="backend 'server_404' is not registered"):
        registry.lookup("server_404")


def test_registry_errors_are_configuration_errors():
    assert issubclass(DuplicateBackendError, ConfigurationError)
    assert issubclass(BackendNotFoundError, ConfigurationError)


def test_create_calls_constructor_with_options(mocker):
    registry = BackendRegistry()
    backend = mocker.MagicMock()
    constructor = mocker.MagicMock(return_value=backend)
    registry.register("custom", constructor)

    assert registry.create("custom", "a=1") is backend
    constructor.assert_called_once_with("a=1")


def test_names_are_sorted(mocker):
    registry = BackendRegistry()
    registry.register("zeta", mocker.MagicMock())
    registry.register("alpha", mocker.MagicMock())

    assert registry.names() == ["alpha", "zeta"]


def test_create_registry_has_builtin_backends():
    registry = create_registry()

    assert registry.names() == ["gitlab"]
    backend = registry.create("gitlab", "url=https://git.example.com/")
    assert isinstance(backend, GitlabBackend)


def test_create_registry_returns_independent_registries(mocker):
    first = create_registry()
    second = create_registry()

    first.register("custom", mocker.MagicMock())

    assert "custom" not in second
