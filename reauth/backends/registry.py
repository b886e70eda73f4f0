import logging
from collections.abc import Callable

from reauth.backends.base import BaseBackend
from reauth.errors import BackendNotFoundError, DuplicateBackendError

logger = logging.getLogger(__name__)

type BackendConstructor = Callable[[str], BaseBackend]


class BackendRegistry:
    def __init__(self):
        self._constructors: dict[str, BackendConstructor] = {}

    def register(self, name: str, constructor: BackendConstructor) -> None:
        if name in self._constructors:
            raise DuplicateBackendError(name)
        logger.debug(f"Registered backend {name}")
        self._constructors[name] = constructor

    def lookup(self, name: str) -> BackendConstructor:
        try:
            return self._constructors[name]
        except KeyError:
            raise BackendNotFoundError(name) from None

    def create(self, name: str, config: str) -> BaseBackend:
        return self.lookup(name)(config)

    def names(self) -> list[str]:
        return sorted(self._constructors)

    def __contains__(self, name: object) -> bool:
        return name in self._constructors
