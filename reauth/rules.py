from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from reauth.backends.base import BaseBackend
from reauth.errors import ConfigurationError


class MatchMode(StrEnum):
    ANY = "any"
    ALL = "all"


@dataclass(frozen=True)
class Rule:
    path: str
    backends: Sequence[BaseBackend]
    exceptions: Sequence[str] = field(default_factory=tuple)
    mode: MatchMode = MatchMode.ANY

    def __post_init__(self):
        if not self.path:
            raise ConfigurationError("path is a required parameter")
        if not self.backends:
            raise ConfigurationError("at least one backend required")
        object.__setattr__(self, "backends", tuple(self.backends))
        object.__setattr__(self, "exceptions", tuple(self.exceptions))
        object.__setattr__(self, "mode", MatchMode(self.mode))

    def matches(self, path: str) -> bool:
        if not path.startswith(self.path):
            return False
        return not any(path.startswith(exception) for exception in self.exceptions)
