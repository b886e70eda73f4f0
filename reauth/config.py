import logging
from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from reauth.backends.registry import BackendRegistry
from reauth.conf import Settings
from reauth.dispatcher import Dispatcher
from reauth.errors import ConfigurationError
from reauth.rules import MatchMode, Rule

logger = logging.getLogger(__name__)


class UnmatchedPolicy(StrEnum):
    ALLOW = "allow"
    DENY = "deny"


def unmatched_policy(value: UnmatchedPolicy | str) -> UnmatchedPolicy:
    try:
        return UnmatchedPolicy(value)
    except ValueError:
        allowed = ", ".join(policy.value for policy in UnmatchedPolicy)
        raise ConfigurationError(
            f"unable to parse unmatched '{value}': expected one of {allowed}"
        ) from None


class RuleSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    path: str = Field(min_length=1)
    exceptions: list[str] = Field(default_factory=list, alias="except")
    mode: MatchMode = MatchMode.ANY
    backends: list[dict[str, str]] = Field(min_length=1)

    @field_validator("exceptions", mode="before")
    @classmethod
    def validate_exceptions(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("backends")
    @classmethod
    def validate_backends(cls, value: list[dict[str, str]]) -> list[dict[str, str]]:
        for directive in value:
            if len(directive) != 1:
                raise ValueError(
                    f"wrong number of arguments for backend directive {directive}: "
                    "expected a single 'name: options' entry"
                )
        return value


def _rule_settings(index: int, raw: Any) -> RuleSettings:
    if isinstance(raw, Mapping):
        raw = {str(key).lower(): value for key, value in raw.items()}
    try:
        return RuleSettings.model_validate(raw)
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or "rule"
        raise ConfigurationError(f"rule #{index}: {location}: {error['msg']}") from e


def load_rule(index: int, raw: Any, registry: BackendRegistry) -> Rule:
    rule_settings = _rule_settings(index, raw)
    backends = []
    for directive in rule_settings.backends:
        ((name, config),) = directive.items()
        try:
            backends.append(registry.create(name, config))
        except ConfigurationError as e:
            raise ConfigurationError(f"rule #{index}: {e} for {name}") from e
    rule = Rule(
        path=rule_settings.path,
        exceptions=rule_settings.exceptions,
        backends=backends,
        mode=rule_settings.mode,
    )
    logger.debug(
        f"Loaded rule #{index} for {rule.path} "
        f"({len(rule.backends)} backend(s), mode {rule.mode}, exceptions {list(rule.exceptions)})"
    )
    return rule


def load_rules(rules: Iterable[Any], registry: BackendRegistry) -> list[Rule]:
    return [load_rule(index, raw, registry) for index, raw in enumerate(rules)]


def load_dispatcher(settings: Settings, registry: BackendRegistry) -> Dispatcher:
    return Dispatcher(load_rules(settings.reauth.get("rules", []), registry))
