import re
from typing import Any

from pydantic import ValidationError

from reauth.errors import ConfigurationError

RE_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def parse_options(config: str) -> dict[str, str]:
    """Split a ``key=value,key=value`` option string into a mapping."""
    options: dict[str, str] = {}
    for segment in config.split(","):
        segment = segment.strip()
        if not segment:
            continue
        key, separator, value = segment.partition("=")
        key = key.strip()
        if not separator or not key:
            raise ConfigurationError(f"unable to parse option '{segment}': expected key=value")
        options[key] = value.strip()
    return options


def parse_duration(value: str) -> float:
    """
    Parse a duration string such as ``300ms``, ``1.5s`` or ``1h30m``.

    :return: the duration in seconds.
    """
    text = value.strip()
    sign = 1.0
    if text[:1] in ("-", "+"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return 0.0
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    total = 0.0
    position = 0
    while position < len(text):
        match = RE_DURATION_PART.match(text, position)
        if not match:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        total += float(number) * DURATION_UNITS[unit]
        position = match.end()
    return sign * total


def parse_bool(value: str) -> bool:
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean {value!r}")


def configuration_error(exc: ValidationError, options: dict[str, Any]) -> ConfigurationError:
    """Turn the first pydantic validation failure into a ConfigurationError."""
    error = exc.errors()[0]
    key = str(error["loc"][0]) if error["loc"] else "options"
    if error["type"] == "missing":
        return ConfigurationError(f"{key} is a required parameter")
    return ConfigurationError(f"unable to parse {key} '{options.get(key)}': {error['msg']}")
