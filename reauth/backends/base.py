from abc import ABC, abstractmethod
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, ValidationError
from starlette.requests import Request

from reauth.backends.options import configuration_error, parse_options


class BackendOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class BaseBackend(ABC):
    """
    Framework-agnostic request authentication backend.

    Instances are built once from an option string and shared by every
    request, so implementations must not keep per-request state.
    """

    options_model: ClassVar[type[BackendOptions]] = BackendOptions

    def __init__(self, options: BackendOptions):
        self.options = options

    @classmethod
    def from_options(cls, config: str) -> Self:
        options = parse_options(config)
        try:
            validated = cls.options_model.model_validate(options)
        except ValidationError as e:
            raise configuration_error(e, options) from e
        return cls(validated)

    @abstractmethod
    async def authenticate(self, request: Request) -> bool:
        """
        Check the credentials carried by the request.

        :param request: the inbound request.
        :return: True if the request is authenticated, False otherwise.
        :raises BackendError: if no verdict could be reached.
        """
        raise NotImplementedError()
