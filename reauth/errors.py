class ReauthError(Exception):
    pass


class ConfigurationError(ReauthError):
    pass


class DuplicateBackendError(ConfigurationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"backend '{name}' is already registered")


class BackendNotFoundError(ConfigurationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"backend '{name}' is not registered")


class BackendError(ReauthError):
    """A backend could not reach a verdict for a request."""


class RedirectRejectedError(BackendError):
    def __init__(self, url: str, location: str | None):
        self.url = url
        self.location = location
        super().__init__(f"follow redirects disabled: {url} redirected to {location}")


class UpstreamTransportError(BackendError):
    pass


class UpstreamTimeoutError(UpstreamTransportError):
    pass
