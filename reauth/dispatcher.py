import logging
from collections.abc import Sequence
from dataclasses import dataclass

from starlette.requests import Request

from reauth.errors import BackendError
from reauth.rules import MatchMode, Rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    authenticated: bool
    rule: Rule
    error: BackendError | None = None


class Dispatcher:
    """
    Selects the rule guarding a request and evaluates its backends.

    Rules are tried in configuration order and the first one whose path
    matches applies. Backends of that rule are evaluated according to the
    rule mode:

    - ``any``: the first backend that authenticates grants access. Backend
      errors are logged and evaluation moves on to the next backend.
    - ``all``: every backend must authenticate; the first refusal or error
      denies.
    """

    def __init__(self, rules: Sequence[Rule]):
        self.rules: tuple[Rule, ...] = tuple(rules)

    def match(self, path: str) -> Rule | None:
        return next((rule for rule in self.rules if rule.matches(path)), None)

    async def authenticate(self, request: Request) -> Decision | None:
        """
        :return: the decision for the request, None if no rule guards its path.
        """
        path = request.scope["path"]
        rule = self.match(path)
        if rule is None:
            return None
        if rule.mode == MatchMode.ALL:
            return await self._authenticate_all(rule, request)
        return await self._authenticate_any(rule, request)

    async def _authenticate_any(self, rule: Rule, request: Request) -> Decision:
        error: BackendError | None = None
        for backend in rule.backends:
            try:
                if await backend.authenticate(request):
                    return Decision(authenticated=True, rule=rule)
            except BackendError as e:
                logger.warning(f"Backend {type(backend).__name__} failed for {rule.path}: {e}")
                error = e
        return Decision(authenticated=False, rule=rule, error=error)

    async def _authenticate_all(self, rule: Rule, request: Request) -> Decision:
        for backend in rule.backends:
            try:
                if not await backend.authenticate(request):
                    return Decision(authenticated=False, rule=rule)
            except BackendError as e:
                logger.warning(f"Backend {type(backend).__name__} failed for {rule.path}: {e}")
                return Decision(authenticated=False, rule=rule, error=e)
        return Decision(authenticated=True, rule=rule)
