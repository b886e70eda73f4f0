import logging

from starlette.requests import Request

from reauth.backends import BackendRegistry, create_registry
from reauth.conf import Settings
from reauth.config import UnmatchedPolicy, load_dispatcher, unmatched_policy
from reauth.dispatcher import Dispatcher
from reauth.types import ASGIApp, ASGIReceive, ASGISend, Scope

logger = logging.getLogger(__name__)


class ReauthMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        dispatcher: Dispatcher,
        *,
        unmatched: UnmatchedPolicy | str = UnmatchedPolicy.ALLOW,
        realm: str = "Restricted",
    ):
        self.app = app
        self.dispatcher = dispatcher
        self.unmatched = unmatched_policy(unmatched)
        self.realm = realm

    @classmethod
    def from_settings(
        cls,
        app: ASGIApp,
        settings: Settings,
        registry: BackendRegistry | None = None,
    ) -> "ReauthMiddleware":
        dispatcher = load_dispatcher(settings, registry or create_registry())
        return cls(
            app,
            dispatcher,
            unmatched=settings.reauth.unmatched,
            realm=settings.reauth.realm,
        )

    async def __call__(self, scope: Scope, receive: ASGIReceive, send: ASGISend):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        decision = await self.dispatcher.authenticate(Request(scope))

        if decision is None:
            if self.unmatched == UnmatchedPolicy.ALLOW:
                return await self.app(scope, receive, send)
            return await self._unauthorized(send)

        if decision.error is not None:
            logger.error(f"Denying {scope['path']}: {decision.error}")
            return await self._respond(send, 500, b"Internal Server Error")

        if not decision.authenticated:
            return await self._unauthorized(send)

        scope["reauth.rule"] = decision.rule.path
        return await self.app(scope, receive, send)

    async def _unauthorized(self, send: ASGISend):
        await self._respond(
            send,
            401,
            b"Unauthorized",
            [[b"www-authenticate", f'Basic realm="{self.realm}"'.encode("latin1")]],
        )

    async def _respond(
        self,
        send: ASGISend,
        status: int,
        body: bytes,
        headers: list[list[bytes]] | None = None,
    ):
        await send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": [
                    [b"content-type", b"text/plain; charset=utf-8"],
                    [b"content-length", str(len(body)).encode("latin1")],
                    *(headers or []),
                ],
            }
        )
        await send(
            {
                "type": "http.response.body",
                "body": body,
            }
        )
