"""
Healthcheck Middleware

ASGI middleware that answers healthcheck requests at a fixed path and
passes everything else through to the wrapped application.
"""

from typing import Mapping

import structlog
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp, Receive, Scope, Send

from healthreport.codec import dumps
from healthreport.config import DEFAULT_HEALTHCHECK_ROOT
from healthreport.models.health import Health, Healthcheck
from healthreport.services.aggregation import evaluate_healthchecks
from healthreport.timing import DEFAULT_TIMING, TimingSettings

logger = structlog.get_logger(__name__)

ALLOWED_METHODS = ("GET", "HEAD")


async def build_healthcheck_response(
    checks: Mapping[str, Healthcheck],
    timing: TimingSettings = DEFAULT_TIMING,
) -> Response:
    """
    Evaluate ``checks`` and render the aggregate as an HTTP response.

    Status is 200 when every check passed and 503 otherwise. HEAD requests
    receive the same response; the body is dropped when it is sent.
    """
    aggregate = await evaluate_healthchecks(checks, timing)
    status_code = 200 if aggregate.health is Health.HEALTHY else 503
    if status_code != 200:
        failed = [name for name, result in aggregate.checks.items() if result.health is Health.UNHEALTHY]
        logger.info("Healthcheck reporting unavailable", failed=failed)

    return Response(
        content=dumps(aggregate).encode("utf-8"),
        status_code=status_code,
        media_type="application/json",
        headers={"Cache-Control": "no-cache"},
    )


class HealthcheckMiddleware:
    """
    Serve an aggregate healthcheck at ``path``.

    - GET/HEAD on ``path``: 200 or 503 with the JSON report
    - other methods on ``path``: 405 with ``Allow: GET, HEAD``
    - anything else: forwarded to ``app``
    """

    def __init__(
        self,
        app: ASGIApp,
        checks: Mapping[str, Healthcheck],
        path: str = DEFAULT_HEALTHCHECK_ROOT,
        timing: TimingSettings = DEFAULT_TIMING,
    ):
        self.app = app
        self.checks = checks
        self.path = path
        self.timing = timing

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] != self.path:
            await self.app(scope, receive, send)
            return

        method = scope["method"]
        if method not in ALLOWED_METHODS:
            response: Response = PlainTextResponse(
                "Method Not Allowed",
                status_code=405,
                headers={"Allow": ", ".join(ALLOWED_METHODS)},
            )
        else:
            try:
                response = await build_healthcheck_response(self.checks, self.timing)
            except Exception:
                logger.exception("Healthcheck evaluation failed", path=self.path)
                raise

        await response(scope, receive, send)
