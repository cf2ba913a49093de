"""
Browser gate middleware.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.logging import get_logger, set_user_agent
from shared.metrics import MetricsCollector
from .domain.config import GateConfig
from .domain.gate import Decision, REDIRECT_STATUS_CODE, decide
from .rules.models import BrowserDescriptor
from .useragent.parser import parse_user_agent

STATE_ATTRIBUTE = "browser_gate"


@dataclass(frozen=True)
class BrowserGateState:
    """Annotation attached to ``request.state.browser_gate``."""
    supported: bool
    browser: str
    version: str
    decision: Decision

    def to_dict(self):
        return {
            "supported": self.supported,
            "browser": self.browser,
            "version": self.version,
        }


class BrowserGateMiddleware(BaseHTTPMiddleware):
    """Annotate requests with browser support and redirect unsupported ones."""

    def __init__(
        self,
        app,
        config: GateConfig,
        parser: Callable[[Optional[str]], BrowserDescriptor] = parse_user_agent,
        metrics: Optional[MetricsCollector] = None,
    ):
        super().__init__(app)
        self.config = config
        self.parser = parser
        self.metrics = metrics
        self.logger = get_logger("browser_gate.middleware")

    async def dispatch(self, request: Request, call_next):
        user_agent = request.headers.get("user-agent", "")
        set_user_agent(user_agent)

        descriptor = self.parser(user_agent)
        path = request.url.path
        decision = decide(descriptor, path, self.config)

        setattr(request.state, STATE_ATTRIBUTE, BrowserGateState(
            supported=decision.supported,
            browser=descriptor.vendor,
            version=descriptor.version,
            decision=decision,
        ))

        if self.metrics is not None:
            self.metrics.record_gate_decision(decision.supported, decision.short_circuit)

        if decision.short_circuit:
            self.logger.info(
                "Unsupported browser redirected",
                path=path,
                browser=descriptor.vendor,
                version=descriptor.version,
                location=decision.redirect_to
            )
            return RedirectResponse(url=decision.redirect_to, status_code=REDIRECT_STATUS_CODE)

        if not decision.supported:
            self.logger.debug(
                "Unsupported browser forwarded",
                path=path,
                browser=descriptor.vendor,
                version=descriptor.version
            )

        return await call_next(request)


def get_browser_gate(request: Request) -> Optional[BrowserGateState]:
    """Return the gate annotation for a request, if the middleware ran."""
    return getattr(request.state, STATE_ATTRIBUTE, None)
