"""
Browser Gate service.
"""

from typing import Any, Callable, Dict, List, Optional

from fastapi import Request
from pydantic import BaseModel, Field

from shared.base_service import BaseService
from shared.config import GateSettings, get_gate_settings

from .domain.config import GateConfig, GateConfigBuilder, build_gate_config
from .domain.gate import decide
from .middleware import BrowserGateMiddleware, get_browser_gate
from .useragent.parser import parse_user_agent


class BrowserCheckRequest(BaseModel):
    """Request model for a diagnostic gate check."""
    user_agent: str = Field("", description="User-Agent header to evaluate")
    path: str = Field("/", description="Request path to evaluate")


class BrowserCheckResponse(BaseModel):
    """Response model for a diagnostic gate check."""
    supported: bool
    short_circuit: bool
    redirect_to: Optional[str] = None
    browser: str
    version: str
    flags: List[str] = Field(default_factory=list)
    matched_rule: Optional[int] = None
    reason: str


class BrowserGateService(BaseService):
    """Browser gate service implementation."""

    def __init__(
        self,
        settings: Optional[GateSettings] = None,
        configure: Optional[Callable[[GateConfigBuilder], Any]] = None,
        gate_config: Optional[GateConfig] = None,
    ):
        settings = settings or get_gate_settings()
        self.gate_config = gate_config or build_gate_config(settings, configure)
        super().__init__(settings.service_name, settings.port, config=settings)

        self.logger.info(
            "Browser gate ready",
            rules=self.gate_config.rule_set.stats(),
            location=self.gate_config.location
        )

        self._setup_gate_routes()

    def _setup_middleware(self):
        """Install the gate inside the request timing middleware."""
        self.app.add_middleware(
            BrowserGateMiddleware,
            config=self.gate_config,
            metrics=self.metrics
        )
        super()._setup_middleware()

    def _setup_gate_routes(self):
        """Set up gate-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": self.service_name,
                "message": "Browser Gate",
                "version": "1.0.0",
                "rules": self.gate_config.rule_set.stats(),
                "location": self.gate_config.location,
                "exclusions": [p.pattern for p in self.gate_config.exclusions]
            }

        @self.app.get("/api/v1/browser")
        async def current_browser(request: Request) -> Dict[str, Any]:
            """Gate annotation for the calling browser."""
            state = get_browser_gate(request)
            if state is None:
                return {"supported": True, "browser": "", "version": ""}
            return state.to_dict()

        @self.app.post("/api/v1/browser/check", response_model=BrowserCheckResponse)
        async def check_browser(body: BrowserCheckRequest):
            """Evaluate an arbitrary user agent and path against the gate."""
            descriptor = parse_user_agent(body.user_agent)
            evaluation = self.gate_config.rule_set.explain(descriptor)
            decision = decide(descriptor, body.path, self.gate_config)

            return BrowserCheckResponse(
                supported=decision.supported,
                short_circuit=decision.short_circuit,
                redirect_to=decision.redirect_to,
                browser=descriptor.vendor,
                version=descriptor.version,
                flags=sorted(descriptor.flags),
                matched_rule=evaluation.matched_rule,
                reason=evaluation.reason
            )


def create_app(
    settings: Optional[GateSettings] = None,
    configure: Optional[Callable[[GateConfigBuilder], Any]] = None,
):
    """Create browser gate service application."""
    service = BrowserGateService(settings=settings, configure=configure)
    return service.app


if __name__ == "__main__":
    service = BrowserGateService()
    service.run()
