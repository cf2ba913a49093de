"""
Per-request browser gate decision.
"""

from dataclasses import dataclass
from typing import Optional

from ..rules.models import BrowserDescriptor
from .config import GateConfig

# Temporary Redirect keeps method and body when the client follows it.
REDIRECT_STATUS_CODE = 307


@dataclass(frozen=True)
class Decision:
    """Outcome of the gate for one request."""
    supported: bool
    short_circuit: bool = False
    redirect_to: Optional[str] = None


def is_excluded(request_path: str, config: GateConfig) -> bool:
    """Check the request path against the configured exclusion patterns."""
    return any(pattern.search(request_path) for pattern in config.exclusions)


def decide(descriptor: BrowserDescriptor, request_path: str, config: GateConfig) -> Decision:
    """Decide whether to forward or redirect a request.

    Supported browsers always pass. Unsupported ones are redirected only
    when a location is configured, the path is not excluded, and the
    request is not already for the location itself. Exclusions suppress
    the redirect, not the unsupported flag.
    """
    if config.rule_set.evaluate(descriptor):
        return Decision(supported=True)

    if config.location is None:
        return Decision(supported=False)

    if is_excluded(request_path, config):
        return Decision(supported=False)

    if request_path == config.location:
        return Decision(supported=False)

    return Decision(supported=False, short_circuit=True, redirect_to=config.location)
