"""
Gate configuration and per-request decisions.
"""

from .config import GateConfig, GateConfigBuilder, build_gate_config, load_rules_file
from .gate import Decision, REDIRECT_STATUS_CODE, decide

__all__ = [
    "Decision",
    "GateConfig",
    "GateConfigBuilder",
    "REDIRECT_STATUS_CODE",
    "build_gate_config",
    "decide",
    "load_rules_file",
]
