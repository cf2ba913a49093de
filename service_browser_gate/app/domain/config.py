"""
Gate configuration: a mutable builder for setup and a frozen snapshot for serving.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple, Union

import yaml

from shared.config import GateSettings
from shared.errors import GateConfigurationError
from shared.logging import get_logger
from ..rules.engine import RuleSet
from ..rules.models import DefaultPredicate, MinVersion, Predicate, Rule

logger = get_logger("browser_gate.config")

PathPattern = Union[str, Pattern[str]]


@dataclass(frozen=True)
class GateConfig:
    """Read-only gate configuration shared by all requests."""
    rule_set: RuleSet = field(default_factory=RuleSet)
    location: Optional[str] = None
    exclusions: Tuple[Pattern[str], ...] = ()


class GateConfigBuilder:
    """Fluent builder for :class:`GateConfig`.

    Every method returns the builder. ``build()`` takes a snapshot; later
    calls on the builder do not change configs already built.
    """

    def __init__(self):
        self._rules: List[Rule] = []
        self._location: Optional[str] = None
        self._exclusions: List[Pattern[str]] = []

    def default(self, predicate: DefaultPredicate, name: Optional[str] = None) -> "GateConfigBuilder":
        """Add a predicate that may return None to abstain."""
        self._require_callable(predicate)
        self._rules.append(Rule.default(predicate, name=name))
        return self

    def supported(self, vendor: str, min_version: MinVersion, name: Optional[str] = None) -> "GateConfigBuilder":
        """Require a minimum version for a vendor, or pass False to disable it."""
        if not isinstance(vendor, str) or not vendor:
            raise GateConfigurationError("Vendor must be a non-empty string", {"vendor": vendor})
        if min_version is not False and not isinstance(min_version, str):
            raise GateConfigurationError(
                "Minimum version must be a version string or False",
                {"vendor": vendor, "min_version": repr(min_version)}
            )
        self._rules.append(Rule.vendor_version(vendor, min_version, name=name))
        return self

    def predicate(self, predicate: Predicate, name: Optional[str] = None) -> "GateConfigBuilder":
        """Add a predicate whose result always decides."""
        self._require_callable(predicate)
        self._rules.append(Rule.with_predicate(predicate, name=name))
        return self

    def location(self, path: Optional[str]) -> "GateConfigBuilder":
        """Set the fallback page unsupported browsers are redirected to."""
        if path is not None and not isinstance(path, str):
            raise GateConfigurationError("Location must be a path string", {"location": repr(path)})
        self._location = path
        return self

    def exclude(self, *patterns: PathPattern) -> "GateConfigBuilder":
        """Exempt matching request paths from the redirect."""
        for pattern in patterns:
            self._exclusions.append(self._compile(pattern))
        return self

    def build(self) -> GateConfig:
        config = GateConfig(
            rule_set=RuleSet(self._rules),
            location=self._location,
            exclusions=tuple(self._exclusions),
        )
        logger.info(
            "Gate configuration built",
            rules=len(config.rule_set),
            location=config.location,
            exclusions=[p.pattern for p in config.exclusions],
        )
        return config

    @staticmethod
    def _require_callable(predicate: Any) -> None:
        if not callable(predicate):
            raise GateConfigurationError("Rule predicate must be callable", {"predicate": repr(predicate)})

    @staticmethod
    def _compile(pattern: PathPattern) -> Pattern[str]:
        if isinstance(pattern, re.Pattern):
            return pattern
        try:
            return re.compile(pattern)
        except (re.error, TypeError) as e:
            raise GateConfigurationError("Invalid exclusion pattern", {"pattern": repr(pattern), "error": str(e)})


def load_rules_file(builder: GateConfigBuilder, path: Union[str, Path]) -> GateConfigBuilder:
    """Apply a YAML rules document to a builder.

    Example::

        location: /browser.html
        exclude:
          - ^/assets
        rules:
          - vendor: Chrome
            min_version: "7.1"
          - vendor: Firefox
            min_version: false
    """
    with open(path, "r", encoding="utf-8") as f:
        document: Dict[str, Any] = yaml.safe_load(f) or {}

    if not isinstance(document, dict):
        raise GateConfigurationError("Rules file must contain a mapping", {"path": str(path)})

    for entry in document.get("rules") or []:
        if not isinstance(entry, dict) or "vendor" not in entry:
            raise GateConfigurationError("Rule entries need a vendor", {"path": str(path), "entry": repr(entry)})
        min_version = entry.get("min_version", False)
        # YAML reads 7.1 as a float; versions are compared as text.
        if isinstance(min_version, (int, float)) and not isinstance(min_version, bool):
            min_version = str(min_version)
        builder.supported(entry["vendor"], min_version, name=entry.get("name"))

    if "location" in document:
        builder.location(document["location"])

    builder.exclude(*(document.get("exclude") or []))

    logger.info("Rules file loaded", path=str(path), rules=len(document.get("rules") or []))
    return builder


def build_gate_config(
    settings: GateSettings,
    configure: Optional[Callable[[GateConfigBuilder], Any]] = None,
) -> GateConfig:
    """Assemble the gate configuration from settings and code.

    The rules file is applied first, then the location and exclusions from
    settings, then ``configure`` for rules that need Python callables.
    """
    builder = GateConfigBuilder()

    if settings.gate_rules_file:
        load_rules_file(builder, settings.gate_rules_file)

    if settings.gate_location:
        builder.location(settings.gate_location)

    builder.exclude(*settings.gate_exclude)

    if configure is not None:
        configure(builder)

    return builder.build()
