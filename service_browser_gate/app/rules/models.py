"""
Rule data models for the Browser Gate.
"""

from typing import Any, Callable, FrozenSet, Literal, Optional, Union
from dataclasses import dataclass, field
from enum import Enum


class RuleKind(str, Enum):
    """Rule variants."""
    DEFAULT = "default"
    VENDOR_VERSION = "vendor_version"
    PREDICATE = "predicate"


class Verdict(str, Enum):
    """Outcome of a single rule."""
    UNDECIDED = "undecided"
    SUPPORTED = "supported"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_bool(cls, value: bool) -> "Verdict":
        return cls.SUPPORTED if value else cls.UNSUPPORTED


@dataclass(frozen=True)
class BrowserDescriptor:
    """Structured view of a request's user agent.

    Unknown values are empty strings and an empty flag set, never None.
    """
    vendor: str = ""
    version: str = ""
    flags: FrozenSet[str] = field(default_factory=frozenset)
    user_agent: str = ""

    def has_flag(self, flag: str) -> bool:
        return flag in self.flags

    @property
    def is_mobile(self) -> bool:
        return "mobile" in self.flags

    @property
    def is_safari(self) -> bool:
        return "safari" in self.flags


# Default predicates may return None to abstain.
DefaultPredicate = Callable[[BrowserDescriptor], Optional[bool]]
Predicate = Callable[[BrowserDescriptor], Any]
MinVersion = Union[str, Literal[False]]


@dataclass(frozen=True)
class Rule:
    """One entry of the ordered rule list.

    ``kind`` selects which of the remaining fields apply: ``vendor`` and
    ``min_version`` for vendor rules, ``predicate`` for the two callable
    variants. ``min_version`` is either a dotted version or ``False`` to
    mark the vendor as unsupported outright.
    """
    kind: RuleKind
    vendor: Optional[str] = None
    min_version: MinVersion = False
    predicate: Optional[Predicate] = None
    name: Optional[str] = None

    @classmethod
    def default(cls, predicate: DefaultPredicate, name: Optional[str] = None) -> "Rule":
        return cls(kind=RuleKind.DEFAULT, predicate=predicate, name=name)

    @classmethod
    def vendor_version(cls, vendor: str, min_version: MinVersion, name: Optional[str] = None) -> "Rule":
        return cls(kind=RuleKind.VENDOR_VERSION, vendor=vendor, min_version=min_version, name=name)

    @classmethod
    def with_predicate(cls, predicate: Predicate, name: Optional[str] = None) -> "Rule":
        return cls(kind=RuleKind.PREDICATE, predicate=predicate, name=name)

    def describe(self) -> str:
        """Human-readable label used in logs and diagnostics."""
        if self.name:
            return self.name
        if self.kind == RuleKind.VENDOR_VERSION:
            if self.min_version is False:
                return f"{self.vendor} disabled"
            return f"{self.vendor} >= {self.min_version}"
        label = getattr(self.predicate, "__name__", "predicate")
        return f"{self.kind.value}:{label}"


@dataclass(frozen=True)
class RuleEvaluation:
    """Result of evaluating a descriptor against a rule set."""
    supported: bool
    reason: str
    matched_rule: Optional[int] = None
    rule: Optional[Rule] = None
