"""
Rules package.

Defines the rule variants and the evaluation engine used by the gate.
Rules are consulted in insertion order and the first decisive rule wins;
when none decides, the browser is supported.

Modules of interest:
- version: Dotted version comparison.
- models: Browser descriptor, rule variants and evaluation results.
- engine: The ordered rule set.
"""

from .engine import RuleSet
from .models import BrowserDescriptor, Rule, RuleEvaluation, RuleKind, Verdict
from .version import VersionComparison, compare_versions, version_gte

__all__ = [
    "BrowserDescriptor",
    "Rule",
    "RuleEvaluation",
    "RuleKind",
    "RuleSet",
    "Verdict",
    "VersionComparison",
    "compare_versions",
    "version_gte",
]
