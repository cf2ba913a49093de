"""
Rule evaluation engine for the Browser Gate.
"""

from typing import Dict, Iterable, Iterator, Tuple

from shared.logging import get_logger
from .models import BrowserDescriptor, Rule, RuleKind, RuleEvaluation, Verdict
from .version import version_gte


class RuleSet:
    """Ordered, immutable collection of browser rules.

    Rules are consulted in insertion order and the first one that reaches
    a verdict wins. Several vendor rules for the same vendor are allowed;
    only the first is ever reached. When nothing decides, the browser is
    supported, so unknown browsers are let through.

    Exceptions raised by predicates are not caught.
    """

    def __init__(self, rules: Iterable[Rule] = ()):
        self._rules: Tuple[Rule, ...] = tuple(rules)
        self.logger = get_logger("browser_gate.rule_set")

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def evaluate(self, descriptor: BrowserDescriptor) -> bool:
        """Return whether the described browser is supported."""
        return self.explain(descriptor).supported

    def explain(self, descriptor: BrowserDescriptor) -> RuleEvaluation:
        """Evaluate rules and report which one decided."""
        for index, rule in enumerate(self._rules):
            verdict = self._evaluate_rule(rule, descriptor)
            if verdict == Verdict.UNDECIDED:
                continue

            result = RuleEvaluation(
                supported=(verdict == Verdict.SUPPORTED),
                reason=f"Rule '{rule.describe()}' matched",
                matched_rule=index,
                rule=rule,
            )
            self.logger.debug(
                "Rule evaluation result",
                rule_index=index,
                rule=rule.describe(),
                vendor=descriptor.vendor,
                version=descriptor.version,
                supported=result.supported,
            )
            return result

        return RuleEvaluation(supported=True, reason="No rule matched")

    def _evaluate_rule(self, rule: Rule, descriptor: BrowserDescriptor) -> Verdict:
        """Evaluate a single rule."""
        if rule.kind == RuleKind.DEFAULT:
            outcome = rule.predicate(descriptor)
            if outcome is None:
                return Verdict.UNDECIDED
            return Verdict.from_bool(bool(outcome))

        elif rule.kind == RuleKind.VENDOR_VERSION:
            if descriptor.vendor != rule.vendor:
                return Verdict.UNDECIDED
            if rule.min_version is False:
                return Verdict.UNSUPPORTED
            return Verdict.from_bool(version_gte(descriptor.version, rule.min_version))

        elif rule.kind == RuleKind.PREDICATE:
            return Verdict.from_bool(bool(rule.predicate(descriptor)))

        raise ValueError(f"Unknown rule kind: {rule.kind!r}")

    def stats(self) -> Dict[str, int]:
        """Count rules per kind."""
        counts = {kind.value: 0 for kind in RuleKind}
        for rule in self._rules:
            counts[rule.kind.value] += 1
        counts["total"] = len(self._rules)
        return counts
