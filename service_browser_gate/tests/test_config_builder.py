"""
Unit tests for the gate configuration builder and loaders.
"""

import re
import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_browser_gate.app.domain.config import (
    GateConfig, GateConfigBuilder, build_gate_config, load_rules_file
)
from service_browser_gate.app.rules.models import RuleKind
from shared.config import get_gate_settings
from shared.errors import GateConfigurationError
from shared.test_helpers import create_descriptor


class TestGateConfigBuilder:
    """Test cases for GateConfigBuilder."""

    def test_empty_build(self):
        config = GateConfigBuilder().build()

        assert isinstance(config, GateConfig)
        assert len(config.rule_set) == 0
        assert config.location is None
        assert config.exclusions == ()

    def test_fluent_build_keeps_order(self):
        config = (
            GateConfigBuilder()
            .default(lambda browser: None)
            .supported("Firefox", False)
            .supported("Chrome", "7.1")
            .predicate(lambda browser: True)
            .location("/browser.html")
            .exclude(r"^/assets")
            .build()
        )

        assert [rule.kind for rule in config.rule_set] == [
            RuleKind.DEFAULT,
            RuleKind.VENDOR_VERSION,
            RuleKind.VENDOR_VERSION,
            RuleKind.PREDICATE,
        ]
        assert config.location == "/browser.html"
        assert [p.pattern for p in config.exclusions] == ["^/assets"]

    def test_config_is_frozen(self):
        config = GateConfigBuilder().location("/browser.html").build()

        with pytest.raises(AttributeError):
            config.location = "/other"

    def test_snapshot_unaffected_by_later_changes(self):
        builder = GateConfigBuilder().supported("Chrome", "7.1")
        config = builder.build()

        builder.supported("Firefox", False).location("/browser.html")

        assert len(config.rule_set) == 1
        assert config.location is None
        assert config.rule_set.evaluate(create_descriptor("Firefox", "10")) is True

    def test_compiled_pattern_kept(self):
        pattern = re.compile(r"^/assets", re.IGNORECASE)

        config = GateConfigBuilder().exclude(pattern).build()

        assert config.exclusions[0] is pattern

    def test_conflicting_rules_accepted(self):
        """Duplicates are not rejected; the first one decides."""
        config = GateConfigBuilder().supported("Chrome", "20").supported("Chrome", "5").build()

        assert config.rule_set.evaluate(create_descriptor("Chrome", "10")) is False

    @pytest.mark.parametrize("min_version", [True, 7.1, None])
    def test_invalid_min_version(self, min_version):
        with pytest.raises(GateConfigurationError) as exc_info:
            GateConfigBuilder().supported("Chrome", min_version)

        assert exc_info.value.code == "GATE_CONFIGURATION_ERROR"

    def test_empty_vendor(self):
        with pytest.raises(GateConfigurationError):
            GateConfigBuilder().supported("", "7.1")

    def test_non_callable_predicate(self):
        with pytest.raises(GateConfigurationError):
            GateConfigBuilder().predicate("not callable")

        with pytest.raises(GateConfigurationError):
            GateConfigBuilder().default(None)

    def test_invalid_pattern(self):
        with pytest.raises(GateConfigurationError) as exc_info:
            GateConfigBuilder().exclude("(unclosed")

        assert exc_info.value.details["pattern"] == "'(unclosed'"

    def test_non_string_location(self):
        with pytest.raises(GateConfigurationError) as exc_info:
            GateConfigBuilder().location(123)

        assert exc_info.value.details["location"] == "123"


class TestRulesFile:
    """Test cases for YAML rule loading."""

    @pytest.fixture
    def rules_file(self, tmp_path):
        path = tmp_path / "browsers.yaml"
        path.write_text(
            "location: /browser.html\n"
            "exclude:\n"
            "  - ^/assets\n"
            "rules:\n"
            "  - vendor: Firefox\n"
            "    min_version: false\n"
            "  - vendor: Chrome\n"
            "    min_version: \"7.1\"\n"
            "  - vendor: Safari\n"
            "    min_version: 12\n"
            "    name: modern safari\n",
            encoding="utf-8"
        )
        return path

    def test_load_rules_file(self, rules_file):
        config = load_rules_file(GateConfigBuilder(), rules_file).build()

        rules = list(config.rule_set)
        assert [(r.vendor, r.min_version) for r in rules] == [
            ("Firefox", False),
            ("Chrome", "7.1"),
            ("Safari", "12"),
        ]
        assert rules[2].name == "modern safari"
        assert config.location == "/browser.html"
        assert [p.pattern for p in config.exclusions] == ["^/assets"]

    def test_empty_rules_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        config = load_rules_file(GateConfigBuilder(), path).build()

        assert len(config.rule_set) == 0

    def test_rules_file_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- Chrome\n", encoding="utf-8")

        with pytest.raises(GateConfigurationError):
            load_rules_file(GateConfigBuilder(), path)

    def test_rule_without_vendor(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("rules:\n  - min_version: \"7\"\n", encoding="utf-8")

        with pytest.raises(GateConfigurationError):
            load_rules_file(GateConfigBuilder(), path)

    def test_non_string_location_in_file(self, tmp_path):
        path = tmp_path / "location.yaml"
        path.write_text("location: 123\n", encoding="utf-8")

        with pytest.raises(GateConfigurationError):
            load_rules_file(GateConfigBuilder(), path)


class TestBuildGateConfig:
    """Test cases for build_gate_config."""

    def test_from_settings(self, rules_file_path):
        settings = get_gate_settings(
            gate_rules_file=str(rules_file_path),
            gate_location="/unsupported",
            gate_exclude=["^/health"],
        )

        config = build_gate_config(settings, lambda builder: builder.predicate(lambda browser: True))

        assert config.location == "/unsupported"
        assert [p.pattern for p in config.exclusions] == ["^/health"]
        assert [r.kind for r in config.rule_set] == [RuleKind.VENDOR_VERSION, RuleKind.PREDICATE]

    def test_without_rules_file(self):
        config = build_gate_config(get_gate_settings(gate_location=None, gate_exclude=[], gate_rules_file=None))

        assert len(config.rule_set) == 0
        assert config.location is None

    @pytest.fixture
    def rules_file_path(self, tmp_path):
        path = tmp_path / "browsers.yaml"
        path.write_text("rules:\n  - vendor: Firefox\n    min_version: false\n", encoding="utf-8")
        return path
