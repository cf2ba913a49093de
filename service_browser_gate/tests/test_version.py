"""
Unit tests for version comparison.
"""

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_browser_gate.app.rules.version import VersionComparison, compare_versions, version_gte


class TestCompareVersions:
    """Test cases for compare_versions."""

    @pytest.mark.parametrize("a, b, expected", [
        ("7.1.1", "7.1", VersionComparison.GREATER),
        ("7.1", "7.1.1", VersionComparison.LESS),
        ("7", "7.0.0", VersionComparison.EQUAL),
        ("7.0.0", "7", VersionComparison.EQUAL),
        ("10.0", "9.9", VersionComparison.GREATER),
        ("6.9", "7", VersionComparison.LESS),
    ])
    def test_numeric_segments(self, a, b, expected):
        """Numeric segments compare as integers, missing ones as zero."""
        assert compare_versions(a, b) == expected

    def test_numeric_not_lexicographic(self):
        """"10" is greater than "9" even though it sorts first as text."""
        assert compare_versions("10", "9") == VersionComparison.GREATER

    def test_non_numeric_segment_falls_back_to_string(self):
        """Mixed segments are compared as strings and never raise."""
        assert compare_versions("10.0b2", "10.0b1") == VersionComparison.GREATER
        assert compare_versions("1.a", "1.b") == VersionComparison.LESS
        assert compare_versions("1.a", "1.a") == VersionComparison.EQUAL

    def test_only_the_differing_segment_falls_back(self):
        """Earlier numeric segments still decide before a text segment."""
        assert compare_versions("2.beta", "10.alpha") == VersionComparison.LESS

    def test_empty_version(self):
        """Unknown versions sort below any real version."""
        assert compare_versions("", "7") == VersionComparison.LESS
        assert compare_versions("", "") == VersionComparison.EQUAL


class TestVersionGte:
    """Test cases for version_gte."""

    def test_gte_longer_version(self):
        assert version_gte("7.1.1", "7.1") is True

    def test_gte_padded_equal(self):
        assert version_gte("7", "7.0.0") is True

    def test_gte_below_minimum(self):
        assert version_gte("6.9", "7") is False

    def test_gte_boundary(self):
        assert version_gte("7.1", "7.1") is True
        assert version_gte("7.0.9", "7.1") is False
