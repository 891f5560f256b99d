"""
Tests for the version comparator.

Covers:
- Splitting version strings into components
- Numeric, string and mixed component comparison
- Trailing pre-release tags and trailing numeric components
- Lenient handling of odd input
- Ordering properties (reflexivity, antisymmetry, transitivity)
"""

import itertools

import pytest

from appcast_updater.feed.version import (
    CharType,
    _to_int,
    classify_char,
    compare_versions,
    is_newer,
    split_version_string,
)


# ===================================================================
# Test 1: Splitting
# ===================================================================

class TestSplitVersionString:
    """Tests for split_version_string()."""

    def test_dotted_numeric(self):
        assert split_version_string("1.2.3") == ["1", ".", "2", ".", "3"]

    def test_prerelease_suffix(self):
        assert split_version_string("1.20rc3") == ["1", ".", "20", "rc", "3"]

    def test_consecutive_periods_are_separate(self):
        """Each period is its own component."""
        assert split_version_string("1..2") == ["1", ".", ".", "2"]

    def test_empty_string(self):
        assert split_version_string("") == []

    def test_non_ascii_digits_are_string_fragments(self):
        assert classify_char("٣") == CharType.STRING
        assert classify_char("7") == CharType.NUMBER
        assert classify_char(".") == CharType.PERIOD


# ===================================================================
# Test 2: Documented orderings
# ===================================================================

class TestCompareVersions:
    """Tests for compare_versions()."""

    @pytest.mark.parametrize(
        "ver_a, ver_b, expected",
        [
            ("1.2.0", "1.2rc1", 1),
            ("1.2rc1", "1.2.0", -1),
            ("1.5", "1.5b3", 1),
            ("1.5b3", "1.5", -1),
            ("1.5.1", "1.5", 1),
            ("2.0", "2.0", 0),
            ("1.0", "1.0.0", -1),
            ("1.10", "1.9", 1),
            ("1.0b2", "1.0b10", -1),
            ("1.0a1", "1.0b1", -1),
            ("10", "9", 1),
        ],
    )
    def test_known_orderings(self, ver_a, ver_b, expected):
        assert compare_versions(ver_a, ver_b) == expected

    def test_numbers_compare_numerically(self):
        """Leading zeros do not make a number larger."""
        assert compare_versions("1.010", "1.10") == 0

    def test_number_beats_period(self):
        """A number where the other version has a stray period wins."""
        assert compare_versions("1.2", "1..") == 1
        assert compare_versions("1..", "1.2") == -1

    def test_empty_against_version(self):
        assert compare_versions("", "") == 0
        assert compare_versions("", "1.0") == -1
        assert compare_versions("1.0", "") == 1

    def test_empty_against_string_suffix(self):
        """A lone pre-release tag sorts below nothing at all."""
        assert compare_versions("", "beta") == 1

    def test_huge_numbers_do_not_fail(self):
        assert compare_versions("1.99999999999999999999", "1.2") == 1

    def test_numeric_conversion_ignores_non_ascii_digits(self):
        """Conversion agrees with classification: only 0-9 are digits."""
        arabic_three = "٣"

        assert _to_int(arabic_three) == 0
        assert _to_int("12" + arabic_three) == 12
        assert split_version_string("1." + arabic_three) == ["1", ".", arabic_three]

    def test_is_newer(self):
        assert is_newer("2.0", "1.9.3") is True
        assert is_newer("2.0", "2.0") is False
        assert is_newer("2.0b1", "2.0") is False


# ===================================================================
# Test 3: Ordering properties
# ===================================================================

SAMPLE_VERSIONS = [
    "0.9",
    "1.0",
    "1.0.0",
    "1.0.1",
    "1.0b1",
    "1.0b2",
    "1.2rc1",
    "1.2.0",
    "1.5",
    "1.5b3",
    "1.5.1",
    "2.0",
    "2.0a1",
    "10.0",
]


class TestOrderingProperties:
    """The comparator behaves as a total order on well-formed input."""

    @pytest.mark.parametrize("version", SAMPLE_VERSIONS)
    def test_reflexive(self, version):
        assert compare_versions(version, version) == 0

    def test_antisymmetric(self):
        for a, b in itertools.product(SAMPLE_VERSIONS, repeat=2):
            assert compare_versions(a, b) == -compare_versions(b, a), (a, b)

    def test_transitive(self):
        for a, b, c in itertools.product(SAMPLE_VERSIONS, repeat=3):
            if compare_versions(a, b) > 0 and compare_versions(b, c) > 0:
                assert compare_versions(a, c) > 0, (a, b, c)
