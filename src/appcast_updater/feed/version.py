"""
Version string comparison for appcast feeds.

Implements the de-facto standard comparator used by Sparkle-style update
feeds. Version strings are split into runs of digits, periods and other
characters, and the runs are compared pairwise. Trailing pre-release tags
sort below the bare version ("1.5b3" < "1.5") while trailing numeric
components sort above it ("1.5.1" > "1.5").

Example:
    >>> compare_versions("1.2.0", "1.2rc1")
    1
    >>> compare_versions("1.5", "1.5b3")
    1
    >>> compare_versions("1.0", "1.0.0")
    -1
"""

import re
from enum import Enum
from typing import List


class CharType(Enum):
    """Classification of a single character in a version string."""

    NUMBER = "number"
    PERIOD = "period"
    STRING = "string"


_LEADING_DIGITS = re.compile(r"[0-9]+")


def classify_char(char: str) -> CharType:
    """
    Classify one character of a version string.

    Only ASCII digits count as numbers; anything that is neither a digit
    nor a period is part of a string fragment ("beta", "rc", "-").

    Args:
        char: A single character

    Returns:
        The character's CharType
    """
    if char == ".":
        return CharType.PERIOD
    if "0" <= char <= "9":
        return CharType.NUMBER
    return CharType.STRING


def split_version_string(version: str) -> List[str]:
    """
    Split a version string into components.

    A component is a continuous run of characters of the same class.
    A period always forms a component of its own, so ".." yields two
    separate period components.

    Examples:
        "1.20rc3" -> ["1", ".", "20", "rc", "3"]
        "1..2"    -> ["1", ".", ".", "2"]
        ""        -> []

    Args:
        version: Version string to split

    Returns:
        List of components in order of appearance
    """
    parts: List[str] = []
    if not version:
        return parts

    current = version[0]
    prev_type = classify_char(version[0])

    for char in version[1:]:
        char_type = classify_char(char)
        if char_type != prev_type or prev_type == CharType.PERIOD:
            parts.append(current)
            current = char
        else:
            current += char
        prev_type = char_type

    parts.append(current)
    return parts


def _to_int(component: str) -> int:
    """Parse the leading digits of a component, 0 if there are none."""
    match = _LEADING_DIGITS.match(component)
    return int(match.group()) if match else 0


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def compare_versions(ver_a: str, ver_b: str) -> int:
    """
    Compare two version strings.

    Args:
        ver_a: First version string
        ver_b: Second version string

    Returns:
        -1 if ver_a < ver_b
         0 if ver_a == ver_b
         1 if ver_a > ver_b
    """
    parts_a = split_version_string(ver_a)
    parts_b = split_version_string(ver_b)

    n = min(len(parts_a), len(parts_b))
    for a, b in zip(parts_a, parts_b):
        type_a = classify_char(a[0])
        type_b = classify_char(b[0])

        if type_a == type_b:
            if type_a == CharType.STRING:
                if a != b:
                    return -1 if a < b else 1
            elif type_a == CharType.NUMBER:
                result = _sign(_to_int(a) - _to_int(b))
                if result != 0:
                    return result
        elif type_a != CharType.STRING and type_b == CharType.STRING:
            # 1.2.0 > 1.2rc1
            return 1
        elif type_a == CharType.STRING and type_b != CharType.STRING:
            # 1.2rc1 < 1.2.0
            return -1
        else:
            # Number against period; the period is invalid
            return 1 if type_a == CharType.NUMBER else -1

    if len(parts_a) == len(parts_b):
        return 0

    # First component that only the longer version has
    if len(parts_a) > len(parts_b):
        missing_type = classify_char(parts_a[n][0])
        shorter_result, longer_result = -1, 1
    else:
        missing_type = classify_char(parts_b[n][0])
        shorter_result, longer_result = 1, -1

    if missing_type == CharType.STRING:
        # 1.5 > 1.5b3
        return shorter_result
    # 1.5.1 > 1.5
    return longer_result


def is_newer(candidate: str, current: str) -> bool:
    """
    Check whether a candidate version is strictly newer than the current one.

    Args:
        candidate: Version offered by the feed (e.g. '2.0')
        current: Version currently installed (e.g. '1.9.3')

    Returns:
        True if candidate sorts above current
    """
    return compare_versions(candidate, current) > 0
