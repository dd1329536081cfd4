"""Parsing helpers for catalog text and form drafts.

Catalog data is typed by hand and arrives with inconsistent formatting,
for example ``"−2"`` with a unicode minus or thresholds written as
``"8/15"``. These helpers turn such text into numbers. When the text
cannot be parsed they fall back to a default or return the input
unchanged, and they never raise.
"""

from __future__ import annotations

from battle_roster.core.constants import FEATURE_ID_PREFIX, UNICODE_MINUS_SIGNS
from battle_roster.models.templates import EnvironmentFeature, ThresholdValues
from battle_roster.models.trackers import EnvironmentFeatureEntry


def normalize_minus_signs(text: str) -> str:
    """Replace unicode minus-like characters with ASCII hyphen-minus.

    Example:
        >>> normalize_minus_signs("−3")
        '-3'
    """
    for sign in UNICODE_MINUS_SIGNS:
        text = text.replace(sign, "-")
    return text


def parse_modifier(value: str | int | None) -> int:
    """Parse an attack modifier such as ``"+2"``, ``"−1"`` or ``3``.

    Args:
        value: Raw modifier from a template or override.

    Returns:
        The integer modifier, or 0 when the value cannot be parsed.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    normalized = normalize_minus_signs(str(value)).strip().replace(" ", "")
    try:
        return int(normalized)
    except ValueError:
        return 0


def to_number(value: str | int | None, fallback: int) -> int:
    """Parse a draft form field into an integer.

    Decimal input is truncated. Blank or non-numeric input returns
    ``fallback``.
    """
    if value is None:
        return fallback
    if isinstance(value, int):
        return value
    text = normalize_minus_signs(value).strip()
    if not text:
        return fallback
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return fallback


def parse_thresholds(value: str | ThresholdValues) -> ThresholdValues | str:
    """Parse catalog thresholds.

    A ``"major/severe"`` string becomes structured thresholds. Any other
    string is free-text rules and is returned unchanged. Structured input
    passes through as-is.

    Example:
        >>> parse_thresholds("8/15")
        ThresholdValues(major=8, severe=15, massive=None)
        >>> parse_thresholds("special")
        'special'
    """
    if isinstance(value, ThresholdValues):
        return value

    parts = normalize_minus_signs(value).split("/")
    if len(parts) != 2:
        return value
    try:
        major = int(parts[0].strip())
        severe = int(parts[1].strip())
    except ValueError:
        return value
    return ThresholdValues(major=major, severe=severe)


def normalize_environment_feature(
    feature: EnvironmentFeature | str,
    index: int,
) -> EnvironmentFeatureEntry:
    """Turn a template feature into a toggleable roster entry.

    String features written as ``"Name: description"`` are split on the
    first colon. Any other string becomes the name with an empty
    description. The id depends only on the feature's position, so it is
    stable for the life of the tracker.
    """
    feature_id = f"{FEATURE_ID_PREFIX}-{index}"
    if isinstance(feature, str):
        name, sep, description = feature.partition(":")
        if sep and name.strip():
            return EnvironmentFeatureEntry(
                id=feature_id,
                name=name.strip(),
                description=description.strip(),
            )
        return EnvironmentFeatureEntry(id=feature_id, name=feature.strip())

    return EnvironmentFeatureEntry(
        id=feature_id,
        name=feature.name,
        description=feature.description,
        type=feature.type,
    )


__all__ = [
    "normalize_minus_signs",
    "parse_modifier",
    "to_number",
    "parse_thresholds",
    "normalize_environment_feature",
]
