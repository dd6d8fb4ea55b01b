"""Tape-measure style parsing and formatting of lengths.

Plant staff enter widths and spans the way they read them off a tape:
``42 1/2``, ``5'-6 3/4"``, ``3.25'``, ``1 ft 6.75 in``.  These helpers turn
such text into decimal inches and format decimal spans back for display.
"""

from __future__ import annotations

import math
import re
from fractions import Fraction

from .constants import INCHES_PER_FOOT, SPAN_DISPLAY_DENOMINATOR, SPAN_FRACTIONS


_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+|\d*\.\d+)$")
_FRACTION_RE = re.compile(r"^[+-]?\d+\s*/\s*\d+$")
_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_FOOT_WORD_RE = re.compile(r"^([+-]?\d+(?:\.\d+)?)\s*(?:ft|feet|foot)\b(.*)$", re.IGNORECASE)
_INCH_WORD_RE = re.compile(r"(?:inches|inch|in)\.?$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _parse_decimal(value: str) -> float | None:
    if not _DECIMAL_RE.match(value):
        return None
    parsed = float(value)
    return parsed if math.isfinite(parsed) else None


def _parse_fraction(value: str) -> float | None:
    if not _FRACTION_RE.match(value):
        return None
    numerator, denominator = (float(part.strip()) for part in value.split("/"))
    if denominator == 0:
        return None
    return numerator / denominator


def _parse_inches(raw: str) -> float | None:
    """Parse the inch component: decimal, simple fraction or mixed number."""
    working = raw.strip()
    if not working:
        return 0.0

    sign = 1.0
    if working.startswith("-"):
        sign = -1.0
        working = working[1:].strip()
    elif working.startswith("+"):
        working = working[1:].strip()

    # "6-3/4" is written with a hyphen between whole and fraction
    working = re.sub(r"[–—-]", " ", working)
    working = re.sub(r"\s+", " ", working).strip()
    if not working:
        return 0.0

    mixed = _MIXED_RE.match(working)
    if mixed:
        whole, numerator, denominator = (int(g) for g in mixed.groups())
        if denominator == 0:
            return None
        return sign * (whole + numerator / denominator)

    decimal = _parse_decimal(working)
    if decimal is not None:
        return sign * decimal

    fraction = _parse_fraction(working)
    if fraction is not None:
        return sign * fraction

    return None


def parse_measurement(text: str) -> float | None:
    """Parse a tape-measure style length into decimal inches.

    Supported forms::

        "1.375", ".5"          decimal inches
        "5/16", "42 1/2"       fractions and mixed numbers
        "1'-6 3/4\\"", "5'"    feet and inches
        "1 ft 6.75 in"         spelled-out units
        "3.25'"                decimal feet

    Parameters
    ----------
    text : str
        Raw user entry.

    Returns
    -------
    float or None
        Length in inches, or ``None`` if the text is empty or cannot be read.
    """
    working = (text or "").strip()
    if not working:
        return None

    working = re.sub(r"[’′‹›]", "'", working)
    working = re.sub(r"[“”″〞]", '"', working)
    working = re.sub(r"\s+", " ", working).strip()

    feet = 0.0
    has_feet = False
    inches_part = working

    foot_match = _FOOT_WORD_RE.match(inches_part)
    if foot_match:
        feet = float(foot_match.group(1))
        has_feet = True
        inches_part = foot_match.group(2).strip()
    elif "'" in inches_part:
        foot_text, _, inches_part = inches_part.partition("'")
        has_feet = True
        foot_text = foot_text.strip()
        if foot_text:
            foot_value = _parse_decimal(foot_text)
            if foot_value is None:
                return None
            feet = foot_value
        inches_part = inches_part.strip()

    inches_part = re.sub(r"^[\s–—-]+", "", inches_part) if has_feet else inches_part
    inches_part = _INCH_WORD_RE.sub("", inches_part).strip()
    inches_part = inches_part.replace('"', "").strip()

    inches = _parse_inches(inches_part)
    if inches is None:
        return None
    return feet * INCHES_PER_FOOT + inches


# ---------------------------------------------------------------------------
# Span entry (feet / inches / eighths)
# ---------------------------------------------------------------------------

def combine_span_parts(feet: float, inches: float = 0.0, fraction: str = "0") -> float:
    """Feet, whole inches and an eighth-inch fraction to decimal feet."""
    if fraction not in SPAN_FRACTIONS:
        raise ValueError(f"fraction must be one of {SPAN_FRACTIONS}, got {fraction!r}")
    fraction_value = float(Fraction(fraction)) if fraction != "0" else 0.0
    return (feet or 0.0) + ((inches or 0.0) + fraction_value) / INCHES_PER_FOOT


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

def format_span_display(span_ft: float) -> str:
    """Format decimal feet as ``40'-7" (40.583 ft)``, rounded to 1/16"."""
    feet = math.floor(span_ft)
    remaining = (span_ft - feet) * INCHES_PER_FOOT
    whole_inches = math.floor(remaining)
    sixteenths = round((remaining - whole_inches) * SPAN_DISPLAY_DENOMINATOR)

    if sixteenths == SPAN_DISPLAY_DENOMINATOR:
        whole_inches += 1
        sixteenths = 0
    if whole_inches == 12:
        feet += 1
        whole_inches = 0

    if whole_inches > 0 and sixteenths > 0:
        inch_text = f'{whole_inches} {sixteenths}/{SPAN_DISPLAY_DENOMINATOR}"'
    elif whole_inches > 0:
        inch_text = f'{whole_inches}"'
    elif sixteenths > 0:
        inch_text = f'{sixteenths}/{SPAN_DISPLAY_DENOMINATOR}"'
    else:
        inch_text = '0"'

    return f"{feet}'-{inch_text} ({span_ft:.3f} ft)"


def format_inches_fraction(value: float) -> str:
    """Decimal inches to the nearest 1/16", reduced (``0.375 -> 3/8"``)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    sixteenths = round((magnitude - whole) * 16)

    if sixteenths == 0:
        text = f'{whole}"' if whole > 0 else "0"
    elif sixteenths == 16:
        text = f'{whole + 1}"'
    else:
        frac = Fraction(sixteenths, 16)
        frac_text = f"{frac.numerator}/{frac.denominator}"
        text = f'{whole} {frac_text}"' if whole > 0 else f'{frac_text}"'

    return f"-{text}" if value < 0 and text != "0" else text
