"""Shared display helpers for the Family Ledger client.

Pure functions used by DTO display properties and screens: masking,
lookup tables, HTML stripping, chip layout and attachment encoding.
"""

import base64
import html
import logging
from datetime import datetime

import bleach

logger = logging.getLogger(__name__)


SSN_MASK_PREFIX = "XXX-XX-"

BLOOD_TYPE_NAMES = {
    'A+': 'A Positive (A+)',
    'A-': 'A Negative (A-)',
    'B+': 'B Positive (B+)',
    'B-': 'B Negative (B-)',
    'AB+': 'AB Positive (AB+)',
    'AB-': 'AB Negative (AB-)',
    'O+': 'O Positive (O+)',
    'O-': 'O Negative (O-)',
}

INSURANCE_TYPE_NAMES = {
    'health': 'Health Insurance',
    'dental': 'Dental Insurance',
    'vision': 'Vision Insurance',
    'life': 'Life Insurance',
    'auto': 'Auto Insurance',
    'home': 'Home Insurance',
    'renters': 'Renters Insurance',
    'umbrella': 'Umbrella Insurance',
    'disability': 'Disability Insurance',
    'long_term_care': 'Long Term Care Insurance',
    'pet': 'Pet Insurance',
    'travel': 'Travel Insurance',
    'other': 'Other Insurance',
}


def mask_ssn(value):
    """Mask a social security number down to its last four characters.

    Args:
        value (str or None): Raw document number

    Returns:
        str: ``XXX-XX-`` followed by the last four characters, or
            ``XXX-XX-****`` when the value is missing or too short.
    """
    if not value or len(value) < 4:
        return f"{SSN_MASK_PREFIX}****"
    return f"{SSN_MASK_PREFIX}{value[-4:]}"


def blood_type_display_name(value):
    """Human-readable blood type; exact match first, then upper-cased."""
    if value is None:
        return None
    return BLOOD_TYPE_NAMES.get(value) or BLOOD_TYPE_NAMES.get(value.upper())


def insurance_type_name(value):
    """Display name for an insurance type code, with a capitalized fallback."""
    if not value:
        return 'Insurance'
    if value in INSURANCE_TYPE_NAMES:
        return INSURANCE_TYPE_NAMES[value]
    return f"{value.capitalize()} Insurance"


def strip_html(text):
    """Remove all markup from rich-text notes and return plain, trimmed text."""
    if text is None:
        return None
    cleaned = bleach.clean(text, tags=[], attributes={}, strip=True)
    return html.unescape(cleaned).strip()


def progress_fraction(percentage):
    """Convert a percentage into a progress bar fraction clamped to [0, 1]."""
    if percentage is None:
        return 0.0
    return max(0.0, min(percentage / 100.0, 1.0))


def encode_data_uri(data, mime_type='image/jpeg'):
    """Encode raw attachment bytes as a base64 data URI for JSON upload."""
    if not data:
        raise ValueError("Attachment data is empty")
    encoded = base64.b64encode(data).decode('ascii')
    return f"data:{mime_type};base64,{encoded}"


def format_display_date(value, pad_day=False):
    """Format an ISO-8601 date or timestamp as ``Jan 5, 2024``.

    Returns None when the value cannot be parsed.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unparseable date value: {value!r}")
        return None
    day = f"{parsed.day:02d}" if pad_day else str(parsed.day)
    return f"{parsed:%b} {day}, {parsed.year}"


def flow_layout(sizes, max_width, spacing=8.0):
    """Place chips left-to-right, wrapping to a new row on overflow.

    A chip only wraps when it would overflow *and* it is not the first chip
    on its row, so an oversized chip still gets a row of its own.

    Args:
        sizes (list): ``(width, height)`` of each chip in order
        max_width (float): Available row width
        spacing (float): Gap between chips and between rows

    Returns:
        tuple: ``(positions, (width, height))`` where positions holds the
            top-left ``(x, y)`` of each chip.
    """
    positions = []
    x = 0.0
    y = 0.0
    row_height = 0.0
    total_width = 0.0

    for width, height in sizes:
        if x + width > max_width and x > 0:
            x = 0.0
            y += row_height + spacing
            row_height = 0.0
        positions.append((x, y))
        row_height = max(row_height, height)
        x += width + spacing
        total_width = max(total_width, x - spacing)

    return positions, (total_width, y + row_height)
