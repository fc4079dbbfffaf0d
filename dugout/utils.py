# Standard library imports
import re
import time
from datetime import date
from decimal import Decimal

# Third-party imports
from flask import current_app


def format_date(value):
    """
    Format a date for display, e.g. ``Jan 23, 2026``.

    Accepts a ``date``/``datetime`` or an ISO ``YYYY-MM-DD`` string. Strings are
    parsed as plain calendar dates so no timezone shift can move the day.

    Args:
        value: date, datetime, ISO date string or None.

    Returns:
        str: Formatted date, or an empty string for empty input.
    """
    if not value:
        return ''
    if isinstance(value, str):
        try:
            year, month, day = (int(part) for part in value[:10].split('-'))
            value = date(year, month, day)
        except ValueError:
            return value
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_phone(phone):
    """
    Format a phone number for display.

    Ten digit numbers become ``(555) 123-4567``; anything else is returned as
    entered.
    """
    if not phone:
        return ''
    cleaned = clean_phone(phone)
    if len(cleaned) == 10:
        return f"({cleaned[:3]}) {cleaned[3:6]}-{cleaned[6:]}"
    return phone


def clean_phone(phone):
    """Strip everything but digits from a phone number."""
    if not phone:
        return ''
    return re.sub(r'\D', '', phone)


def generate_sms_url(phone_numbers):
    """
    Build an ``sms:`` URL addressed to several numbers.

    Args:
        phone_numbers (list): Raw phone numbers.

    Returns:
        str or None: ``sms:5551234567,5559876543`` or None when no usable numbers.
    """
    if not phone_numbers:
        return None
    cleaned = [number for number in (clean_phone(p) for p in phone_numbers) if number]
    if not cleaned:
        return None
    # iOS uses comma, Android semicolon; comma works for both in most cases
    return f"sms:{','.join(cleaned)}"


def get_status_color(status):
    """CSS badge class for an invitation status."""
    if status == 'in':
        return 'badge-in'
    if status == 'out':
        return 'badge-out'
    return 'badge-pending'


def calculate_age(dob, today=None):
    """Age in whole years on ``today`` (defaults to the current date)."""
    if not dob:
        return None
    if isinstance(dob, str):
        dob = date.fromisoformat(dob[:10])
    today = today or date.today()
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age


def get_jersey_type(type_id):
    """Look up a configured jersey type by id."""
    return next((j for j in current_app.config['JERSEY_TYPES'] if j['id'] == type_id), None)


def format_money(value):
    """Format an amount as ``$1,234.50``; whole-dollar ints keep no decimals."""
    if value is None or value == '':
        return ''
    if isinstance(value, int):
        return f"${value:,}"
    return f"${Decimal(value):,.2f}"


def blank_to_none(value):
    """Trim a string and turn empty strings into None."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def slugify(text):
    """Lowercase, hyphen separated slug made of ascii letters and digits."""
    slug = re.sub(r'[^a-z0-9]+', '-', (text or '').lower())
    return slug.strip('-')


def tournament_slug(tournament):
    """Public share slug such as ``spring-classic-3fa4b2c1``."""
    short_id = tournament.public_id[:8]
    name = slugify(tournament.name)
    return f"{name}-{short_id}" if name else short_id


def extract_id_from_slug(slug):
    """Return the short public id at the end of a share slug."""
    if not slug:
        return ''
    return slug.rsplit('-', 1)[-1]


def safe_export_name(name):
    """Replace anything that is not an ascii letter or digit with an underscore."""
    return re.sub(r'[^a-zA-Z0-9]', '_', name or '')


def timestamp_ms():
    """Milliseconds since the epoch, used to keep stored file names unique."""
    return int(time.time() * 1000)
