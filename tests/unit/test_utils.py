"""
Unit tests for shared formatting and parsing helpers.
"""
import pytest
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
from dugout.utils import (
    format_date, format_phone, clean_phone, generate_sms_url, get_status_color,
    calculate_age, get_jersey_type, format_money, blank_to_none,
    slugify, tournament_slug, extract_id_from_slug, safe_export_name
)


@pytest.mark.unit
class TestFormatting:
    """Test cases for display formatting helpers."""

    def test_format_date_from_date(self):
        assert format_date(date(2026, 1, 23)) == 'Jan 23, 2026'

    def test_format_date_from_iso_string_keeps_day(self):
        """ISO strings are read as calendar dates, not shifted by timezone."""
        assert format_date('2026-03-01') == 'Mar 1, 2026'
        assert format_date('2026-03-01T00:00:00Z') == 'Mar 1, 2026'

    def test_format_date_empty_and_invalid(self):
        assert format_date(None) == ''
        assert format_date('') == ''
        assert format_date('soon') == 'soon'

    def test_format_date_from_datetime(self):
        assert format_date(datetime(2025, 12, 5, 18, 30)) == 'Dec 5, 2025'

    def test_format_phone_ten_digits(self):
        assert format_phone('5551234567') == '(555) 123-4567'
        assert format_phone('555.123.4567') == '(555) 123-4567'

    def test_format_phone_other_lengths_unchanged(self):
        assert format_phone('+1 555 123 4567') == '+1 555 123 4567'
        assert format_phone('12345') == '12345'
        assert format_phone(None) == ''

    def test_format_money(self):
        assert format_money(25) == '$25'
        assert format_money(Decimal('1234.5')) == '$1,234.50'
        assert format_money(None) == ''

    def test_status_color(self):
        assert get_status_color('in') == 'badge-in'
        assert get_status_color('out') == 'badge-out'
        assert get_status_color('pending') == 'badge-pending'
        assert get_status_color('anything') == 'badge-pending'


@pytest.mark.unit
class TestPhoneHelpers:
    """Test cases for phone cleaning and SMS URLs."""

    def test_clean_phone(self):
        assert clean_phone('(555) 123-4567') == '5551234567'
        assert clean_phone('') == ''
        assert clean_phone(None) == ''

    def test_generate_sms_url(self):
        url = generate_sms_url(['(555) 111-0000', '555-222-0000'])
        assert url == 'sms:5551110000,5552220000'

    def test_generate_sms_url_no_numbers(self):
        assert generate_sms_url([]) is None
        assert generate_sms_url(None) is None
        assert generate_sms_url(['n/a']) is None


@pytest.mark.unit
class TestParsing:
    """Test cases for value parsing helpers."""

    def test_calculate_age_before_birthday(self):
        assert calculate_age(date(1990, 6, 15), today=date(2026, 6, 14)) == 35

    def test_calculate_age_on_birthday(self):
        assert calculate_age(date(1990, 6, 15), today=date(2026, 6, 15)) == 36

    def test_calculate_age_from_string_and_none(self):
        assert calculate_age('2000-01-01', today=date(2026, 1, 1)) == 26
        assert calculate_age(None) is None

    def test_blank_to_none(self):
        assert blank_to_none('  ') is None
        assert blank_to_none(' text ') == 'text'
        assert blank_to_none(None) is None
        assert blank_to_none(0) == 0

    def test_get_jersey_type(self, app):
        with app.app_context():
            first = app.config['JERSEY_TYPES'][0]
            assert get_jersey_type(first['id']) == first
            assert get_jersey_type('no-such-type') is None


@pytest.mark.unit
class TestSlugs:
    """Test cases for public share slugs."""

    def test_slugify(self):
        assert slugify('Spring Classic 2026!') == 'spring-classic-2026'
        assert slugify('  --Hello   World--  ') == 'hello-world'
        assert slugify(None) == ''

    def test_tournament_slug(self):
        tournament = SimpleNamespace(name='Spring Classic', public_id='3fa4b2c1d9e8f7a6b5c4d3e2f1a0b9c8')
        assert tournament_slug(tournament) == 'spring-classic-3fa4b2c1'

    def test_tournament_slug_without_name_characters(self):
        tournament = SimpleNamespace(name='!!!', public_id='3fa4b2c1d9e8f7a6b5c4d3e2f1a0b9c8')
        assert tournament_slug(tournament) == '3fa4b2c1'

    def test_extract_id_from_slug(self):
        assert extract_id_from_slug('spring-classic-3fa4b2c1') == '3fa4b2c1'
        assert extract_id_from_slug('3fa4b2c1') == '3fa4b2c1'
        assert extract_id_from_slug('') == ''

    def test_safe_export_name(self):
        assert safe_export_name('Spring Classic: Day 1') == 'Spring_Classic__Day_1'
