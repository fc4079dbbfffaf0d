"""
Unit tests for CSV export helpers.
"""
import pytest
from datetime import date
from types import SimpleNamespace
from dugout.exports.csv_export import escape_csv_value, to_csv, player_export_rows


def make_player(**kwargs):
    values = dict(first_name='Ana', last_name='Baker', jersey_name=None, phone=None, email=None,
                  address=None, date_of_birth=None, gender=None, uniform_number=None,
                  jersey_size=None, jersey_types=[])
    values.update(kwargs)
    return SimpleNamespace(**values)


@pytest.mark.unit
class TestEscapeCsvValue:
    """Test cases for single cell escaping."""

    def test_plain_value(self):
        assert escape_csv_value('Baker') == 'Baker'
        assert escape_csv_value(7) == '7'

    def test_none_is_empty(self):
        assert escape_csv_value(None) == ''

    def test_comma_and_quote_are_quoted(self):
        assert escape_csv_value('Salt Lake City, UT') == '"Salt Lake City, UT"'
        assert escape_csv_value('The "Ace"') == '"The ""Ace"""'

    def test_newline_is_quoted(self):
        assert escape_csv_value('line1\nline2') == '"line1\nline2"'

    def test_list_joined_and_quoted(self):
        assert escape_csv_value(['home', 'away']) == '"home; away"'


@pytest.mark.unit
class TestToCsv:
    """Test cases for CSV document generation."""

    def test_empty_rows(self):
        assert to_csv([]) == ''

    def test_header_from_first_row(self):
        csv_text = to_csv([{'a': 1, 'b': 'x,y'}, {'a': 2, 'b': None}])
        assert csv_text.split('\n') == ['a,b', '1,"x,y"', '2,']

    def test_player_export_rows(self):
        player = make_player(phone='5551234567', date_of_birth=date(1990, 5, 4),
                             gender='F', uniform_number=0, jersey_types=['home', 'away'])
        row = player_export_rows([player])[0]

        assert row['First Name'] == 'Ana'
        assert row['Date of Birth'] == '1990-05-04'
        assert row['Uniform Number'] == 0
        assert row['Jersey Types'] == 'home; away'
        assert row['Email'] == ''

    def test_player_export_csv_header(self):
        csv_text = to_csv(player_export_rows([make_player()]))
        assert csv_text.startswith('First Name,Last Name,Jersey Name,Phone,Email,Address,')
