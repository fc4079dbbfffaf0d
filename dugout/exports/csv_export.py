"""
CSV generation for player exports.
"""

from typing import Any, Dict, List


def escape_csv_value(value: Any) -> str:
    """
    Render a single value as a CSV cell.

    Lists are joined with ``; `` and always quoted, None becomes an empty cell,
    and values containing a comma, quote or newline are quoted with inner
    quotes doubled.
    """
    if isinstance(value, (list, tuple)):
        return '"' + '; '.join(str(item) for item in value) + '"'
    if value is None:
        return ''
    string_value = str(value)
    if ',' in string_value or '"' in string_value or '\n' in string_value:
        return '"' + string_value.replace('"', '""') + '"'
    return string_value


def to_csv(rows: List[Dict[str, Any]]) -> str:
    """
    Convert a list of dictionaries into CSV text.

    The header row comes from the keys of the first row. An empty list gives
    an empty string.
    """
    if not rows:
        return ''

    headers = list(rows[0].keys())
    lines = [','.join(headers)]
    for row in rows:
        lines.append(','.join(escape_csv_value(row.get(header)) for header in headers))
    return '\n'.join(lines)


def player_export_rows(players) -> List[Dict[str, Any]]:
    """Column layout of the player roster CSV."""
    rows = []
    for p in players:
        rows.append({
            'First Name': p.first_name,
            'Last Name': p.last_name,
            'Jersey Name': p.jersey_name or '',
            'Phone': p.phone or '',
            'Email': p.email or '',
            'Address': p.address or '',
            'Date of Birth': p.date_of_birth.isoformat() if p.date_of_birth else '',
            'Gender': p.gender or '',
            'Uniform Number': p.uniform_number if p.uniform_number is not None else '',
            'Jersey Size': p.jersey_size or '',
            'Jersey Types': '; '.join(p.jersey_types or []),
        })
    return rows
