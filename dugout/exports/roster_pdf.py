"""
Tournament roster PDF.

A landscape table with coaches first (highlighted), then the players
who are in, sorted by last name, with each player's waiver signature drawn
into the last column.
"""

import io
from xml.sax.saxutils import escape

from reportlab.lib import colors as rl_colors
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, Image

from dugout.utils import format_date, safe_export_name


NO_PLAYERS_MESSAGE = 'No players are marked as "In" to export'

HEADER_BLUE = rl_colors.Color(59 / 255, 130 / 255, 246 / 255)
COACH_FILL = rl_colors.Color(219 / 255, 234 / 255, 254 / 255)


class RosterExportError(Exception):
    """Raised when a roster cannot be exported."""


def is_coach(player, coaches):
    name = f"{player.first_name} {player.last_name}".lower()
    return any(name == coach.lower() for coach in coaches)


def roster_entries(invitations, coaches):
    """
    Rows of the roster: every invitation with status ``in``, coaches first
    in configured order, then everyone else by last name.
    """
    entries = []
    for inv in invitations:
        if inv.status != 'in' or not inv.player:
            continue
        player = inv.player
        entries.append({
            'name': f"{player.first_name or ''} {player.last_name or ''}".strip(),
            'last_name': player.last_name or '',
            'phone': player.phone or '',
            'address': player.address or '',
            'gender': player.gender or '',
            'signature': inv.signature_filename,
            'is_coach': is_coach(player, coaches),
        })

    coach_order = [c.lower() for c in coaches]
    coach_rows = sorted((e for e in entries if e['is_coach']),
                        key=lambda e: coach_order.index(e['name'].lower()))
    player_rows = sorted((e for e in entries if not e['is_coach']),
                         key=lambda e: e['last_name'].lower())
    return coach_rows + player_rows


def roster_filename(tournament_name):
    return f"{safe_export_name(tournament_name)}_roster.pdf"


def header_line(tournament, team_name, team_city):
    parts = [f"Team: {team_name}", team_city, format_date(tournament.date)]
    if tournament.location:
        parts.append(tournament.location)
    return ' | '.join(parts)


def summary_line(entries):
    females = sum(1 for e in entries if e['gender'] == 'F')
    males = sum(1 for e in entries if e['gender'] == 'M')
    return f"Total: {len(entries)} players ({females} F, {males} M)"


def _signature_flowable(data, height):
    """Scale a signature image to the row height, or None if it cannot be read."""
    if not data:
        return None
    try:
        reader = ImageReader(io.BytesIO(data))
        width, img_height = reader.getSize()
    except (OSError, ValueError):
        return None
    if not img_height:
        return None
    return Image(io.BytesIO(data), width=min(height * width / img_height, 68 * mm), height=height)


def build_roster_pdf(tournament, invitations, team_name, team_city, coaches, load_signature):
    """
    Render the roster as PDF bytes.

    Args:
        tournament: The Tournament being exported.
        invitations: Its invitations (players loaded).
        team_name: Team name printed in the header.
        team_city: Team city printed in the header.
        coaches: Full names of the players to list as coaches.
        load_signature: Callable returning the bytes of a stored signature, or None.

    Raises:
        RosterExportError: If no invitation has status ``in``.
    """
    entries = roster_entries(invitations, coaches)
    if not entries:
        raise RosterExportError(NO_PLAYERS_MESSAGE)

    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=landscape(letter),
                            leftMargin=10 * mm, rightMargin=10 * mm,
                            topMargin=8 * mm, bottomMargin=10 * mm,
                            title=f"{tournament.name} Roster")
    styles = getSampleStyleSheet()

    signature_height = 7 * mm
    table_data = [['', 'Name', 'Phone', 'Address', 'Signature']]
    for index, entry in enumerate(entries, start=1):
        name = f"{entry['name']} (Coach)" if entry['is_coach'] else entry['name']
        signature = None
        if entry['signature']:
            signature = _signature_flowable(load_signature(entry['signature']), signature_height)
        table_data.append([index, name, entry['phone'], entry['address'], signature or ''])

    table = Table(table_data, colWidths=[10 * mm, 50 * mm, 35 * mm, 100 * mm, 70 * mm],
                  repeatRows=1)
    style = TableStyle([
        ("GRID", (0, 0), (-1, -1), 0.5, rl_colors.grey),
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
        ("TEXTCOLOR", (0, 0), (-1, 0), rl_colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (0, 0), (0, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ])
    for row, entry in enumerate(entries, start=1):
        if entry['is_coach']:
            style.add("BACKGROUND", (0, row), (-1, row), COACH_FILL)
            style.add("FONTNAME", (0, row), (-1, row), "Helvetica-Bold")
    table.setStyle(style)

    elements = [
        Paragraph(escape(tournament.name), styles["Title"]),
        Paragraph(escape(header_line(tournament, team_name, team_city)), styles["Normal"]),
        Spacer(1, 8),
        table,
        Spacer(1, 6),
        Paragraph(f"<b>{summary_line(entries)}</b>", styles["Normal"]),
    ]

    doc.build(elements)
    return buf.getvalue()
