"""
AFA roster form overlay.

The association's roster form is a fixed, printed landscape letter page. This
module draws the team details, manager details, player rows and coach rows at
the positions given by the ``AFA_LAYOUT`` table so the sheet can be printed
onto (or laid over) the blank form. Positions are measured in points from the
left edge and from the top of the page.

A calibration sheet draws a labelled grid and a crosshair at every configured
position so the layout table can be adjusted against the real form.
"""

import io

from reportlab.lib import colors as rl_colors
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from dugout.exports.roster_pdf import is_coach, RosterExportError, NO_PLAYERS_MESSAGE
from dugout.utils import safe_export_name


TEXT_COLOR = rl_colors.Color(0, 0, 0.6)
HEADER_FONT_SIZE = 10
DETAIL_FONT_SIZE = 8
SIGNATURE_HEIGHT = 15
MAX_ADDRESS_LENGTH = 45


def afa_filename(tournament_name):
    return f"{safe_export_name(tournament_name)}_AFA_Roster.pdf"


def truncate_address(address, limit=MAX_ADDRESS_LENGTH):
    if not address:
        return ''
    return address[:limit] + '...' if len(address) > limit else address


def format_dob(value):
    """Birth date as ``MM/DD/YYYY``."""
    if not value:
        return ''
    return value.strftime('%m/%d/%Y')


def division_for(tournament_type):
    return 'Mens' if tournament_type == 'mens' else 'Coed'


def afa_players(invitations, coaches):
    """Players who are in, by last name, flagged when they are coaches."""
    rows = []
    for inv in invitations:
        if inv.status != 'in' or not inv.player:
            continue
        player = inv.player
        rows.append({
            'name': f"{player.first_name or ''} {player.last_name or ''}".strip(),
            'last_name': player.last_name or '',
            'dob': player.date_of_birth,
            'address': player.address or '',
            'email': player.email or '',
            'phone': player.phone or '',
            'signature': inv.signature_filename,
            'is_coach': is_coach(player, coaches),
        })
    rows.sort(key=lambda r: r['last_name'].lower())
    return rows


def resolve_settings(defaults, overrides, tournament, players):
    """
    Merge form values over the configured defaults.

    The division always follows the tournament type. When the manager is one
    of the players who are in, any blank manager contact details are filled
    from that player's record.
    """
    settings = dict(defaults)
    settings.update({k: v for k, v in (overrides or {}).items() if v is not None})
    settings['division'] = division_for(tournament.type)

    manager_name = (settings.get('manager_name') or '').lower()
    manager = next((p for p in players if p['name'].lower() == manager_name), None) if manager_name else None
    if manager:
        if not settings.get('manager_email') and manager['email']:
            settings['manager_email'] = manager['email']
        if not settings.get('manager_phone') and manager['phone']:
            settings['manager_phone'] = manager['phone']
        if not settings.get('manager_cell') and manager['phone']:
            settings['manager_cell'] = manager['phone']
        if not settings.get('manager_address') and manager['address']:
            settings['manager_address'] = manager['address']
    return settings, manager


class AFAFormWriter:
    """Draws values onto a single landscape letter page using a layout table."""

    def __init__(self, layout, load_signature, row_height, max_players, coach_rows):
        self.layout = layout
        self.load_signature = load_signature
        self.row_height = row_height
        self.max_players = max_players
        self.coach_rows = coach_rows
        self.width, self.height = landscape(letter)
        self._images = {}

    def _y(self, from_top):
        return self.height - from_top

    def _text(self, c, field, value, size=DETAIL_FONT_SIZE, from_top=None):
        if not value:
            return
        x, top = self.layout[field]
        c.setFont('Helvetica', size)
        c.drawString(x, self._y(from_top if from_top is not None else top), str(value))

    def _image(self, key):
        if key not in self._images:
            data = self.load_signature(key) if key else None
            image = None
            if data:
                try:
                    image = ImageReader(io.BytesIO(data))
                    image.getSize()
                except (OSError, ValueError):
                    image = None
            self._images[key] = image
        return self._images[key]

    def _signature(self, c, field, key, max_width, from_top=None):
        image = self._image(key)
        if image is None:
            return
        img_width, img_height = image.getSize()
        if not img_height:
            return
        x, top = self.layout[field]
        width = min(SIGNATURE_HEIGHT * img_width / img_height, max_width)
        y = self._y(from_top if from_top is not None else top) - 4
        c.drawImage(image, x, y, width=width, height=SIGNATURE_HEIGHT, mask='auto')

    def render(self, settings, players, manager):
        buf = io.BytesIO()
        c = canvas.Canvas(buf, pagesize=(self.width, self.height))
        c.setTitle('AFA Roster')
        c.setFillColor(TEXT_COLOR)

        for field in ('team_name', 'team_class', 'division', 'afa_membership'):
            self._text(c, field, settings.get(field), size=HEADER_FONT_SIZE)

        for field in ('manager_name', 'manager_email', 'manager_phone', 'manager_cell',
                      'manager_address', 'manager_city', 'manager_state', 'manager_zip'):
            self._text(c, field, settings.get(field))

        if manager and manager['signature']:
            self._signature(c, 'manager_signature', manager['signature'], 150)

        first_row = self.layout['player_name'][1]
        for i, player in enumerate(players[:self.max_players]):
            top = first_row + i * self.row_height
            self._text(c, 'player_name', player['name'], from_top=top)
            self._text(c, 'player_dob', format_dob(player['dob']), from_top=top)
            self._text(c, 'player_address', truncate_address(player['address']), from_top=top)
            if player['signature']:
                self._signature(c, 'player_signature', player['signature'], 200, from_top=top)

        coaches = [p for p in players if p['is_coach']]
        for coach, top in zip(coaches, self.coach_rows):
            self._text(c, 'coach_name', coach['name'], from_top=top)
            if coach['signature']:
                self._signature(c, 'coach_signature', coach['signature'], 160, from_top=top)
            self._text(c, 'coach_email', coach['email'], from_top=top)
            self._text(c, 'coach_phone', coach['phone'], from_top=top)

        c.showPage()
        c.save()
        return buf.getvalue()


def build_afa_form(tournament, invitations, config, load_signature, overrides=None):
    """
    Render the AFA roster overlay for a tournament as PDF bytes.

    Args:
        tournament: The Tournament being exported.
        invitations: Its invitations (players loaded).
        config: Application config holding the ``AFA_*`` settings and ``COACHES``.
        load_signature: Callable returning the bytes of a stored signature, or None.
        overrides: Values entered on the export form, keyed like ``AFA_DEFAULTS``.

    Raises:
        RosterExportError: If no invitation has status ``in``.
    """
    players = afa_players(invitations, config['COACHES'])
    if not players:
        raise RosterExportError(NO_PLAYERS_MESSAGE)

    settings, manager = resolve_settings(config['AFA_DEFAULTS'], overrides, tournament, players)
    writer = AFAFormWriter(config['AFA_LAYOUT'], load_signature,
                           config['AFA_PLAYER_ROW_HEIGHT'], config['AFA_MAX_PLAYERS'],
                           config['AFA_COACH_ROWS'])
    return writer.render(settings, players, manager)


def _calibration_label(field):
    return field.replace('_', ' ').title()


def build_calibration_pdf(layout, row_height):
    """
    Grid sheet for lining up the layout table with the printed form.

    Light grid lines every 10 points, stronger every 50 and 100, axis labels
    every 50, and a red crosshair with its coordinates at each field position.
    The second player row is marked as well to show the row spacing.
    """
    width, height = landscape(letter)
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(width, height))
    c.setTitle('AFA Calibration Grid')

    light = rl_colors.Color(0.85, 0.85, 1)
    mid = rl_colors.Color(0.7, 0.7, 1)
    major = rl_colors.Color(0.5, 0.5, 1)
    label = rl_colors.Color(0, 0, 1)

    def grid_style(value):
        if value % 100 == 0:
            return major, 1
        if value % 50 == 0:
            return mid, 0.5
        return light, 0.25

    for x in range(0, int(width) + 1, 10):
        color, thickness = grid_style(x)
        c.setStrokeColor(color)
        c.setLineWidth(thickness)
        c.line(x, 0, x, height)
        if x % 50 == 0:
            c.setFillColor(label)
            c.setFont('Helvetica', 7)
            c.drawString(x + 2, height - 12, str(x))

    for y in range(0, int(height) + 1, 10):
        color, thickness = grid_style(y)
        c.setStrokeColor(color)
        c.setLineWidth(thickness)
        c.line(0, y, width, y)
        if y % 50 == 0:
            c.setFillColor(label)
            c.setFont('Helvetica', 6)
            c.drawString(2, y + 2, f"y={y} (top-{round(height - y)})")

    markers = [(_calibration_label(field), x, top) for field, (x, top) in layout.items()]
    if 'player_name' in layout:
        x, top = layout['player_name']
        markers.append(('Player 2 Name', x, top + row_height))

    red = rl_colors.Color(1, 0, 0)
    c.setStrokeColor(red)
    c.setFillColor(red)
    c.setLineWidth(2)
    c.setFont('Helvetica', 7)
    for name, x, top in markers:
        y = height - top
        c.line(x - 10, y, x + 10, y)
        c.line(x, y - 10, x, y + 10)
        c.drawString(x + 12, y - 3, f"{name} ({x}, top-{top})")

    c.setFillColor(rl_colors.black)
    c.setFont('Helvetica', 10)
    c.drawString(10, 10, f"PDF Size: {width} x {height} points")

    c.showPage()
    c.save()
    return buf.getvalue()
