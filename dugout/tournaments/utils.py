"""
Tournament detail aggregation: RSVP counts, gender grouping, cost splitting,
payment totals, lodging statistics, messaging recipients and signature links.

The aggregation functions work on already-loaded model instances so the same
numbers feed the coach's detail page, the public player view and the JSON API.
The get_* helpers at the bottom run the queries that load them.
"""

import calendar
import math
from datetime import date
from decimal import Decimal

import sqlalchemy as sa
import sqlalchemy.orm as so

from dugout import db
from dugout.models import Tournament, TournamentInvitation, Player
from dugout.utils import clean_phone, generate_sms_url, extract_id_from_slug


STATUS_ORDER = {'in': 0, 'pending': 1, 'out': 2}


def _last_name_key(invitation):
    player = invitation.player
    return (player.last_name or '').lower() if player else ''


def invitation_name(invitation):
    """Display name of the invited player."""
    player = invitation.player
    return f"{player.first_name} {player.last_name}" if player else ''


def status_counts(invitations):
    """Count invitations by status. Always returns all three statuses."""
    counts = {'pending': 0, 'in': 0, 'out': 0}
    for inv in invitations:
        counts[inv.status] = counts.get(inv.status, 0) + 1
    return counts


def payment_status(invitations):
    """Split the players who are in into paid and unpaid lists."""
    in_players = [inv for inv in invitations if inv.status == 'in']
    return {
        'paid': [inv for inv in in_players if inv.paid],
        'unpaid': [inv for inv in in_players if not inv.paid],
    }


def group_by_gender(invitations):
    """Split invitations into females, males and unknown, each by last name."""
    groups = {'females': [], 'males': [], 'unknown': []}
    for inv in invitations:
        gender = inv.player.gender if inv.player else None
        if gender == 'F':
            groups['females'].append(inv)
        elif gender == 'M':
            groups['males'].append(inv)
        else:
            groups['unknown'].append(inv)
    for key in groups:
        groups[key].sort(key=_last_name_key)
    return groups


def players_by_status(invitations):
    """Gender groups for each RSVP status."""
    return {
        status: group_by_gender([inv for inv in invitations if inv.status == status])
        for status in ('in', 'pending', 'out')
    }


def combined_names(groups):
    """Single line of names used for mens tournaments: males, females, unknown."""
    ordered = groups['males'] + groups['females'] + groups['unknown']
    return ', '.join(invitation_name(inv) for inv in ordered)


def parse_divisor(value):
    """Custom split divisor from user input; None when blank or not a number."""
    if value is None or str(value).strip() == '':
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def cost_per_player(total_cost, divisor):
    """
    Cost each player owes, rounded up to the whole dollar.

    Args:
        total_cost: Total to split (Decimal, number or None).
        divisor: Number of players to split between.

    Returns:
        int or None: None when there is no cost or nobody to split it between.
    """
    if not total_cost or not divisor or divisor <= 0:
        return None
    return math.ceil(Decimal(str(total_cost)) / Decimal(divisor))


def detail_cost_per_player(tournament, invitations, custom_divisor=None):
    """Coach view: total cost split by the custom divisor or the number of players in."""
    divisor = custom_divisor if custom_divisor is not None else status_counts(invitations)['in']
    return cost_per_player(tournament.total_cost, divisor)


def public_cost_per_player(tournament, invitations):
    """Player view: total cost plus additional fees split between players who are in."""
    if not tournament.total_cost:
        return None
    total = Decimal(str(tournament.total_cost)) + Decimal(str(tournament.additional_fees or 0))
    return cost_per_player(total, status_counts(invitations)['in'])


def payment_totals(cost, payments):
    """Amount collected and amount outstanding for the players who are in."""
    if not cost:
        return {'total_paid': 0, 'amount_due': 0}
    return {
        'total_paid': len(payments['paid']) * cost,
        'amount_due': len(payments['unpaid']) * cost,
    }


def payment_message(cost, venmo_link):
    """Text a coach pastes into the team chat to collect payment."""
    if not cost or not venmo_link:
        return None
    return f"${cost} per player, Venmo: {venmo_link}"


def sorted_invitations(invitations):
    """Invitations ordered in, pending, out and then by last name."""
    return sorted(invitations, key=lambda inv: (STATUS_ORDER.get(inv.status, 3), _last_name_key(inv)))


def uninvited_players(players, invitations, tournament_type):
    """
    Players that can still be invited.

    Mens tournaments only offer male players.
    """
    invited = {inv.player_id for inv in invitations}
    available = [p for p in players if p.id not in invited]
    if tournament_type == 'mens':
        available = [p for p in available if p.gender == 'M']
    return available


def lodging_stats(lodging_options, invitations):
    """
    Per lodging option: how many invitees are staying, how many people that
    covers, what each person owes and who they are.
    """
    stats = {}
    for option in lodging_options:
        staying = [inv for inv in invitations
                   if inv.lodging_id == option.id and inv.lodging_status == 'in']
        total_people = sum((inv.lodging_adults or 1) + (inv.lodging_kids or 0) for inv in staying)
        total_with_fees = Decimal(str(option.total_cost or 0)) + Decimal(str(option.additional_fees or 0))
        per_person = None
        if total_with_fees and total_people > 0:
            per_person = math.ceil(total_with_fees / total_people)
        stats[option.id] = {
            'count': len(staying),
            'total_people': total_people,
            'cost_per_person': per_person,
            'players': [invitation_name(inv) for inv in staying],
        }
    return stats


def existing_locations(tournaments):
    """Distinct, sorted locations used by earlier tournaments."""
    return sorted({t.location for t in tournaments if t.location})


def month_offset(year, month, delta):
    """(year, month) shifted by ``delta`` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def calendar_month(year, month, tournaments):
    """
    Calendar cells for a month view.

    The first week is padded with empty cells so the month starts on the
    right weekday column, with Sunday as the first column.

    Returns:
        list: Dicts with ``day`` (None for padding), ``date`` and ``tournaments``.
    """
    first_weekday, total_days = calendar.monthrange(year, month)
    # monthrange counts Monday as 0
    padding = (first_weekday + 1) % 7

    by_date = {}
    for t in tournaments:
        by_date.setdefault(t.date, []).append(t)

    days = [{'day': None, 'date': None, 'tournaments': []} for _ in range(padding)]
    for day in range(1, total_days + 1):
        current = date(year, month, day)
        days.append({'day': day, 'date': current, 'tournaments': by_date.get(current, [])})
    return days


def signature_link(base_url, token):
    return f"{base_url.rstrip('/')}/sign/{token}"


def signature_summary(invitations):
    """Signed and unsigned lists among the players who are in."""
    in_players = [inv for inv in invitations if inv.status == 'in']
    return {
        'signed': [inv for inv in in_players if inv.is_signed],
        'unsigned': [inv for inv in in_players if not inv.is_signed],
    }


def signature_links_message(tournament_name, invitations, base_url):
    """Message listing a signature link for every unsigned player who is in."""
    unsigned = signature_summary(invitations)['unsigned']
    links = '\n'.join(
        f"{invitation_name(inv)}: {signature_link(base_url, inv.signature_token)}" for inv in unsigned
    )
    return f"{tournament_name} - Signature Links:\n\n{links}"


def message_phone_numbers(invitations, include_out=False):
    """Phone numbers of invitees, skipping players who are out unless asked."""
    numbers = []
    for inv in invitations:
        if inv.status == 'out' and not include_out:
            continue
        if inv.player and inv.player.phone:
            numbers.append(inv.player.phone)
    return numbers


def messaging_summary(invitations, include_out=False):
    """
    Everything the group text panel needs.

    Returns:
        dict: ``sms_url`` for phones, ``copy_text`` for desktop clipboards,
        ``counts`` of reachable invitees per status and ``recipient_count``.
    """
    numbers = message_phone_numbers(invitations, include_out)

    counts = {'in': 0, 'pending': 0, 'out': 0}
    for inv in invitations:
        if inv.player and inv.player.phone:
            counts[inv.status] = counts.get(inv.status, 0) + 1

    recipient_count = counts['in'] + counts['pending']
    if include_out:
        recipient_count += counts['out']

    return {
        'phone_numbers': numbers,
        'sms_url': generate_sms_url(numbers),
        'copy_text': ', '.join(clean_phone(n) for n in numbers),
        'counts': counts,
        'recipient_count': recipient_count,
    }


def get_tournaments(show_archived: bool = False) -> list[Tournament]:
    """
    Tournaments newest first.

    Args:
        show_archived: Include archived tournaments

    Returns:
        List of Tournament instances
    """
    query = sa.select(Tournament).order_by(Tournament.date.desc())

    if not show_archived:
        query = query.where(Tournament.archived.is_(False))

    return db.session.scalars(query).all()


def get_tournament_detail(tournament_id: int):
    """Load a tournament with its parks, invitations and players in one go."""
    return db.session.scalars(
        sa.select(Tournament)
        .where(Tournament.id == tournament_id)
        .options(
            so.selectinload(Tournament.parks),
            so.selectinload(Tournament.invitations).selectinload(TournamentInvitation.player),
            so.selectinload(Tournament.documents),
            so.selectinload(Tournament.lodging_options),
        )
    ).first()


def get_tournament_by_slug(slug: str):
    """Resolve a public share slug by the short id after its last hyphen."""
    short_id = extract_id_from_slug(slug)
    if len(short_id) < 8:
        return None
    return db.session.scalars(
        sa.select(Tournament).where(Tournament.public_id.startswith(short_id, autoescape=True))
    ).first()


def get_available_players(tournament: Tournament) -> list[Player]:
    """Players that can still be invited to a tournament, by last name."""
    players = db.session.scalars(sa.select(Player).order_by(Player.last_name, Player.first_name)).all()
    return uninvited_players(players, tournament.invitations, tournament.type)


def tournament_summary(tournament, custom_divisor=None, public=False):
    """
    Aggregated numbers for a tournament.

    Args:
        tournament: The Tournament with invitations loaded
        custom_divisor: Number of players to split the cost between, if overridden
        public: Use the player-facing cost (fees included, split between players in)

    Returns:
        Dictionary of counts, groups, costs and payment figures
    """
    invitations = tournament.invitations
    counts = status_counts(invitations)
    payments = payment_status(invitations)

    if public:
        cost = public_cost_per_player(tournament, invitations)
    else:
        cost = detail_cost_per_player(tournament, invitations, custom_divisor)

    return {
        'status_counts': counts,
        'players_by_status': players_by_status(invitations),
        'cost_per_player': cost,
        'divisor': custom_divisor if custom_divisor is not None else counts['in'],
        'payment_status': payments,
        'payment_totals': payment_totals(cost, payments),
        'payment_message': payment_message(cost, tournament.venmo_link),
        'lodging_stats': lodging_stats(tournament.lodging_options, invitations),
        'signatures': signature_summary(invitations),
    }
