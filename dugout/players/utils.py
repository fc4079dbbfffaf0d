"""
Roster list helpers: filtering, sorting and the query string state of the
player list page.
"""

from dugout.utils import clean_phone


SORTABLE_FIELDS = [
    'first_name', 'last_name', 'jersey_name', 'phone', 'email', 'address',
    'date_of_birth', 'gender', 'uniform_number', 'jersey_size',
]


def player_matches_search(player, search):
    """
    True when the search text appears in a name, email or address field
    (case-insensitive), or in the phone number.
    """
    if not search:
        return True

    term = search.strip().lower()
    if not term:
        return True

    for value in (player.first_name, player.last_name, player.jersey_name,
                  player.email, player.address):
        if value and term in value.lower():
            return True

    if player.phone:
        if term in player.phone:
            return True
        digits = clean_phone(term)
        if digits and digits in clean_phone(player.phone):
            return True

    return False


def filter_players(players, search=None, gender=None, jersey_types=None):
    """
    Filter a list of players.

    Args:
        players: Players to filter.
        search: Free text matched against names, email, address and phone.
        gender: 'M' or 'F'; empty means any gender.
        jersey_types: Jersey type ids; a player matches if they own any of them.

    Returns:
        list: Players passing every active filter, in their original order.
    """
    wanted_types = set(jersey_types or [])
    result = []
    for player in players:
        if not player_matches_search(player, search):
            continue
        if gender and player.gender != gender:
            continue
        if wanted_types and not wanted_types.intersection(player.jersey_types or []):
            continue
        result.append(player)
    return result


def _sort_value(player, field):
    value = getattr(player, field, None)
    if value is None:
        return ''
    if isinstance(value, str):
        return value.lower()
    return str(value)


def sort_players(players, field='last_name', direction='asc'):
    """
    Sort players by a column. Missing values sort as empty strings.

    Uniform numbers compare numerically among themselves; players without one
    sort before players with one in ascending order.
    """
    if field not in SORTABLE_FIELDS:
        field = 'last_name'
    reverse = direction == 'desc'

    if field == 'uniform_number':
        def key(p):
            return (p.uniform_number is not None, p.uniform_number or 0)
    else:
        def key(p):
            return _sort_value(p, field)

    return sorted(players, key=key, reverse=reverse)


def next_sort_direction(current_field, current_direction, field):
    """Direction a column header link should request when clicked."""
    if field == current_field:
        return 'desc' if current_direction == 'asc' else 'asc'
    return 'asc'


def list_filters_from_args(args):
    """Read the player list filter and sort state from request arguments."""
    direction = args.get('direction', 'asc')
    if direction not in ('asc', 'desc'):
        direction = 'asc'
    return {
        'search': args.get('search', '').strip(),
        'gender': args.get('gender', ''),
        'jersey_types': args.getlist('jersey_type'),
        'sort': args.get('sort', 'last_name'),
        'direction': direction,
    }
