"""
Unit tests for tournament aggregation: RSVP counts, cost splitting, payments,
lodging, calendar cells, messaging and signature links.
"""
import pytest
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from dugout.tournaments.utils import (
    status_counts, payment_status, group_by_gender, players_by_status, combined_names,
    parse_divisor, cost_per_player, detail_cost_per_player, public_cost_per_player,
    payment_totals, payment_message, sorted_invitations, uninvited_players, lodging_stats,
    existing_locations, month_offset, calendar_month, signature_link, signature_summary,
    signature_links_message, message_phone_numbers, messaging_summary, invitation_name
)


_ids = iter(range(1, 10000))


def make_invitation(first_name, last_name, status='pending', gender=None, phone=None, paid=False,
                    signed=False, lodging_id=None, lodging_status=None, adults=1, kids=0):
    player = SimpleNamespace(id=next(_ids), first_name=first_name, last_name=last_name,
                             gender=gender, phone=phone)
    return SimpleNamespace(
        player=player, player_id=player.id, status=status, paid=paid,
        is_signed=signed, signature_token=f'tok-{last_name.lower()}',
        lodging_id=lodging_id, lodging_status=lodging_status,
        lodging_adults=adults, lodging_kids=kids,
    )


@pytest.fixture
def invitations():
    return [
        make_invitation('Ana', 'Baker', 'in', 'F', '555-111-0000', paid=True, signed=True),
        make_invitation('Cody', 'Adams', 'in', 'M', '555-222-0000'),
        make_invitation('Eli', 'Young', 'in', 'M'),
        make_invitation('Fay', 'Cole', 'pending', 'F', '555-333-0000'),
        make_invitation('Gus', 'Diaz', 'out', None, '555-444-0000'),
    ]


@pytest.mark.unit
class TestStatusAggregation:
    """Test cases for RSVP counting and grouping."""

    def test_status_counts(self, invitations):
        assert status_counts(invitations) == {'pending': 1, 'in': 3, 'out': 1}

    def test_status_counts_empty(self):
        assert status_counts([]) == {'pending': 0, 'in': 0, 'out': 0}

    def test_payment_status_only_counts_in(self, invitations):
        invitations[3].paid = True  # pending players are never in either list
        payments = payment_status(invitations)
        assert [invitation_name(i) for i in payments['paid']] == ['Ana Baker']
        assert [invitation_name(i) for i in payments['unpaid']] == ['Cody Adams', 'Eli Young']

    def test_group_by_gender_sorted_by_last_name(self, invitations):
        groups = group_by_gender(invitations)
        assert [i.player.last_name for i in groups['females']] == ['Baker', 'Cole']
        assert [i.player.last_name for i in groups['males']] == ['Adams', 'Young']
        assert [i.player.last_name for i in groups['unknown']] == ['Diaz']

    def test_players_by_status(self, invitations):
        grouped = players_by_status(invitations)
        assert [i.player.last_name for i in grouped['in']['males']] == ['Adams', 'Young']
        assert grouped['pending']['males'] == []
        assert [i.player.last_name for i in grouped['out']['unknown']] == ['Diaz']

    def test_combined_names_lists_males_first(self, invitations):
        groups = group_by_gender([i for i in invitations if i.status == 'in'])
        assert combined_names(groups) == 'Cody Adams, Eli Young, Ana Baker'

    def test_sorted_invitations(self, invitations):
        names = [i.player.last_name for i in sorted_invitations(reversed(invitations))]
        assert names == ['Adams', 'Baker', 'Young', 'Cole', 'Diaz']


@pytest.mark.unit
class TestCostSplitting:
    """Test cases for per-player cost calculations."""

    def test_cost_rounds_up(self):
        assert cost_per_player(Decimal('250.00'), 3) == 84
        assert cost_per_player(300, 3) == 100

    def test_cost_without_total_or_divisor(self):
        assert cost_per_player(None, 3) is None
        assert cost_per_player(Decimal('0'), 3) is None
        assert cost_per_player(Decimal('250'), 0) is None
        assert cost_per_player(Decimal('250'), -2) is None

    def test_detail_cost_uses_players_in(self, invitations):
        tournament = SimpleNamespace(total_cost=Decimal('250.00'), additional_fees=Decimal('50'))
        assert detail_cost_per_player(tournament, invitations) == 84

    def test_detail_cost_custom_divisor(self, invitations):
        tournament = SimpleNamespace(total_cost=Decimal('250.00'), additional_fees=None)
        assert detail_cost_per_player(tournament, invitations, custom_divisor=10) == 25

    def test_detail_cost_custom_divisor_zero(self, invitations):
        """A divisor of zero is honoured and leaves nothing to split."""
        tournament = SimpleNamespace(total_cost=Decimal('250.00'), additional_fees=None)
        assert detail_cost_per_player(tournament, invitations, custom_divisor=0) is None

    def test_public_cost_includes_fees(self, invitations):
        tournament = SimpleNamespace(total_cost=Decimal('250.00'), additional_fees=Decimal('50'))
        assert public_cost_per_player(tournament, invitations) == 100

    def test_public_cost_without_total(self, invitations):
        tournament = SimpleNamespace(total_cost=None, additional_fees=Decimal('50'))
        assert public_cost_per_player(tournament, invitations) is None

    def test_parse_divisor(self):
        assert parse_divisor('12') == 12
        assert parse_divisor(' 0 ') == 0
        assert parse_divisor('') is None
        assert parse_divisor(None) is None
        assert parse_divisor('ten') is None

    def test_payment_totals(self, invitations):
        totals = payment_totals(84, payment_status(invitations))
        assert totals == {'total_paid': 84, 'amount_due': 168}

    def test_payment_totals_without_cost(self, invitations):
        assert payment_totals(None, payment_status(invitations)) == {'total_paid': 0, 'amount_due': 0}

    def test_payment_message(self):
        assert payment_message(84, 'https://venmo.com/u/fallen') == '$84 per player, Venmo: https://venmo.com/u/fallen'
        assert payment_message(84, None) is None
        assert payment_message(None, 'https://venmo.com/u/fallen') is None


@pytest.mark.unit
class TestInviteAndLodging:
    """Test cases for invite candidates and lodging statistics."""

    def test_uninvited_players_coed(self, invitations):
        extra_f = SimpleNamespace(id=9001, gender='F')
        extra_m = SimpleNamespace(id=9002, gender='M')
        players = [inv.player for inv in invitations] + [extra_f, extra_m]
        assert uninvited_players(players, invitations, 'coed') == [extra_f, extra_m]

    def test_uninvited_players_mens_only_males(self, invitations):
        extra_f = SimpleNamespace(id=9003, gender='F')
        extra_m = SimpleNamespace(id=9004, gender='M')
        extra_unknown = SimpleNamespace(id=9005, gender=None)
        players = [extra_f, extra_m, extra_unknown]
        assert uninvited_players(players, invitations, 'mens') == [extra_m]

    def test_lodging_stats(self):
        cabin = SimpleNamespace(id=1, total_cost=Decimal('400'), additional_fees=Decimal('50'))
        hotel = SimpleNamespace(id=2, total_cost=None, additional_fees=None)
        staying = [
            make_invitation('Ana', 'Baker', 'in', lodging_id=1, lodging_status='in', adults=2, kids=1),
            make_invitation('Cody', 'Adams', 'in', lodging_id=1, lodging_status='in', adults=None, kids=None),
            make_invitation('Eli', 'Young', 'in', lodging_id=1, lodging_status='out'),
            make_invitation('Fay', 'Cole', 'in', lodging_id=2, lodging_status='in'),
        ]
        stats = lodging_stats([cabin, hotel], staying)

        assert stats[1]['count'] == 2
        assert stats[1]['total_people'] == 4
        assert stats[1]['cost_per_person'] == 113
        assert stats[1]['players'] == ['Ana Baker', 'Cody Adams']
        assert stats[2]['count'] == 1
        assert stats[2]['cost_per_person'] is None

    def test_lodging_stats_nobody_staying(self):
        cabin = SimpleNamespace(id=1, total_cost=Decimal('400'), additional_fees=None)
        assert lodging_stats([cabin], [])[1] == {
            'count': 0, 'total_people': 0, 'cost_per_person': None, 'players': []
        }

    def test_existing_locations(self):
        tournaments = [SimpleNamespace(location='Mesquite, NV'), SimpleNamespace(location=None),
                       SimpleNamespace(location='Cedar City, UT'), SimpleNamespace(location='Mesquite, NV')]
        assert existing_locations(tournaments) == ['Cedar City, UT', 'Mesquite, NV']


@pytest.mark.unit
class TestCalendar:
    """Test cases for month navigation and calendar cells."""

    def test_month_offset(self):
        assert month_offset(2026, 1, -1) == (2025, 12)
        assert month_offset(2026, 12, 1) == (2027, 1)
        assert month_offset(2026, 6, 0) == (2026, 6)

    def test_calendar_month_pads_to_sunday(self):
        # May 1st 2026 is a Friday
        days = calendar_month(2026, 5, [])
        assert [d['day'] for d in days[:6]] == [None, None, None, None, None, 1]
        assert days[-1]['day'] == 31

    def test_calendar_month_no_padding_when_month_starts_sunday(self):
        days = calendar_month(2026, 3, [])
        assert days[0]['day'] == 1
        assert len(days) == 31

    def test_calendar_month_places_tournaments(self):
        spring = SimpleNamespace(name='Spring Classic', date=date(2026, 5, 16))
        days = calendar_month(2026, 5, [spring])
        cell = next(d for d in days if d['day'] == 16)
        assert cell['tournaments'] == [spring]


@pytest.mark.unit
class TestMessagingAndSignatures:
    """Test cases for the group text panel and signature links."""

    def test_message_phone_numbers_skip_out(self, invitations):
        assert message_phone_numbers(invitations) == ['555-111-0000', '555-222-0000', '555-333-0000']

    def test_message_phone_numbers_include_out(self, invitations):
        assert '555-444-0000' in message_phone_numbers(invitations, include_out=True)

    def test_messaging_summary(self, invitations):
        summary = messaging_summary(invitations)
        assert summary['sms_url'] == 'sms:5551110000,5552220000,5553330000'
        assert summary['copy_text'] == '5551110000, 5552220000, 5553330000'
        assert summary['counts'] == {'in': 2, 'pending': 1, 'out': 1}
        assert summary['recipient_count'] == 3

    def test_messaging_summary_include_out(self, invitations):
        assert messaging_summary(invitations, include_out=True)['recipient_count'] == 4

    def test_messaging_summary_no_phones(self):
        summary = messaging_summary([make_invitation('Eli', 'Young', 'in')])
        assert summary['sms_url'] is None
        assert summary['recipient_count'] == 0

    def test_signature_link(self):
        assert signature_link('https://team.example.com/', 'abc') == 'https://team.example.com/sign/abc'

    def test_signature_summary(self, invitations):
        summary = signature_summary(invitations)
        assert [invitation_name(i) for i in summary['signed']] == ['Ana Baker']
        assert [invitation_name(i) for i in summary['unsigned']] == ['Cody Adams', 'Eli Young']

    def test_signature_links_message(self, invitations):
        message = signature_links_message('Summer Slam', invitations, 'https://team.example.com')
        assert message == (
            'Summer Slam - Signature Links:\n\n'
            'Cody Adams: https://team.example.com/sign/tok-adams\n'
            'Eli Young: https://team.example.com/sign/tok-young'
        )
