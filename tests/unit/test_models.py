"""
Unit tests for database models.
"""
import pytest
import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from dugout.models import Player, Tournament, TournamentInvitation
from tests.fixtures.factories import (
    PlayerFactory, ParkFactory, TournamentFactory, InvitationFactory, DocumentFactory
)


@pytest.mark.unit
class TestPlayer:
    """Test cases for Player model."""

    def test_player_creation(self, db_session):
        player = PlayerFactory.create(first_name='Ana', last_name='Baker', gender='F')

        assert player.id is not None
        assert player.full_name == 'Ana Baker'
        assert player.jersey_types == []
        assert player.created_at is not None

    def test_jersey_types_stored_as_list(self, db_session):
        player = PlayerFactory.create(jersey_types=['Sunset', 'Grey Striped'])
        db_session.expire_all()

        reloaded = db_session.get(Player, player.id)
        assert reloaded.jersey_types == ['Sunset', 'Grey Striped']

    def test_deleting_player_removes_invitations(self, db_session):
        invitation = InvitationFactory.create()
        player_id = invitation.player_id

        db_session.delete(invitation.player)
        db_session.commit()

        remaining = db_session.scalars(
            sa.select(TournamentInvitation).where(TournamentInvitation.player_id == player_id)
        ).all()
        assert remaining == []


@pytest.mark.unit
class TestTournament:
    """Test cases for Tournament model."""

    def test_defaults(self, db_session):
        tournament = TournamentFactory.create(name='Spring Classic')

        assert tournament.type == 'coed'
        assert tournament.is_coed
        assert tournament.type_label == 'Coed'
        assert tournament.archived is False
        assert len(tournament.public_id) == 32

    def test_slug(self, db_session):
        tournament = TournamentFactory.create(name='Spring Classic')
        assert tournament.slug == f'spring-classic-{tournament.public_id[:8]}'

    def test_all_parks_primary_first(self, db_session):
        primary = ParkFactory.create(name='Primary')
        other = ParkFactory.create(name='Other')
        tournament = TournamentFactory.create(park=primary, parks=[other])

        assert tournament.all_parks() == [primary, other]

    def test_all_parks_no_duplicates(self, db_session):
        primary = ParkFactory.create(name='Primary')
        tournament = TournamentFactory.create(park=primary, parks=[primary])

        assert tournament.all_parks() == [primary]

    def test_get_waiver(self, db_session):
        tournament = TournamentFactory.create()
        DocumentFactory.create(tournament=tournament, name='Field Map', is_waiver=False)
        waiver = DocumentFactory.create(tournament=tournament, name='Release', is_waiver=True)
        db_session.refresh(tournament)

        assert tournament.get_waiver() == waiver

    def test_deleting_tournament_removes_children(self, db_session):
        invitation = InvitationFactory.create()
        tournament = invitation.tournament
        DocumentFactory.create(tournament=tournament)
        tournament_id = tournament.id

        db_session.delete(tournament)
        db_session.commit()

        assert db_session.get(Tournament, tournament_id) is None
        assert db_session.scalars(sa.select(TournamentInvitation)).all() == []


@pytest.mark.unit
class TestTournamentInvitation:
    """Test cases for TournamentInvitation model."""

    def test_defaults(self, db_session):
        invitation = InvitationFactory.create()

        assert invitation.status == 'pending'
        assert invitation.paid is False
        assert invitation.signature_token
        assert invitation.is_signed is False
        assert invitation.lodging_adults == 1
        assert invitation.lodging_kids == 0

    def test_tokens_unique(self, db_session):
        first = InvitationFactory.create()
        second = InvitationFactory.create()
        assert first.signature_token != second.signature_token

    def test_player_invited_once(self, db_session):
        invitation = InvitationFactory.create()

        with pytest.raises(IntegrityError):
            InvitationFactory.create(tournament=invitation.tournament, player=invitation.player)
        db_session.rollback()
