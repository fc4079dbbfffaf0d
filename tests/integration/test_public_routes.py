"""
Integration tests for the public tournament page and waiver signing.
"""
import base64
import pytest
from dugout.models import TournamentInvitation
from dugout.storage import StorageError
from tests.fixtures.factories import InvitationFactory, DocumentFactory, ParkFactory, TournamentFactory

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 32
SIGNATURE_DATA_URL = 'data:image/png;base64,' + base64.b64encode(PNG_BYTES).decode()


@pytest.mark.integration
class TestPublicTournamentView:
    """Test cases for the shared read-only tournament page."""

    def test_view_by_slug(self, client, tournament_with_roster):
        response = client.get(f'/t/{tournament_with_roster.slug}')

        assert response.status_code == 200
        assert b'Summer Slam' in response.data
        # Fees are included and split between the three players who are in
        assert b'$100 per player' in response.data
        assert b'Ana Baker' in response.data

    def test_view_hides_payment_status(self, client, tournament_with_roster):
        response = client.get(f'/t/{tournament_with_roster.slug}')

        assert b'Unpaid' not in response.data
        assert b'unpaid' not in response.data

    def test_view_with_only_short_id(self, client, tournament_with_roster):
        response = client.get(f'/t/{tournament_with_roster.public_id[:8]}')
        assert response.status_code == 200

    def test_view_lists_parks(self, client, db_session):
        park = ParkFactory.create(name='Canyons Complex', maps_url='https://maps.example.com/canyons')
        tournament = TournamentFactory.create(name='Park Test', park=park)

        response = client.get(f'/t/{tournament.slug}')

        assert b'Canyons Complex' in response.data
        assert b'https://maps.example.com/canyons' in response.data

    def test_venmo_link_shown_before_anyone_is_in(self, client, db_session):
        tournament = TournamentFactory.create(name='Fall Ball', total_cost=500,
                                              venmo_link='https://venmo.com/u/team')
        InvitationFactory.create(tournament=tournament, status='pending')

        response = client.get(f'/t/{tournament.slug}')

        assert response.status_code == 200
        assert b'https://venmo.com/u/team' in response.data
        assert b'per player' not in response.data

    def test_unknown_slug(self, client, db_session):
        assert client.get('/t/spring-classic-00000000').status_code == 404

    def test_short_id_too_short(self, client, tournament):
        assert client.get(f'/t/{tournament.public_id[:4]}').status_code == 404


@pytest.mark.integration
class TestWaiverSigning:
    """Test cases for the signature page."""

    def test_sign_page_default_waiver(self, client, db_session):
        invitation = InvitationFactory.create(status='in', player__first_name='Ana', player__last_name='Baker')

        response = client.get(f'/sign/{invitation.signature_token}')

        assert response.status_code == 200
        assert invitation.player.full_name.encode() in response.data
        assert b'Release and Waiver of Liability' in response.data
        assert b'waiver-text' in response.data

    def test_sign_page_uploaded_waiver(self, client, db_session):
        invitation = InvitationFactory.create(status='in', player__first_name='Ana', player__last_name='Baker')
        DocumentFactory.create(tournament=invitation.tournament, name='Team Release', is_waiver=True,
                               filename=f'{invitation.tournament_id}/release.pdf')

        response = client.get(f'/sign/{invitation.signature_token}')

        assert b'Open the waiver (Team Release)' in response.data
        assert b'waiver-text' not in response.data

    def test_invalid_token(self, client, db_session):
        response = client.get('/sign/not-a-real-token')

        assert response.status_code == 404
        assert b'Invalid or expired signature link' in response.data

    def test_submit_signature(self, client, db_session, storage_dir):
        invitation = InvitationFactory.create(status='in', player__first_name='Ana', player__last_name='Baker')
        first_name = invitation.player.first_name

        response = client.post(f'/sign/{invitation.signature_token}',
                               data={'signature': SIGNATURE_DATA_URL}, follow_redirects=True)

        assert response.status_code == 200
        assert f'Thank you, {first_name}!'.encode() in response.data

        db_session.expire_all()
        signed = db_session.get(TournamentInvitation, invitation.id)
        assert signed.signed_at is not None
        assert signed.signature_filename.startswith(f'signatures/{invitation.id}_')
        assert (storage_dir / signed.signature_filename).read_bytes() == PNG_BYTES

    def test_submit_empty_signature(self, client, db_session, storage_dir):
        invitation = InvitationFactory.create(status='in', player__first_name='Ana', player__last_name='Baker')

        response = client.post(f'/sign/{invitation.signature_token}', data={'signature': ''})

        assert response.status_code == 200
        assert b'Please sign before submitting' in response.data
        db_session.expire_all()
        assert db_session.get(TournamentInvitation, invitation.id).signed_at is None

    def test_submit_non_png_signature(self, client, db_session, storage_dir):
        invitation = InvitationFactory.create(status='in', player__first_name='Ana', player__last_name='Baker')

        response = client.post(f'/sign/{invitation.signature_token}',
                               data={'signature': 'data:image/jpeg;base64,/9j/4AAQ'},
                               follow_redirects=True)

        assert b'Signature must be a PNG image' in response.data
        db_session.expire_all()
        assert db_session.get(TournamentInvitation, invitation.id).signature_filename is None

    def test_storage_failure_shows_generic_message(self, client, db_session, storage_dir, monkeypatch):
        invitation = InvitationFactory.create(status='in', player__first_name='Ana', player__last_name='Baker')

        def failing_save(data, key):
            raise StorageError(f'Could not store {key}: disk full writing PNG')

        monkeypatch.setattr('dugout.public.routes.save_bytes', failing_save)

        response = client.post(f'/sign/{invitation.signature_token}',
                               data={'signature': SIGNATURE_DATA_URL}, follow_redirects=True)

        assert b'Failed to save signature' in response.data
        assert b'disk full' not in response.data
        db_session.expire_all()
        assert db_session.get(TournamentInvitation, invitation.id).signed_at is None

    def test_already_signed_shows_confirmation(self, client, db_session, storage_dir):
        invitation = InvitationFactory.create(status='in', signature_filename='signatures/1_1.png')

        response = client.get(f'/sign/{invitation.signature_token}')

        assert response.status_code == 200
        assert b'Signature received' in response.data
        assert b'signature-pad' not in response.data
