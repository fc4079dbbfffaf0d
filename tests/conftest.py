"""
Test configuration and fixtures for the Dugout application.
"""
import os

# Set environment variables for testing
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'

import pytest
from dugout import create_app, db
from tests.fixtures.factories import (
    PlayerFactory, ParkFactory, TournamentFactory, InvitationFactory, LodgingFactory
)


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')

    with app.app_context():
        # Ensure all models are registered with SQLAlchemy
        from dugout import models

        db.create_all()

        import sqlalchemy as sa
        tables = sa.inspect(db.engine).get_table_names()
        if 'tournaments' not in tables:
            raise RuntimeError(f"Database setup failed. Tables created: {tables}")

        yield app

        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Create database session for testing."""
    with app.app_context():
        yield db.session

        # Clear all tables for clean state between tests
        try:
            for table in reversed(db.metadata.sorted_tables):
                db.session.execute(table.delete())
            db.session.commit()
        except Exception:
            db.session.rollback()
        finally:
            db.session.remove()


@pytest.fixture
def storage_dir(app, tmp_path, monkeypatch):
    """Point the file store at a temporary directory."""
    monkeypatch.setitem(app.config, 'STORAGE_PATH', str(tmp_path))
    return tmp_path


@pytest.fixture
def player(db_session):
    return PlayerFactory.create(first_name='Test', last_name='Player', gender='F',
                                phone='555-123-4567')


@pytest.fixture
def park(db_session):
    return ParkFactory.create(name='Canyons Complex')


@pytest.fixture
def tournament(db_session):
    return TournamentFactory.create(name='Spring Classic', type='coed', total_cost=300)


@pytest.fixture
def tournament_with_roster(db_session):
    """
    Coed tournament with five invitations: three in (one paid), one pending
    and one out.
    """
    tournament = TournamentFactory.create(name='Summer Slam', type='coed', total_cost=250,
                                          additional_fees=50, venmo_link='https://venmo.com/u/fallen')
    ana = PlayerFactory.create(first_name='Ana', last_name='Baker', gender='F', phone='5551110000')
    cody = PlayerFactory.create(first_name='Cody', last_name='Adams', gender='M', phone='5552220000')
    eli = PlayerFactory.create(first_name='Eli', last_name='Young', gender='M', phone=None)
    fay = PlayerFactory.create(first_name='Fay', last_name='Cole', gender='F', phone='5553330000')
    gus = PlayerFactory.create(first_name='Gus', last_name='Diaz', gender=None, phone='5554440000')

    InvitationFactory.create(tournament=tournament, player=ana, status='in', paid=True)
    InvitationFactory.create(tournament=tournament, player=cody, status='in', paid=False)
    InvitationFactory.create(tournament=tournament, player=eli, status='in', paid=False)
    InvitationFactory.create(tournament=tournament, player=fay, status='pending')
    InvitationFactory.create(tournament=tournament, player=gus, status='out')
    return tournament


@pytest.fixture
def lodging(db_session, tournament):
    return LodgingFactory.create(tournament=tournament, name='Red Cliffs Cabin', total_cost=400)
