"""initial schema: players, parks, tournaments, invitations, documents and lodging

Revision ID: 3f9c2a1d7b64
Revises:
Create Date: 2026-01-12 19:04:11.508214

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9c2a1d7b64'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'players',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=64), nullable=False),
        sa.Column('last_name', sa.String(length=64), nullable=False),
        sa.Column('jersey_name', sa.String(length=64), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('email', sa.String(length=120), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=1), nullable=True),
        sa.Column('uniform_number', sa.Integer(), nullable=True),
        sa.Column('jersey_size', sa.String(length=8), nullable=True),
        sa.Column('jersey_types', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('players', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_players_first_name'), ['first_name'], unique=False)
        batch_op.create_index(batch_op.f('ix_players_last_name'), ['last_name'], unique=False)

    op.create_table(
        'parks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=64), nullable=True),
        sa.Column('state', sa.String(length=32), nullable=True),
        sa.Column('maps_url', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'tournaments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('public_id', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=8), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('total_cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('additional_fees', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('venmo_link', sa.String(length=512), nullable=True),
        sa.Column('image_filename', sa.String(length=255), nullable=True),
        sa.Column('archived', sa.Boolean(), nullable=False),
        sa.Column('park_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['park_id'], ['parks.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('tournaments', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_tournaments_public_id'), ['public_id'], unique=True)
        batch_op.create_index(batch_op.f('ix_tournaments_date'), ['date'], unique=False)

    op.create_table(
        'tournament_parks',
        sa.Column('tournament_id', sa.Integer(), nullable=False),
        sa.Column('park_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['park_id'], ['parks.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tournament_id'], ['tournaments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('tournament_id', 'park_id')
    )

    op.create_table(
        'documents',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tournament_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('filename', sa.String(length=255), nullable=False),
        sa.Column('file_type', sa.String(length=10), nullable=False),
        sa.Column('is_waiver', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['tournament_id'], ['tournaments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('documents', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_documents_tournament_id'), ['tournament_id'], unique=False)

    op.create_table(
        'tournament_lodging',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tournament_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('url', sa.String(length=512), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('total_cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('additional_fees', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('venmo_link', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['tournament_id'], ['tournaments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('tournament_lodging', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_tournament_lodging_tournament_id'), ['tournament_id'], unique=False)

    op.create_table(
        'tournament_invitations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tournament_id', sa.Integer(), nullable=False),
        sa.Column('player_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('paid', sa.Boolean(), nullable=False),
        sa.Column('signature_token', sa.String(length=64), nullable=False),
        sa.Column('signature_filename', sa.String(length=255), nullable=True),
        sa.Column('signed_at', sa.DateTime(), nullable=True),
        sa.Column('lodging_id', sa.Integer(), nullable=True),
        sa.Column('lodging_status', sa.String(length=10), nullable=True),
        sa.Column('lodging_adults', sa.Integer(), nullable=True),
        sa.Column('lodging_kids', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['lodging_id'], ['tournament_lodging.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['player_id'], ['players.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tournament_id'], ['tournaments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tournament_id', 'player_id', name='uq_invitation_tournament_player')
    )
    with op.batch_alter_table('tournament_invitations', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_tournament_invitations_tournament_id'), ['tournament_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_tournament_invitations_player_id'), ['player_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_tournament_invitations_signature_token'), ['signature_token'], unique=True)


def downgrade():
    with op.batch_alter_table('tournament_invitations', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_tournament_invitations_signature_token'))
        batch_op.drop_index(batch_op.f('ix_tournament_invitations_player_id'))
        batch_op.drop_index(batch_op.f('ix_tournament_invitations_tournament_id'))
    op.drop_table('tournament_invitations')

    with op.batch_alter_table('tournament_lodging', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_tournament_lodging_tournament_id'))
    op.drop_table('tournament_lodging')

    with op.batch_alter_table('documents', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_documents_tournament_id'))
    op.drop_table('documents')

    op.drop_table('tournament_parks')

    with op.batch_alter_table('tournaments', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_tournaments_date'))
        batch_op.drop_index(batch_op.f('ix_tournaments_public_id'))
    op.drop_table('tournaments')

    op.drop_table('parks')

    with op.batch_alter_table('players', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_players_last_name'))
        batch_op.drop_index(batch_op.f('ix_players_first_name'))
    op.drop_table('players')
