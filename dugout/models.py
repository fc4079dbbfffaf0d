# Standard library imports
import secrets
from datetime import datetime, date
from decimal import Decimal
from typing import Optional

# Third-party imports
import sqlalchemy as sa
import sqlalchemy.orm as so
from sqlalchemy import Table, Column, Integer, ForeignKey

# Local application imports
from dugout import db


def _new_public_id():
    return secrets.token_hex(16)


def _new_signature_token():
    return secrets.token_urlsafe(24)


# Association table for the parks a tournament is played at
tournament_parks = Table(
    'tournament_parks',
    db.Model.metadata,
    Column('tournament_id', Integer, ForeignKey('tournaments.id', ondelete='CASCADE'), primary_key=True),
    Column('park_id', Integer, ForeignKey('parks.id', ondelete='CASCADE'), primary_key=True)
)


class Player(db.Model):
    __tablename__ = 'players'

    id: so.Mapped[int] = so.mapped_column(primary_key=True)
    first_name: so.Mapped[str] = so.mapped_column(sa.String(64), index=True, nullable=False)
    last_name: so.Mapped[str] = so.mapped_column(sa.String(64), index=True, nullable=False)
    jersey_name: so.Mapped[Optional[str]] = so.mapped_column(sa.String(64))
    phone: so.Mapped[Optional[str]] = so.mapped_column(sa.String(32))
    email: so.Mapped[Optional[str]] = so.mapped_column(sa.String(120))
    address: so.Mapped[Optional[str]] = so.mapped_column(sa.String(255))
    date_of_birth: so.Mapped[Optional[date]] = so.mapped_column(sa.Date)
    gender: so.Mapped[Optional[str]] = so.mapped_column(sa.String(1))  # 'M', 'F' or None
    uniform_number: so.Mapped[Optional[int]] = so.mapped_column(sa.Integer)
    jersey_size: so.Mapped[Optional[str]] = so.mapped_column(sa.String(8))
    jersey_types: so.Mapped[list] = so.mapped_column(sa.JSON, default=list, nullable=False)
    created_at: so.Mapped[datetime] = so.mapped_column(sa.DateTime, default=datetime.utcnow, nullable=False)

    invitations: so.Mapped[list['TournamentInvitation']] = so.relationship(
        'TournamentInvitation', back_populates='player', cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f"<Player id={self.id}, name='{self.full_name}'>"

    @property
    def full_name(self):
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Park(db.Model):
    __tablename__ = 'parks'

    id: so.Mapped[int] = so.mapped_column(primary_key=True)
    name: so.Mapped[str] = so.mapped_column(sa.String(128), nullable=False)
    address: so.Mapped[Optional[str]] = so.mapped_column(sa.String(255))
    city: so.Mapped[Optional[str]] = so.mapped_column(sa.String(64))
    state: so.Mapped[Optional[str]] = so.mapped_column(sa.String(32))
    maps_url: so.Mapped[Optional[str]] = so.mapped_column(sa.String(512))
    created_at: so.Mapped[datetime] = so.mapped_column(sa.DateTime, default=datetime.utcnow, nullable=False)

    tournaments: so.Mapped[list['Tournament']] = so.relationship(
        'Tournament', secondary=tournament_parks, back_populates='parks'
    )

    def __repr__(self):
        return f"<Park id={self.id}, name='{self.name}'>"


class Tournament(db.Model):
    __tablename__ = 'tournaments'

    id: so.Mapped[int] = so.mapped_column(primary_key=True)
    public_id: so.Mapped[str] = so.mapped_column(sa.String(32), unique=True, index=True,
                                                 default=_new_public_id, nullable=False)
    name: so.Mapped[str] = so.mapped_column(sa.String(255), nullable=False)
    type: so.Mapped[str] = so.mapped_column(sa.String(8), default='coed', nullable=False)  # 'coed' or 'mens'
    location: so.Mapped[Optional[str]] = so.mapped_column(sa.String(255))
    date: so.Mapped[date] = so.mapped_column(sa.Date, index=True, nullable=False)
    total_cost: so.Mapped[Optional[Decimal]] = so.mapped_column(sa.Numeric(10, 2))
    additional_fees: so.Mapped[Optional[Decimal]] = so.mapped_column(sa.Numeric(10, 2))
    venmo_link: so.Mapped[Optional[str]] = so.mapped_column(sa.String(512))
    image_filename: so.Mapped[Optional[str]] = so.mapped_column(sa.String(255))
    archived: so.Mapped[bool] = so.mapped_column(sa.Boolean, default=False, nullable=False)
    park_id: so.Mapped[Optional[int]] = so.mapped_column(
        sa.Integer, sa.ForeignKey('parks.id', ondelete='SET NULL'), nullable=True
    )
    created_at: so.Mapped[datetime] = so.mapped_column(sa.DateTime, default=datetime.utcnow, nullable=False)

    # Primary park (kept alongside the many-to-many list)
    park: so.Mapped[Optional['Park']] = so.relationship('Park', foreign_keys=[park_id])
    parks: so.Mapped[list['Park']] = so.relationship(
        'Park', secondary=tournament_parks, back_populates='tournaments'
    )
    invitations: so.Mapped[list['TournamentInvitation']] = so.relationship(
        'TournamentInvitation', back_populates='tournament', cascade='all, delete-orphan'
    )
    documents: so.Mapped[list['Document']] = so.relationship(
        'Document', back_populates='tournament', cascade='all, delete-orphan',
        order_by='Document.created_at.desc()'
    )
    lodging_options: so.Mapped[list['LodgingOption']] = so.relationship(
        'LodgingOption', back_populates='tournament', cascade='all, delete-orphan',
        order_by='LodgingOption.created_at'
    )

    def __repr__(self):
        return f"<Tournament id={self.id}, name='{self.name}', date={self.date}, type={self.type}>"

    @property
    def is_coed(self):
        return self.type == 'coed'

    @property
    def type_label(self):
        return 'Coed' if self.type == 'coed' else 'Mens'

    @property
    def slug(self):
        """Public share slug: the slugified name followed by a short id."""
        from dugout.utils import tournament_slug
        return tournament_slug(self)

    def all_parks(self):
        """Parks for the tournament with the primary park first."""
        parks = list(self.parks)
        if self.park and self.park not in parks:
            parks.insert(0, self.park)
        return parks

    def get_waiver(self):
        return next((doc for doc in self.documents if doc.is_waiver), None)


class TournamentInvitation(db.Model):
    __tablename__ = 'tournament_invitations'
    __table_args__ = (
        sa.UniqueConstraint('tournament_id', 'player_id', name='uq_invitation_tournament_player'),
    )

    id: so.Mapped[int] = so.mapped_column(primary_key=True)
    tournament_id: so.Mapped[int] = so.mapped_column(
        sa.Integer, sa.ForeignKey('tournaments.id', ondelete='CASCADE'), nullable=False, index=True
    )
    player_id: so.Mapped[int] = so.mapped_column(
        sa.Integer, sa.ForeignKey('players.id', ondelete='CASCADE'), nullable=False, index=True
    )
    status: so.Mapped[str] = so.mapped_column(sa.String(10), default='pending', nullable=False)  # pending, in, out
    paid: so.Mapped[bool] = so.mapped_column(sa.Boolean, default=False, nullable=False)
    signature_token: so.Mapped[str] = so.mapped_column(sa.String(64), unique=True, index=True,
                                                       default=_new_signature_token, nullable=False)
    signature_filename: so.Mapped[Optional[str]] = so.mapped_column(sa.String(255))
    signed_at: so.Mapped[Optional[datetime]] = so.mapped_column(sa.DateTime)
    lodging_id: so.Mapped[Optional[int]] = so.mapped_column(
        sa.Integer, sa.ForeignKey('tournament_lodging.id', ondelete='SET NULL'), nullable=True
    )
    lodging_status: so.Mapped[Optional[str]] = so.mapped_column(sa.String(10))  # 'in', 'out' or None
    lodging_adults: so.Mapped[Optional[int]] = so.mapped_column(sa.Integer, default=1)
    lodging_kids: so.Mapped[Optional[int]] = so.mapped_column(sa.Integer, default=0)
    created_at: so.Mapped[datetime] = so.mapped_column(sa.DateTime, default=datetime.utcnow, nullable=False)

    tournament: so.Mapped['Tournament'] = so.relationship('Tournament', back_populates='invitations')
    player: so.Mapped['Player'] = so.relationship('Player', back_populates='invitations')
    lodging: so.Mapped[Optional['LodgingOption']] = so.relationship('LodgingOption', back_populates='invitations')

    def __repr__(self):
        return f"<TournamentInvitation id={self.id}, player_id={self.player_id}, status='{self.status}'>"

    @property
    def is_signed(self):
        return bool(self.signature_filename)


class Document(db.Model):
    __tablename__ = 'documents'

    id: so.Mapped[int] = so.mapped_column(primary_key=True)
    tournament_id: so.Mapped[int] = so.mapped_column(
        sa.Integer, sa.ForeignKey('tournaments.id', ondelete='CASCADE'), nullable=False, index=True
    )
    name: so.Mapped[str] = so.mapped_column(sa.String(255), nullable=False)
    filename: so.Mapped[str] = so.mapped_column(sa.String(255), nullable=False)  # key in the file store
    file_type: so.Mapped[str] = so.mapped_column(sa.String(10), nullable=False)  # 'pdf' or 'image'
    is_waiver: so.Mapped[bool] = so.mapped_column(sa.Boolean, default=False, nullable=False)
    created_at: so.Mapped[datetime] = so.mapped_column(sa.DateTime, default=datetime.utcnow, nullable=False)

    tournament: so.Mapped['Tournament'] = so.relationship('Tournament', back_populates='documents')

    def __repr__(self):
        return f"<Document id={self.id}, name='{self.name}', waiver={self.is_waiver}>"


class LodgingOption(db.Model):
    __tablename__ = 'tournament_lodging'

    id: so.Mapped[int] = so.mapped_column(primary_key=True)
    tournament_id: so.Mapped[int] = so.mapped_column(
        sa.Integer, sa.ForeignKey('tournaments.id', ondelete='CASCADE'), nullable=False, index=True
    )
    name: so.Mapped[str] = so.mapped_column(sa.String(255), nullable=False)
    url: so.Mapped[Optional[str]] = so.mapped_column(sa.String(512))
    capacity: so.Mapped[Optional[int]] = so.mapped_column(sa.Integer)
    total_cost: so.Mapped[Optional[Decimal]] = so.mapped_column(sa.Numeric(10, 2))
    additional_fees: so.Mapped[Optional[Decimal]] = so.mapped_column(sa.Numeric(10, 2))
    venmo_link: so.Mapped[Optional[str]] = so.mapped_column(sa.String(512))
    created_at: so.Mapped[datetime] = so.mapped_column(sa.DateTime, default=datetime.utcnow, nullable=False)

    tournament: so.Mapped['Tournament'] = so.relationship('Tournament', back_populates='lodging_options')
    invitations: so.Mapped[list['TournamentInvitation']] = so.relationship(
        'TournamentInvitation', back_populates='lodging'
    )

    def __repr__(self):
        return f"<LodgingOption id={self.id}, name='{self.name}', tournament_id={self.tournament_id}>"
