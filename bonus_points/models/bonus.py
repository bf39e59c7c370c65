"""
Bonus catalog models.

A Bonus is a reward redeemable for points. Bonuses are soft-deleted:
destroying one sets ``deleted_at`` and punches its slug so the slug can be
taken by a new record. Default queries only see active (non-deleted) rows.
"""
from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy import inspect
from ..extensions import db
from ..utils.slugs import normalize_slug, punched_slug


class Bonus(db.Model):
    """
    Reward item listed in the bonus catalog.
    """
    __tablename__ = 'bonuses'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, default='', server_default='')
    description = db.Column(db.Text)
    points = db.Column(db.Integer, nullable=False, default=0, server_default='0')

    # Availability window
    available_on = db.Column(db.DateTime)
    discontinue_on = db.Column(db.DateTime)

    # Soft delete marker (NULL = active)
    deleted_at = db.Column(db.DateTime)

    slug = db.Column(db.String(255))
    count_on_hand = db.Column(db.Integer, nullable=False, default=0, server_default='0')

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    images = db.relationship(
        'BonusImage',
        backref='bonus',
        cascade='all, delete-orphan',
        order_by='BonusImage.position'
    )
    slugs = db.relationship(
        'BonusSlug',
        backref='bonus',
        cascade='all, delete-orphan',
        order_by='BonusSlug.id'
    )

    __table_args__ = (
        db.Index('index_bonuses_on_available_on', 'available_on'),
        db.Index('index_bonuses_on_deleted_at', 'deleted_at'),
        db.Index('index_bonuses_on_name', 'name'),
        db.Index('index_bonuses_on_slug', 'slug', unique=True),
    )

    def __repr__(self):
        return f'<Bonus {self.slug or self.name}>'

    # ==================== Scopes ====================

    @classmethod
    def active(cls):
        """Query over bonuses that have not been soft-deleted."""
        return cls.query.filter(cls.deleted_at.is_(None))

    @classmethod
    def with_deleted(cls):
        return cls.query

    @classmethod
    def only_deleted(cls):
        return cls.query.filter(cls.deleted_at.isnot(None))

    # ==================== State ====================

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def is_discontinued(self, now: datetime = None) -> bool:
        now = now or datetime.utcnow()
        return self.discontinue_on is not None and self.discontinue_on <= now

    def is_available(self, now: datetime = None) -> bool:
        """Available once available_on has passed, while not deleted or discontinued."""
        now = now or datetime.utcnow()
        if self.available_on is None or self.available_on > now:
            return False
        return not self.is_deleted and not self.is_discontinued(now)

    @property
    def is_frozen(self) -> bool:
        """True once the row has been hard-deleted and the instance is read-only."""
        state = inspect(self)
        return state.deleted or state.was_deleted

    # ==================== Slugs ====================

    def slug_candidates(self) -> List[str]:
        """Slugs to try in order: the name, then the name qualified by id."""
        base = normalize_slug(self.name)
        candidates = []
        if base:
            candidates.append(base)
            if self.id is not None:
                candidates.append(f'{base}-{self.id}')
        return candidates

    def normalize_slug(self) -> None:
        self.slug = normalize_slug(self.slug)

    def slug_taken(self, slug: str) -> bool:
        """Check slug against every bonus, soft-deleted ones included."""
        query = Bonus.query.filter(Bonus.slug == slug)
        if self.id is not None:
            query = query.filter(Bonus.id != self.id)
        with db.session.no_autoflush:
            return db.session.query(query.exists()).scalar()

    def punch_slug(self, timestamp: int = None) -> Optional[str]:
        """
        Rewrite the slug to ``<unix timestamp>_<slug>`` so it can be reused.

        Skipped for frozen (hard-deleted) instances.
        """
        if self.is_frozen:
            return None
        self.slug = punched_slug(self.slug, timestamp)
        return self.slug

    # ==================== Validation ====================

    def validate(self, check_slug: bool = True) -> Dict[str, List[str]]:
        """Return a field -> messages map; empty when the bonus is valid."""
        errors = {}
        if not (self.name or '').strip():
            errors.setdefault('name', []).append("can't be blank")
        if self.points is None:
            errors.setdefault('points', []).append("can't be blank")
        elif not isinstance(self.points, int) or isinstance(self.points, bool):
            errors.setdefault('points', []).append('is not a number')
        if not check_slug:
            return errors
        if not self.slug:
            errors.setdefault('slug', []).append("can't be blank")
        elif self.slug_taken(self.slug):
            errors.setdefault('slug', []).append('has already been taken')
        return errors

    # ==================== Serialization ====================

    @property
    def small_image(self) -> Optional['BonusImage']:
        return self.images[0] if self.images else None

    def to_dict(self, include_details: bool = False):
        data = {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'points': self.points,
            'count_on_hand': self.count_on_hand,
            'available': self.is_available(),
            'available_on': self.available_on.isoformat() if self.available_on else None,
            'images': [image.to_dict() for image in self.images],
        }
        if include_details:
            data.update({
                'description': self.description,
                'discontinue_on': self.discontinue_on.isoformat() if self.discontinue_on else None,
                'deleted_at': self.deleted_at.isoformat() if self.deleted_at else None,
                'slug_history': [entry.slug for entry in self.slugs],
                'created_at': self.created_at.isoformat() if self.created_at else None,
                'updated_at': self.updated_at.isoformat() if self.updated_at else None,
            })
        return data


class BonusImage(db.Model):
    """Image attached to a bonus. Owned by the bonus and ordered by position."""
    __tablename__ = 'bonus_images'

    id = db.Column(db.Integer, primary_key=True)
    bonus_id = db.Column(db.Integer, db.ForeignKey('bonuses.id', ondelete='CASCADE'), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    url = db.Column(db.String(1024), nullable=False)
    alt = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<BonusImage {self.url}>'

    def to_dict(self):
        return {
            'id': self.id,
            'position': self.position,
            'url': self.url,
            'alt': self.alt,
        }


class BonusSlug(db.Model):
    """Slug history entry, appended when a save changes the slug and on restore."""
    __tablename__ = 'bonus_slugs'

    id = db.Column(db.Integer, primary_key=True)
    bonus_id = db.Column(db.Integer, db.ForeignKey('bonuses.id', ondelete='CASCADE'), nullable=False)
    slug = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.Index('index_bonus_slugs_on_slug', 'slug'),
    )

    def __repr__(self):
        return f'<BonusSlug {self.slug}>'
