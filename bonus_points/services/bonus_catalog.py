"""
Bonus catalog service.

Read side:
- list_active(): paginated listing of non-deleted bonuses
- get_active_by_id(): lookup by numeric id or slug, soft-deleted rows excluded

Admin write side:
- create / update with slug generation and validation
- destroy (soft delete + slug punch), restore, purge (hard delete)
- image management

Lifecycle:
    active --destroy--> soft-deleted --restore--> active
"""
import calendar
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Union

from flask import current_app

from ..extensions import db
from ..models.bonus import Bonus, BonusImage, BonusSlug
from ..utils.exceptions import BonusNotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Attributes the admin write path may set
EDITABLE_FIELDS = (
    'name',
    'description',
    'points',
    'available_on',
    'discontinue_on',
    'slug',
    'count_on_hand',
)


class BonusCatalog:
    """
    Central service for bonus catalog operations.

    Usage:
        catalog = BonusCatalog()
        page = catalog.list_active(page=1)
        bonus = catalog.get_active_by_id('free-coffee-mug')
    """

    # ==================== Read ====================

    def list_active(self, page: int = 1, per_page: Optional[int] = None):
        """
        Paginate bonuses whose soft-delete marker is unset.

        Returns:
            flask_sqlalchemy Pagination (items, total, page, per_page, pages)
        """
        per_page = self._clamp_per_page(per_page)
        query = Bonus.active().order_by(Bonus.name.asc(), Bonus.id.asc())
        return query.paginate(page=max(page or 1, 1), per_page=per_page, error_out=False)

    def get_active_by_id(self, identifier: Union[int, str]) -> Bonus:
        """
        Find an active bonus by numeric id or slug.

        Raises:
            BonusNotFoundError: no active bonus matches, including when the
                matching record has been soft-deleted
        """
        bonus = self._resolve(Bonus.active(), identifier)
        if bonus is None:
            raise BonusNotFoundError(identifier)
        return bonus

    def get_by_id_with_deleted(self, identifier: Union[int, str]) -> Bonus:
        bonus = self._resolve(Bonus.with_deleted(), identifier)
        if bonus is None:
            raise BonusNotFoundError(identifier)
        return bonus

    # ==================== Write ====================

    def create_bonus(self, **attrs) -> Bonus:
        """
        Create a bonus. A slug is generated from the name unless one is given.

        Raises:
            ValidationError: name/points missing, slug blank or already taken
        """
        bonus = Bonus()
        self._assign(bonus, attrs)
        if bonus.points is None and 'points' not in attrs:
            bonus.points = 0
        if bonus.count_on_hand is None:
            bonus.count_on_hand = 0

        # Fail before the insert when required columns are missing
        errors = bonus.validate(check_slug=False)
        if errors:
            logger.warning(f'Bonus failed validation: {errors}')
            raise ValidationError(errors, 'Bonus')

        try:
            db.session.add(bonus)
            if bonus.slug:
                bonus.normalize_slug()
            else:
                # id is needed for the name-id candidate
                db.session.flush()
                bonus.slug = self._generate_slug(bonus)
            self._validate(bonus)
            self._record_slug(bonus)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f'Created bonus {bonus.id} ({bonus.slug})')
        return bonus

    def update_bonus(self, identifier: Union[int, str], **attrs) -> Bonus:
        """
        Update an active bonus. The slug is normalized before validation.

        Raises:
            BonusNotFoundError: bonus missing or soft-deleted
            ValidationError: resulting record is invalid
        """
        bonus = self.get_active_by_id(identifier)
        try:
            self._assign(bonus, attrs)
            self._save(bonus)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return bonus

    def destroy_bonus(self, identifier: Union[int, str], now: datetime = None) -> Bonus:
        """
        Soft-delete a bonus.

        Sets deleted_at, deletes its images and punches the slug so the
        original slug is free for a new record.
        """
        bonus = self.get_active_by_id(identifier)
        now = now or datetime.utcnow()
        original_slug = bonus.slug

        try:
            bonus.deleted_at = now
            for image in list(bonus.images):
                bonus.images.remove(image)
            bonus.punch_slug(calendar.timegm(now.utctimetuple()))
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f'Destroyed bonus {bonus.id}: slug {original_slug!r} -> {bonus.slug!r}')
        return bonus

    def restore_bonus(self, identifier: Union[int, str]) -> Bonus:
        """
        Restore a soft-deleted bonus and re-save it.

        The re-save runs the normal save path (slug normalization, validation,
        updated_at) and appends a slug history entry.
        """
        bonus = self._resolve(Bonus.only_deleted(), identifier)
        if bonus is None:
            raise BonusNotFoundError(identifier)

        try:
            bonus.deleted_at = None
            self._save(bonus, force_history=True)
            bonus.updated_at = datetime.utcnow()
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f'Restored bonus {bonus.id} ({bonus.slug})')
        return bonus

    def purge_bonus(self, identifier: Union[int, str]) -> Dict[str, Any]:
        """Hard-delete a bonus (active or soft-deleted) together with its images."""
        bonus = self.get_by_id_with_deleted(identifier)
        bonus_id = bonus.id
        try:
            db.session.delete(bonus)
            db.session.flush()
            # Frozen instance, nothing to punch
            bonus.punch_slug()
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f'Purged bonus {bonus_id}')
        return {'success': True, 'bonus_id': bonus_id}

    def add_image(
        self,
        identifier: Union[int, str],
        url: str,
        alt: str = None,
        position: Optional[int] = None
    ) -> BonusImage:
        """Attach an image to an active bonus, appended after existing images by default."""
        bonus = self.get_active_by_id(identifier)
        if not url:
            raise ValidationError({'url': ["can't be blank"]}, 'Image')

        if position is None:
            position = max((image.position for image in bonus.images), default=0) + 1

        image = BonusImage(url=url, alt=alt, position=position)
        try:
            bonus.images.append(image)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return image

    # ==================== Internals ====================

    def _clamp_per_page(self, per_page: Optional[int]) -> int:
        default = current_app.config.get('BONUSES_PER_PAGE', 12)
        maximum = current_app.config.get('BONUSES_MAX_PER_PAGE', 100)
        if not per_page or per_page < 1:
            return default
        return min(per_page, maximum)

    def _resolve(self, query, identifier) -> Optional[Bonus]:
        """Numeric identifiers are tried as ids first, then as slugs."""
        if identifier is None:
            return None
        if isinstance(identifier, int) or str(identifier).isdigit():
            bonus = query.filter(Bonus.id == int(identifier)).first()
            if bonus is not None or isinstance(identifier, int):
                return bonus
        return query.filter(Bonus.slug == str(identifier)).first()

    def _assign(self, bonus: Bonus, attrs: Dict[str, Any]) -> None:
        unknown = set(attrs) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ['is not a permitted attribute'] for field in unknown}, 'Bonus')
        for field, value in attrs.items():
            setattr(bonus, field, value)

    def _generate_slug(self, bonus: Bonus) -> Optional[str]:
        for candidate in bonus.slug_candidates():
            if not bonus.slug_taken(candidate):
                return candidate
        candidates = bonus.slug_candidates()
        if candidates:
            return f'{candidates[-1]}-{uuid.uuid4().hex[:8]}'
        return None

    def _save(self, bonus: Bonus, force_history: bool = False) -> None:
        """Normalize, validate and stage an existing bonus."""
        if bonus.slug is None:
            bonus.slug = self._generate_slug(bonus)
        bonus.normalize_slug()
        self._validate(bonus)
        self._record_slug(bonus, force=force_history)

    def _validate(self, bonus: Bonus) -> None:
        errors = bonus.validate()
        if errors:
            logger.warning(f'Bonus {bonus.id} failed validation: {errors}')
            raise ValidationError(errors, 'Bonus')

    def _record_slug(self, bonus: Bonus, force: bool = False) -> None:
        latest = bonus.slugs[-1].slug if bonus.slugs else None
        if force or latest != bonus.slug:
            bonus.slugs.append(BonusSlug(slug=bonus.slug))
