"""Refresh token store - one live refresh token per user, rotated on every use."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.config import settings
from catalog.core.exceptions import ResourceNotFoundError, TokenExpiredError
from catalog.core.security import generate_refresh_token_value
from catalog.models.security import RefreshToken
from catalog.models.user import User

logger = logging.getLogger(__name__)


class RefreshTokenService:
    """Manage the per-user refresh token row."""

    @staticmethod
    def _as_utc(dt: datetime) -> datetime:
        # SQLite hands back naive datetimes; everything is stored in UTC.
        return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt

    @staticmethod
    def find_by_token(db: Session, token: str, *, for_update: bool = False) -> Optional[RefreshToken]:
        query = db.query(RefreshToken).filter(RefreshToken.token == token)
        if for_update:
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def find_by_user_id(db: Session, user_id: int) -> Optional[RefreshToken]:
        return db.query(RefreshToken).filter(RefreshToken.user_id == user_id).first()

    @staticmethod
    def issue_or_rotate(db: Session, user_id: int, ttl: Optional[timedelta] = None) -> RefreshToken:
        """
        Upsert the user's refresh token: overwrite token and expiry if a row
        exists, insert one otherwise. Committed before returning.
        """
        if db.query(User.id).filter(User.id == user_id).first() is None:
            raise ResourceNotFoundError("User")

        expires_at = datetime.now(timezone.utc) + (ttl if ttl is not None else settings.refresh_token_ttl)

        record = (
            db.query(RefreshToken)
            .filter(RefreshToken.user_id == user_id)
            .with_for_update()
            .first()
        )
        if record is None:
            record = RefreshToken(user_id=user_id)
            db.add(record)
        record.token = generate_refresh_token_value()
        record.expires_at = expires_at

        try:
            db.commit()
        except IntegrityError:
            # Another request inserted this user's row first; last writer wins.
            db.rollback()
            record = (
                db.query(RefreshToken)
                .filter(RefreshToken.user_id == user_id)
                .with_for_update()
                .one()
            )
            record.token = generate_refresh_token_value()
            record.expires_at = expires_at
            db.commit()

        db.refresh(record)
        logger.info(f"Issued refresh token for user_id={user_id}")
        return record

    @staticmethod
    def is_expired(record: RefreshToken, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return RefreshTokenService._as_utc(record.expires_at) < now

    @staticmethod
    def verify_not_expired(db: Session, record: RefreshToken) -> RefreshToken:
        """
        Return the token if still live; otherwise delete it and raise.

        An expired token is removed on detection, so it can never be
        presented successfully again.
        """
        if RefreshTokenService.is_expired(record):
            user_id = record.user_id
            db.delete(record)
            db.commit()
            logger.warning(f"Expired refresh token presented for user_id={user_id}; deleted")
            raise TokenExpiredError("Refresh token was expired. Please make a new signin request")
        return record

    @staticmethod
    def revoke(db: Session, user_id: int) -> int:
        """Delete the user's refresh token; returns rows deleted (0 when none existed)."""
        count = (
            db.query(RefreshToken)
            .filter(RefreshToken.user_id == user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        if count:
            logger.info(f"Revoked refresh token for user_id={user_id}")
        return count


refresh_token_service = RefreshTokenService()
