"""
Identity resolution: maps verified token claims to local user rows.

Users are provisioned lazily the first time a subject id is seen. The unique
constraint on ``users.subject_id`` is what keeps concurrent first requests
from creating two rows for the same identity.
"""

import logging
from dataclasses import dataclass

from flask_login import current_user
from sqlalchemy.exc import IntegrityError

from vidshare.errors import UnauthenticatedError, ValidationError
from vidshare.models import db, User, DEFAULT_DISPLAY_NAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Authenticated:
    """Request made with a verified identity."""

    user_id: int
    subject_id: str
    display_name: str | None


@dataclass(frozen=True)
class Anonymous:
    """Request made without any identity."""


RequestContext = Authenticated | Anonymous


def request_context() -> RequestContext:
    """Build the request context from the user attached by the auth boundary."""
    if current_user.is_authenticated:
        return Authenticated(
            user_id=current_user.id,
            subject_id=current_user.subject_id,
            display_name=current_user.display_name,
        )
    return Anonymous()


def require_authenticated(viewer: RequestContext) -> Authenticated:
    if not isinstance(viewer, Authenticated):
        raise UnauthenticatedError()
    return viewer


def resolve_user(subject_id: str, claimed_display_name: str | None = None) -> User:
    """Return the local user for ``subject_id``, creating it if needed.

    A stored "Anonymous" name is replaced by a real claimed name; any other
    stored name is left untouched.
    """
    if not subject_id:
        raise ValidationError("Subject identifier is required")

    claimed_display_name = claimed_display_name or DEFAULT_DISPLAY_NAME

    user = User.query.filter_by(subject_id=subject_id).first()
    if user is None:
        user = User(subject_id=subject_id, display_name=claimed_display_name)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # A concurrent request created the same identity first
            db.session.rollback()
            user = User.query.filter_by(subject_id=subject_id).one()
            logger.info(f"User for subject '{subject_id}' was created concurrently, reusing it")
            return user
        logger.info(f"Created new user for subject '{subject_id}'")
        return user

    if user.has_default_name() and claimed_display_name != DEFAULT_DISPLAY_NAME:
        user.display_name = claimed_display_name
        db.session.commit()
        logger.info(f"Updated display name for subject '{subject_id}'")

    return user


def update_display_name(user: User, display_name) -> User:
    if not isinstance(display_name, str) or not display_name.strip():
        raise ValidationError("Display name is required")

    user.display_name = display_name.strip()
    db.session.commit()
    logger.info(f"User '{user.subject_id}' changed display name")
    return user
