import logging
from enum import Enum

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from vidshare.errors import NotFoundError
from vidshare.models import db, User, Video, Comment, Favorite

logger = logging.getLogger(__name__)


class FavoriteState(Enum):
    ADDED = "added"
    REMOVED = "removed"


def video_load_options():
    """Eager loads for a fully denormalized video row."""
    return (
        selectinload(Video.uploader),
        selectinload(Video.comments).selectinload(Comment.author),
    )


def toggle_favorite(user_id: int, video_id: int) -> FavoriteState:
    """Add the video to the user's favorites, or remove it if already there."""
    if db.session.get(User, user_id) is None:
        raise NotFoundError("User not found")
    if db.session.get(Video, video_id) is None:
        raise NotFoundError("Video not found")

    existing = Favorite.query.filter_by(user_id=user_id, video_id=video_id).first()
    if existing:
        db.session.delete(existing)
        db.session.commit()
        logger.info(f"User {user_id} removed video {video_id} from favorites")
        return FavoriteState.REMOVED

    db.session.add(Favorite(user_id=user_id, video_id=video_id))
    try:
        db.session.commit()
    except IntegrityError:
        # Unique (user_id, video_id) rejected a concurrent duplicate: the pair is favorited
        db.session.rollback()
        logger.info(f"Favorite ({user_id}, {video_id}) already inserted by a concurrent request")
        return FavoriteState.ADDED

    logger.info(f"User {user_id} added video {video_id} to favorites")
    return FavoriteState.ADDED


def is_favorited(user_id: int, video_id: int) -> bool:
    return Favorite.query.filter_by(user_id=user_id, video_id=video_id).first() is not None


def favorited_ids(user_id: int, video_ids) -> set[int]:
    """Return which of ``video_ids`` the user has favorited, in one query."""
    video_ids = list(video_ids)
    if not video_ids:
        return set()

    rows = db.session.execute(
        db.select(Favorite.video_id).where(
            Favorite.user_id == user_id,
            Favorite.video_id.in_(video_ids),
        )
    ).scalars()
    return set(rows)


def list_favorited_videos(user_id: int) -> list[Video]:
    """All videos favorited by the user, most recently favorited first."""
    query = (
        db.select(Video)
        .join(Favorite, Favorite.video_id == Video.id)
        .where(Favorite.user_id == user_id)
        .options(*video_load_options())
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
    )
    return list(db.session.execute(query).scalars())
