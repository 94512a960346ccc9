import logging

from sqlalchemy.orm import selectinload

from vidshare.errors import NotFoundError, ForbiddenError, ValidationError
from vidshare.models import db, Video, Comment

logger = logging.getLogger(__name__)


def _get_comment(comment_id: int) -> Comment:
    comment = db.session.get(Comment, comment_id, options=[selectinload(Comment.author)])
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def add_comment(video_id: int, author_user_id: int, content) -> Comment:
    """Create a comment on a video. Content is stored as given."""
    if not isinstance(content, str) or not content.strip():
        raise ValidationError("Comment cannot be empty")

    if db.session.get(Video, video_id) is None:
        raise NotFoundError("Video not found")

    comment = Comment(video_id=video_id, user_id=author_user_id, content=content)
    db.session.add(comment)
    db.session.commit()
    return comment


def list_comments(video_id: int) -> list[Comment]:
    """Comments of a video, best liked first, least disliked breaking ties."""
    if db.session.get(Video, video_id) is None:
        raise NotFoundError("Video not found")

    query = (
        db.select(Comment)
        .where(Comment.video_id == video_id)
        .options(selectinload(Comment.author))
        .order_by(Comment.likes.desc(), Comment.dislikes.asc(), Comment.id.asc())
    )
    return list(db.session.execute(query).scalars())


def delete_comment(comment_id: int, requesting_subject_id: str) -> None:
    """Delete a comment. Only its author may do so."""
    comment = _get_comment(comment_id)

    if comment.author is None or comment.author.subject_id != requesting_subject_id:
        logger.warning(f"Subject '{requesting_subject_id}' tried to delete comment {comment_id} it does not own")
        raise ForbiddenError("You do not have permission to delete this comment")

    db.session.delete(comment)
    db.session.commit()
    logger.info(f"Comment {comment_id} deleted by its author '{requesting_subject_id}'")


def _increment(comment_id: int, attribute: str) -> int:
    comment = _get_comment(comment_id)
    # Emits "<column> = <column> + 1"
    setattr(comment, attribute, getattr(Comment, attribute) + 1)
    db.session.commit()
    return getattr(comment, attribute)


def like(comment_id: int) -> int:
    return _increment(comment_id, "likes")


def dislike(comment_id: int) -> int:
    return _increment(comment_id, "dislikes")
