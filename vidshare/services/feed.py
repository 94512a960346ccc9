"""
Video feed: paginated and searchable listing, detail fetch and upload records.

Every row is denormalized (uploader, comments, commenter names) and annotated
with the viewer's favorite status so a client renders a page in one round trip.
"""

import logging
from dataclasses import dataclass, field

from flask import current_app

from vidshare.errors import NotFoundError, ValidationError
from vidshare.models import db, Video
from vidshare.services.favorites import favorited_ids, is_favorited, list_favorited_videos, video_load_options
from vidshare.services.identity import Authenticated, RequestContext

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
# Keeps (page - 1) * page_size within a 64-bit OFFSET
MAX_PAGE = 2 ** 31 - 1


@dataclass
class FeedPage:
    total: int
    page: int
    pages: int
    videos: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "videos": self.videos,
            "page": self.page,
            "pages": self.pages,
        }


def parse_positive_int(value, default: int) -> int:
    """Parse a query parameter as a positive integer, falling back to ``default``."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_flag(value) -> bool:
    return str(value or "").strip().lower() in ("true", "1", "yes")


def list_videos(page: int, page_size: int, search_term: str | None, favorites_only: bool,
                viewer: RequestContext) -> FeedPage:
    """List one page of videos, newest first, annotated for ``viewer``."""
    if favorites_only and isinstance(viewer, Authenticated):
        videos = list_favorited_videos(viewer.user_id)
        return FeedPage(
            total=len(videos),
            page=1,
            pages=1 if videos else 0,
            videos=[video.to_dict(is_favorite=True) for video in videos],
        )

    page = min(parse_positive_int(page, DEFAULT_PAGE), MAX_PAGE)
    page_size = min(
        parse_positive_int(page_size, DEFAULT_PAGE_SIZE),
        current_app.config.get("MAX_PAGE_SIZE", 100),
    )

    query = db.select(Video).options(*video_load_options())
    search_term = (search_term or "").strip()
    if search_term:
        query = query.filter(db.func.lower(Video.title).contains(search_term.lower(), autoescape=True))
    query = query.order_by(Video.upload_date.desc(), Video.id.desc())

    pagination = db.paginate(query, page=page, per_page=page_size, error_out=False, max_per_page=page_size)

    favorites = set()
    if isinstance(viewer, Authenticated):
        favorites = favorited_ids(viewer.user_id, (video.id for video in pagination.items))

    return FeedPage(
        total=pagination.total,
        page=page,
        pages=pagination.pages,
        videos=[video.to_dict(is_favorite=video.id in favorites) for video in pagination.items],
    )


def get_video(video_id: int, viewer: RequestContext) -> tuple[Video, bool]:
    """Fetch a video for display, counting one view."""
    video = db.session.get(Video, video_id)
    if video is None:
        raise NotFoundError("Video not found")

    video.increment_views()
    db.session.commit()

    video = db.session.execute(
        db.select(Video)
        .where(Video.id == video_id)
        .options(*video_load_options())
        .execution_options(populate_existing=True)
    ).scalar_one()

    is_favorite = False
    if isinstance(viewer, Authenticated):
        is_favorite = is_favorited(viewer.user_id, video.id)

    return video, is_favorite


def create_video(uploader_id: int, title: str, description: str | None, video_url: str,
                 thumbnail_url: str | None = None) -> Video:
    """Record an uploaded video. Media must already be stored."""
    if not title:
        raise ValidationError("Title is required")
    if not video_url:
        raise ValidationError("Video URL is required")

    video = Video(
        title=title,
        description=description or None,
        video_url=video_url,
        thumbnail_url=thumbnail_url,
        uploader_id=uploader_id,
        view_count=0,
    )
    db.session.add(video)
    db.session.commit()
    logger.info(f"User {uploader_id} uploaded video {video.id} '{title}'")
    return video
