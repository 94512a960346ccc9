import logging
from flask import Blueprint, jsonify, request, send_from_directory
from flask_login import login_required

from vidshare.errors import ValidationError
from vidshare.services import comments as comment_store
from vidshare.services import favorites as favorite_ledger
from vidshare.services import feed
from vidshare.services.identity import request_context, require_authenticated
from vidshare.services.storage import media_storage

logger = logging.getLogger(__name__)

videos_bp = Blueprint('videos', __name__)


@videos_bp.route('/media/<kind>/<path:filename>')
def serve_media(kind, filename):
    """Serve stored videos and thumbnails."""
    return send_from_directory(media_storage.folder(kind), filename)


@videos_bp.route('/videos')
def list_videos():
    page = feed.list_videos(
        page=request.args.get('page'),
        page_size=request.args.get('limit'),
        search_term=request.args.get('searchTerm', ''),
        favorites_only=feed.parse_flag(request.args.get('showFavorites')),
        viewer=request_context(),
    )
    return jsonify(page.to_dict())


@videos_bp.route('/videos/favorites')
@login_required
def list_favorites():
    viewer = require_authenticated(request_context())
    videos = favorite_ledger.list_favorited_videos(viewer.user_id)
    return jsonify([video.to_dict(is_favorite=True) for video in videos])


@videos_bp.route('/videos/<int:video_id>')
def get_video(video_id):
    video, is_favorite = feed.get_video(video_id, request_context())
    return jsonify(video.to_dict(is_favorite=is_favorite))


@videos_bp.route('/videos/<int:video_id>/favorite', methods=['POST'])
@login_required
def toggle_favorite(video_id):
    viewer = require_authenticated(request_context())
    state = favorite_ledger.toggle_favorite(viewer.user_id, video_id)
    if state is favorite_ledger.FavoriteState.ADDED:
        return jsonify({"message": "Video added to favorites"})
    return jsonify({"message": "Video removed from favorites"})


@videos_bp.route('/videos/<int:video_id>/comments', methods=['POST'])
@login_required
def post_comment(video_id):
    viewer = require_authenticated(request_context())
    payload = request.get_json(silent=True) or {}
    comment = comment_store.add_comment(video_id, viewer.user_id, payload.get('content'))
    return jsonify(comment.to_dict()), 201


@videos_bp.route('/videos/<int:video_id>/comments')
def list_comments(video_id):
    comments = comment_store.list_comments(video_id)
    return jsonify([comment.to_dict() for comment in comments])


@videos_bp.route('/videos/upload', methods=['POST'])
@login_required
def upload_video():
    viewer = require_authenticated(request_context())

    title = request.form.get('title', '').strip()
    if not title:
        raise ValidationError("Title is required")
    description = request.form.get('description', '').strip()

    video_url = media_storage.save(request.files.get('video'), "videos")
    thumbnail_url = None
    try:
        thumbnail = request.files.get('thumbnail')
        if thumbnail is not None and thumbnail.filename:
            thumbnail_url = media_storage.save(thumbnail, "thumbnails")

        video = feed.create_video(
            uploader_id=viewer.user_id,
            title=title,
            description=description,
            video_url=video_url,
            thumbnail_url=thumbnail_url,
        )
    except Exception:
        # Stored media must not outlive a failed upload
        media_storage.delete(video_url, "videos")
        media_storage.delete(thumbnail_url, "thumbnails")
        raise

    return jsonify({
        "message": "Video uploaded successfully",
        "video": video.to_dict(include_comments=False),
        "videoUrl": video.video_url,
        "thumbnail": video.thumbnail_url,
    }), 201
