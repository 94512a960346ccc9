from flask import Blueprint, jsonify
from flask_login import login_required

from vidshare.services import comments as comment_store
from vidshare.services.identity import request_context, require_authenticated

comments_bp = Blueprint('comments', __name__, url_prefix='/comments')


@comments_bp.route('/<int:comment_id>/like', methods=['POST'])
@login_required
def like_comment(comment_id):
    return jsonify({"likes": comment_store.like(comment_id)})


@comments_bp.route('/<int:comment_id>/dislike', methods=['POST'])
@login_required
def dislike_comment(comment_id):
    return jsonify({"dislikes": comment_store.dislike(comment_id)})


@comments_bp.route('/<int:comment_id>', methods=['DELETE'])
@login_required
def delete_comment(comment_id):
    viewer = require_authenticated(request_context())
    comment_store.delete_comment(comment_id, viewer.subject_id)
    return jsonify({"message": "Comment deleted successfully"})
