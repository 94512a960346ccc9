from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user

from vidshare.services.identity import update_display_name

users_bp = Blueprint('users', __name__, url_prefix='/users')


@users_bp.route('/profile')
@login_required
def profile():
    return jsonify({"displayName": current_user.display_name})


@users_bp.route('/updateProfile', methods=['POST'])
@login_required
def update_profile():
    payload = request.get_json(silent=True) or {}
    user = update_display_name(current_user, payload.get('displayName'))
    current_app.logger.info(f"Profile updated for '{user.subject_id}'")
    return jsonify({"message": "Profile updated successfully!", "user": user.to_dict()})
