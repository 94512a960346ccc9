import os
import secrets
from logging.config import dictConfig
from flask import Flask, jsonify, current_app
from flask.cli import load_dotenv
from flask_login import LoginManager

import vidshare
from vidshare.errors import UnauthenticatedError, register_error_handlers
from vidshare.models import db
from vidshare.routes import videos_bp, comments_bp, users_bp
from vidshare.services.identity import resolve_user
from vidshare.services.storage import media_storage
from vidshare.services.token_auth import TokenAuthConfig, TokenAuthService, extract_bearer_token

login_manager = LoginManager()


@login_manager.request_loader
def load_user_from_request(request):
    """Resolve the bearer token of the request to a local user, creating it on first contact."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        return None

    token_service = current_app.config.get("TOKEN_SERVICE")
    if token_service is None:
        raise UnauthenticatedError("Token authentication is not configured")

    claims = token_service.verify(token)
    return resolve_user(claims.subject_id, claims.display_name)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({"error": UnauthenticatedError.default_message}), 401


def configure_logging(level: str):
    dictConfig({
        'version': 1,
        'formatters': {'default': {
            'format': '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
        }},
        'handlers': {'wsgi': {
            'class': 'logging.StreamHandler',
            'stream': 'ext://flask.logging.wsgi_errors_stream',
            'formatter': 'default'
        }},
        'root': {
            'level': level,
            'handlers': ['wsgi']
        }
    })


def create_app(test_config=None):
    load_dotenv()
    configure_logging(os.environ.get("VIDSHARE_LOG_LEVEL", "INFO").upper())
    app = Flask(__name__)

    # Check if running in test mode (from environment or test_config)
    is_testing = (
        os.environ.get("TESTING", "").lower() in ("true", "1", "yes")
        or (test_config and test_config.get("TESTING"))
    )

    app.config["SECRET_KEY"] = os.environ.get("VIDSHARE_SECRET_KEY") or secrets.token_hex(32)

    # Database configuration: any SQLAlchemy URL, SQLite by default
    if is_testing:
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        app.config["TESTING"] = True
    else:
        app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get("VIDSHARE_DATABASE_URL") or "sqlite:///vidshare.db"

    app.config["MEDIA_FOLDER"] = os.environ.get("VIDSHARE_MEDIA_FOLDER") or os.path.join(app.instance_path, "media")
    app.config["MAX_CONTENT_LENGTH"] = int(os.environ.get("VIDSHARE_MAX_UPLOAD_MB", "512")) * 1024 * 1024
    app.config["MAX_PAGE_SIZE"] = int(os.environ.get("VIDSHARE_MAX_PAGE_SIZE", "100"))

    token_config = TokenAuthConfig.from_env(os.environ)
    app.config["TOKEN_SERVICE"] = TokenAuthService(token_config) if token_config else None

    # Apply additional test configuration if provided
    if test_config:
        app.config.update(test_config)

    db.init_app(app)
    login_manager.init_app(app)
    media_storage.init_app(app)

    with app.app_context():
        db.create_all()

    app.register_blueprint(videos_bp)
    app.register_blueprint(comments_bp)
    app.register_blueprint(users_bp)
    register_error_handlers(app)

    @app.route('/health')
    def health():
        return jsonify({"status": "ok", "version": vidshare.__version__})

    return app
