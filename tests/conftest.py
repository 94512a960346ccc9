"""
Pytest configuration and fixtures for VidShare tests.
"""
import os
import time
import pytest
from authlib.jose import JsonWebKey, jwt

# Set testing environment before importing app
os.environ["TESTING"] = "true"

from vidshare.app import create_app
from vidshare.models import db, User, Video, Comment
from vidshare.services.token_auth import TokenAuthConfig, TokenAuthService

AUTH_DOMAIN = "vidshare-test.example.com"
AUTH_AUDIENCE = "https://api.vidshare.test"
KEY_ID = "test-key"


@pytest.fixture(scope="session")
def signing_key():
    """RSA key pair standing in for the identity provider's signing key."""
    return JsonWebKey.generate_key("RSA", 2048, options={"kid": KEY_ID}, is_private=True)


@pytest.fixture(scope="session")
def issue_token(signing_key):
    """Return a function signing RS256 tokens the way the identity provider does."""
    def _issue(sub, name=None, key=None, **overrides):
        now = int(time.time())
        payload = {
            "iss": f"https://{AUTH_DOMAIN}/",
            "aud": AUTH_AUDIENCE,
            "sub": sub,
            "iat": now,
            "exp": now + 3600,
        }
        if name is not None:
            payload["name"] = name
        payload.update(overrides)
        header = {"alg": "RS256", "kid": KEY_ID}
        return jwt.encode(header, payload, key or signing_key).decode("utf-8")
    return _issue


@pytest.fixture(scope="function")
def token_service(signing_key):
    """Token service with the provider key set already fetched."""
    service = TokenAuthService(TokenAuthConfig(domain=AUTH_DOMAIN, audience=AUTH_AUDIENCE))
    service._jwks = {"keys": [signing_key.as_dict(is_private=False)]}
    return service


@pytest.fixture(scope="function")
def app(token_service, tmp_path):
    """Create and configure a test application instance with in-memory SQLite."""
    test_config = {
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SECRET_KEY": "test-secret-key",
        "TOKEN_SERVICE": token_service,
        "MEDIA_FOLDER": str(tmp_path / "media"),
    }

    app = create_app(test_config=test_config)

    yield app

    # Cleanup
    with app.app_context():
        db.session.remove()


@pytest.fixture(scope="function")
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture(scope="function")
def auth_headers(issue_token):
    """Return a function building an Authorization header for a subject."""
    def _headers(sub="auth0|alice", name="Alice"):
        return {"Authorization": f"Bearer {issue_token(sub, name=name)}"}
    return _headers


@pytest.fixture(scope="function")
def sample_user(app):
    """Create a sample user for testing."""
    with app.app_context():
        user = User(subject_id="auth0|alice", display_name="Alice")
        db.session.add(user)
        db.session.commit()
        return {"id": user.id, "subject_id": user.subject_id, "display_name": user.display_name}


@pytest.fixture(scope="function")
def other_user(app):
    """Create a second user for ownership tests."""
    with app.app_context():
        user = User(subject_id="auth0|bob", display_name="Bob")
        db.session.add(user)
        db.session.commit()
        return {"id": user.id, "subject_id": user.subject_id, "display_name": user.display_name}


@pytest.fixture(scope="function")
def make_video(app, sample_user):
    """Return a function creating videos uploaded by the sample user."""
    def _make(title="Test Video", description="A test video description", uploader_id=None):
        with app.app_context():
            video = Video(
                title=title,
                description=description,
                video_url=f"https://cdn.example.com/{title.replace(' ', '_')}.mp4",
                thumbnail_url="https://cdn.example.com/thumb.jpg",
                uploader_id=uploader_id or sample_user["id"],
            )
            db.session.add(video)
            db.session.commit()
            return {"id": video.id, "title": video.title}
    return _make


@pytest.fixture(scope="function")
def sample_video(make_video):
    """Create a sample video for testing."""
    return make_video()


@pytest.fixture(scope="function")
def make_comment(app):
    """Return a function creating a comment with preset counters."""
    def _make(video_id, user_id, content="Nice video", likes=0, dislikes=0):
        with app.app_context():
            comment = Comment(video_id=video_id, user_id=user_id, content=content, likes=likes, dislikes=dislikes)
            db.session.add(comment)
            db.session.commit()
            return comment.id
    return _make
