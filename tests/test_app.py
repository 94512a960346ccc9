"""
Tests for application setup and error mapping.
"""
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from vidshare.app import create_app


class TestAppFactory:

    def test_health(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"

    def test_unknown_route_is_json(self, client):
        response = client.get('/does-not-exist')
        assert response.status_code == 404
        assert "error" in response.get_json()

    def test_token_service_disabled_without_configuration(self, tmp_path, monkeypatch):
        monkeypatch.delenv("VIDSHARE_AUTH_DOMAIN", raising=False)
        monkeypatch.delenv("VIDSHARE_AUTH_AUDIENCE", raising=False)
        app = create_app(test_config={"TESTING": True, "MEDIA_FOLDER": str(tmp_path / "media")})
        assert app.config["TOKEN_SERVICE"] is None

        response = app.test_client().get('/users/profile', headers={"Authorization": "Bearer abc"})
        assert response.status_code == 401
        assert response.get_json() == {"error": "Token authentication is not configured"}

    def test_token_service_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("VIDSHARE_AUTH_DOMAIN", "tenant.example.com")
        monkeypatch.setenv("VIDSHARE_AUTH_AUDIENCE", "https://api.example.com")
        app = create_app(test_config={"TESTING": True, "MEDIA_FOLDER": str(tmp_path / "media")})
        assert app.config["TOKEN_SERVICE"].config.issuer == "https://tenant.example.com/"


class TestErrorMapping:

    def test_database_failure_is_generic_500(self, client, sample_video):
        error = OperationalError("SELECT 1", {}, Exception("connection refused"))
        with patch("vidshare.services.feed.db.paginate", side_effect=error):
            response = client.get('/videos')
        assert response.status_code == 500
        assert response.get_json() == {"error": "Failed to access the data store"}

    def test_identity_failure_aborts_request(self, client, auth_headers, sample_video):
        """Test that a store failure while resolving the user is not treated as anonymous."""
        error = OperationalError("INSERT", {}, Exception("disk full"))
        with patch("vidshare.app.resolve_user", side_effect=error):
            response = client.get('/videos', headers=auth_headers("auth0|zed", "Zed"))
        assert response.status_code == 500
        assert response.get_json() == {"error": "Failed to access the data store"}

    def test_unexpected_error_hides_details(self, client, sample_video):
        with patch("vidshare.services.feed.db.paginate", side_effect=RuntimeError("secret detail")):
            response = client.get('/videos')
        assert response.status_code == 500
        assert response.get_json() == {"error": "Internal server error"}
