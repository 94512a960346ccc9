"""
Bearer token verification for VidShare.

Tokens are RS256 JWTs issued by an external OpenID Connect provider
(Auth0, Keycloak, Azure AD...). The service only checks signature, issuer,
audience and expiry, then hands the verified claims to the identity resolver.
"""

import logging
from dataclasses import dataclass

import requests
from authlib.jose import jwt
from authlib.jose.errors import JoseError

from vidshare.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Claims:
    """Verified identity claims extracted from a bearer token."""

    subject_id: str
    display_name: str | None = None


@dataclass
class TokenAuthConfig:
    """Configuration for bearer token verification."""

    domain: str
    audience: str
    name_claim: str = "name"

    @property
    def issuer(self) -> str:
        return f"https://{self.domain}/"

    @property
    def jwks_url(self) -> str:
        return f"https://{self.domain}/.well-known/jwks.json"

    @classmethod
    def from_env(cls, env: dict) -> "TokenAuthConfig | None":
        """Create TokenAuthConfig from environment variables.

        Returns None if the identity provider is not configured.
        """
        domain = env.get("VIDSHARE_AUTH_DOMAIN", "").strip().rstrip("/")
        audience = env.get("VIDSHARE_AUTH_AUDIENCE", "").strip()

        if not domain or not audience:
            logger.warning("Identity provider domain or audience not configured, bearer tokens will be rejected")
            return None

        return cls(
            domain=domain,
            audience=audience,
            name_claim=env.get("VIDSHARE_AUTH_NAME_CLAIM", "name"),
        )


class TokenAuthService:
    """Service verifying bearer tokens against the provider's key set."""

    def __init__(self, config: TokenAuthConfig):
        """Initialize the token verification service.

        Args:
            config: Identity provider settings.
        """
        self.config = config
        self._jwks = None

    def _fetch_jwks(self) -> dict | None:
        """Fetch and cache the JWKS used to check token signatures."""
        if self._jwks is not None:
            return self._jwks

        try:
            response = requests.get(self.config.jwks_url, timeout=10)
            response.raise_for_status()
            self._jwks = response.json()
            return self._jwks
        except requests.RequestException as e:
            logger.error(f"Failed to fetch JWKS: {e}")
            return None

    def verify(self, token: str) -> Claims:
        """Verify a bearer token and return its identity claims.

        Args:
            token: The raw JWT taken from the Authorization header.

        Returns:
            The verified subject id and display name.

        Raises:
            UnauthenticatedError: If the token cannot be verified.
        """
        jwks = self._fetch_jwks()
        if not jwks:
            raise UnauthenticatedError("Unable to verify token")

        claims_options = {
            "iss": {"essential": True, "value": self.config.issuer},
            "aud": {"essential": True, "value": self.config.audience},
            "sub": {"essential": True},
            "exp": {"essential": True},
        }

        try:
            claims = jwt.decode(token, jwks, claims_options=claims_options)
            claims.validate()
        except (JoseError, ValueError) as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise UnauthenticatedError("Invalid token") from e

        subject_id = claims.get("sub")
        if not subject_id:
            raise UnauthenticatedError("Token missing 'sub' claim")

        return Claims(
            subject_id=subject_id,
            display_name=claims.get(self.config.name_claim),
        )


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from a ``Bearer <token>`` header value, if any."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]
