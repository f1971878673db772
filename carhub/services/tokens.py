"""Signed bearer tokens (JWT) carrying the user id as subject."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt

from carhub.config import get_settings
from carhub.exceptions import TokenExpired, TokenInvalid


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issue and verify time-bounded HS256 tokens.

    The signing secret is handed in once at construction and never changes.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=1),
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in
        self._clock = clock

    def issue(self, user_id: int) -> str:
        """Create a token for ``user_id`` that expires ``expires_in`` from now."""
        issued_at = int(self._clock().timestamp())
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + int(self.expires_in.total_seconds()),
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Return the user id embedded in ``token``.

        Raises:
            TokenInvalid: malformed token, bad signature or missing claims.
            TokenExpired: the verifier's clock is at or past ``exp``.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as e:
            raise TokenInvalid() from e

        exp = claims.get("exp")
        if not isinstance(exp, int | float):
            raise TokenInvalid()
        # No leeway: a token is dead at its expiration instant
        if self._clock().timestamp() >= exp:
            raise TokenExpired()

        subject = claims.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise TokenInvalid() from None


@lru_cache
def get_token_service() -> TokenService:
    """Get the process-wide token service built from settings."""
    settings = get_settings()
    return TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(minutes=settings.jwt_expiration_minutes),
    )
