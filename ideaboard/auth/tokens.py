"""Signed, expiring identity tokens (HS256 JWT).

Claims carried by every token::

    {"sub": <user id>, "username": ..., "role": ..., "iat": ..., "exp": ...}

Expiry is absolute: a token is valid for exactly ``ttl`` after issuance and
is never renewed.
"""
import datetime as dt
import logging
from dataclasses import dataclass

import jwt

from ideaboard.errors import ConfigurationError, InvalidToken

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
TOKEN_TTL = dt.timedelta(hours=1)


@dataclass(frozen=True)
class TokenClaims:
    subject_id: str | None
    username: str | None
    role: str | None
    issued_at: dt.datetime
    expires_at: dt.datetime


class TokenIssuer:
    def __init__(self, secret: str, ttl: dt.timedelta = TOKEN_TTL):
        if not secret:
            raise ConfigurationError("JWT_SECRET is not set; refusing to start")
        self._secret = secret
        self.ttl = ttl

    def issue(self, principal, now: dt.datetime | None = None) -> str:
        """Sign a token for ``principal`` (anything with id, username, role)."""
        issued_at = now or dt.datetime.now(dt.timezone.utc)
        payload = {
            "sub": str(principal.id),
            "username": principal.username,
            "role": principal.role,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        if not token:
            raise InvalidToken("Token is blank")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidToken("Token has expired") from None
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected token: %s", exc)
            raise InvalidToken("Invalid token") from None

        return TokenClaims(
            subject_id=payload.get("sub"),
            username=payload.get("username"),
            role=payload.get("role"),
            issued_at=dt.datetime.fromtimestamp(payload["iat"], dt.timezone.utc),
            expires_at=dt.datetime.fromtimestamp(payload["exp"], dt.timezone.utc),
        )
