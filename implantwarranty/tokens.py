"""Issuing, checking and refreshing signed session tokens."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

ISSUER = "gmmed"
REFRESH_WINDOW = timedelta(minutes=30)
_ALGORITHM = "HS256"
_ACCEPTED_ALGORITHMS = ["HS256", "HS384", "HS512"]


class TokenError(Exception):
    """Raised when a token is invalid, expired or cannot be refreshed."""


@dataclass(frozen=True)
class JWTClaims:
    """Claims carried by a session token."""

    user_id: str
    username: str
    role: str
    issuer: str = ""
    subject: str = ""
    expires_at: datetime | None = None
    issued_at: datetime | None = None
    not_before: datetime | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "user_id": self.user_id,
            "username": self.username,
            "role": self.role,
        }
        if self.issuer:
            payload["iss"] = self.issuer
        if self.subject:
            payload["sub"] = self.subject
        for name, moment in (
            ("exp", self.expires_at),
            ("iat", self.issued_at),
            ("nbf", self.not_before),
        ):
            if moment is not None:
                payload[name] = int(moment.timestamp())
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "JWTClaims":
        def moment(name: str) -> datetime | None:
            value = payload.get(name)
            if value is None:
                return None
            return datetime.fromtimestamp(value, timezone.utc)

        return cls(
            user_id=str(payload.get("user_id", "")),
            username=str(payload.get("username", "")),
            role=str(payload.get("role", "")),
            issuer=str(payload.get("iss", "")),
            subject=str(payload.get("sub", "")),
            expires_at=moment("exp"),
            issued_at=moment("iat"),
            not_before=moment("nbf"),
        )


def _seconds(moment: datetime) -> datetime:
    return moment.replace(microsecond=0)


def _sign(claims: JWTClaims, secret: str) -> str:
    return jwt.encode(claims.to_payload(), secret, algorithm=_ALGORITHM)


def generate_jwt(
    user_id: str, username: str, role: str, secret: str, expire_hours: int
) -> tuple[str, datetime]:
    """Create a signed token; return it with its expiry time."""
    now = datetime.now(timezone.utc)
    expiration = now + timedelta(hours=expire_hours)
    claims = JWTClaims(
        user_id=user_id,
        username=username,
        role=role,
        issuer=ISSUER,
        subject=user_id,
        expires_at=_seconds(expiration),
        issued_at=_seconds(now),
        not_before=_seconds(now),
    )
    return _sign(claims, secret), expiration


def validate_jwt(token: str, secret: str) -> JWTClaims:
    """Verify a token's HMAC signature and time claims and return its claims."""
    try:
        payload = jwt.decode(token, secret, algorithms=_ACCEPTED_ALGORITHMS)
    except jwt.InvalidAlgorithmError as exc:
        raise TokenError("unexpected signing method") from exc
    except jwt.PyJWTError as exc:
        raise TokenError(str(exc)) from exc
    return JWTClaims.from_payload(payload)


def refresh_jwt(token: str, secret: str, expire_hours: int) -> tuple[str, datetime]:
    """Reissue a token that expires within the next thirty minutes."""
    claims = validate_jwt(token, secret)
    now = datetime.now(timezone.utc)
    if claims.expires_at is None or claims.expires_at - now > REFRESH_WINDOW:
        raise TokenError("token is not eligible for refresh")
    expiration = now + timedelta(hours=expire_hours)
    renewed = dataclasses.replace(
        claims, expires_at=_seconds(expiration), issued_at=_seconds(now)
    )
    return _sign(renewed, secret), expiration