"""
Bearer JWT verification and role authorization.

Pure functions of (header, secret, allowed roles, now): no I/O, no logging.
The middleware in middleware.py wraps handlers with these checks and records
rejections.

Verification order, first failure wins:
    missing/non-Bearer header     -> 401 missing bearer token
    malformed / alg != HS256 /
    bad signature / bad claims    -> 401 invalid token
    exp strictly before now       -> 401 token expired
    role not in allowed set       -> 403 forbidden (insufficient role)
"""

from __future__ import annotations

from datetime import datetime, timezone

import jwt as pyjwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sentence_api.core.exceptions import ForbiddenError, UnauthorizedError

BEARER_PREFIX = "Bearer "
ALGORITHM = "HS256"


class TokenClaims(BaseModel):
    """The two claims this service reads. Other claims are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    role: str = ""
    expires_at: datetime | None = Field(default=None, alias="exp")

    @field_validator("expires_at", mode="before")
    @classmethod
    def _from_numeric_date(cls, value: object) -> datetime | None:
        """exp is a NumericDate: seconds since the epoch, UTC."""
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("exp must be a number of seconds since the epoch")
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError("exp out of range") from e

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at < now


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token after 'Bearer ', or raise UnauthorizedError."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError("missing bearer token", reason="missing_bearer")
    return authorization[len(BEARER_PREFIX):]


def verify_token(token: str, secret: bytes, now: datetime | None = None) -> TokenClaims:
    """Decode and validate an HS256 JWT.

    Args:
        token: The raw JWT string (from the Authorization header).
        secret: Shared HMAC secret.
        now: Reference time for the expiry check (default: current UTC time).

    Returns:
        TokenClaims with role and optional expiry.

    Raises:
        UnauthorizedError: Malformed token, wrong algorithm, bad signature,
            unparseable claims, or expired.
    """
    try:
        payload = pyjwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            # exp is checked below against the injected clock; aud/iat are not used here.
            options={"verify_exp": False, "verify_aud": False, "verify_iat": False},
        )
    except pyjwt.InvalidAlgorithmError as e:
        raise UnauthorizedError("invalid token", reason="bad_algorithm") from e
    except pyjwt.InvalidSignatureError as e:
        raise UnauthorizedError("invalid token", reason="bad_signature") from e
    except pyjwt.DecodeError as e:
        raise UnauthorizedError("invalid token", reason="malformed") from e
    except pyjwt.InvalidTokenError as e:
        raise UnauthorizedError("invalid token", reason="invalid") from e

    try:
        claims = TokenClaims.model_validate(payload)
    except ValidationError as e:
        raise UnauthorizedError("invalid token", reason="bad_claims") from e

    if claims.is_expired(now or utcnow()):
        raise UnauthorizedError("token expired", reason="expired")
    return claims


def authorize(claims: TokenClaims, allowed_roles: frozenset[str]) -> None:
    if claims.role not in allowed_roles:
        raise ForbiddenError("forbidden (insufficient role)")


def authenticate(
    authorization: str | None,
    secret: bytes,
    allowed_roles: frozenset[str],
    now: datetime | None = None,
) -> TokenClaims:
    """Run the full gate: extract, verify, check expiry, check role."""
    token = extract_bearer_token(authorization)
    claims = verify_token(token, secret, now)
    authorize(claims, allowed_roles)
    return claims
