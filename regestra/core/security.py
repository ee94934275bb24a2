import uuid
from dataclasses import dataclass

import jwt

from regestra.core.config import settings


class TokenError(Exception):
    pass


@dataclass(frozen=True)
class IdentityClaims:
    """Identity issued by the external auth provider for the bearer of a token."""

    user_id: uuid.UUID
    email: str | None


def decode_access_token(token: str) -> IdentityClaims:
    options = {"verify_aud": bool(settings.identity_jwt_audience)}
    try:
        payload = jwt.decode(
            token,
            settings.identity_jwt_secret,
            algorithms=[settings.identity_jwt_algorithm],
            audience=settings.identity_jwt_audience or None,
            options=options,
        )
    except jwt.PyJWTError as exc:
        raise TokenError("invalid token") from exc

    subject = payload.get("sub")
    if not subject:
        raise TokenError("token has no subject")
    try:
        user_id = uuid.UUID(str(subject))
    except ValueError as exc:
        raise TokenError("token subject is not a uuid") from exc

    email = payload.get("email")
    return IdentityClaims(user_id=user_id, email=email if isinstance(email, str) else None)
