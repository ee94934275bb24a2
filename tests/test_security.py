import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from regestra.core.config import settings
from regestra.core.security import TokenError, decode_access_token


def _token(claims: dict, *, secret: str | None = None) -> str:
    return jwt.encode(claims, secret or settings.identity_jwt_secret, algorithm=settings.identity_jwt_algorithm)


def test_decode_access_token_returns_identity() -> None:
    user_id = uuid.uuid4()
    token = _token({"sub": str(user_id), "aud": settings.identity_jwt_audience, "email": "ada@example.com"})

    claims = decode_access_token(token)

    assert claims.user_id == user_id
    assert claims.email == "ada@example.com"


@pytest.mark.parametrize(
    "claims",
    [
        {"sub": "not-a-uuid", "aud": "authenticated"},
        {"aud": "authenticated"},
        {"sub": str(uuid.uuid4()), "aud": "someone-else"},
        {
            "sub": str(uuid.uuid4()),
            "aud": "authenticated",
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        },
    ],
)
def test_decode_access_token_rejects_bad_claims(claims: dict) -> None:
    with pytest.raises(TokenError):
        decode_access_token(_token(claims))


def test_decode_access_token_rejects_wrong_signature() -> None:
    token = _token(
        {"sub": str(uuid.uuid4()), "aud": "authenticated"},
        secret="another-identity-provider-shared-secret-9999",
    )

    with pytest.raises(TokenError):
        decode_access_token(token)
