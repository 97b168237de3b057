from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from config import settings
from utils.errors import AuthError
from utils.tokenJWT import create_access_token, verify_access_token


def test_issue_and_verify_round_trip():
    now = datetime.now(timezone.utc).replace(microsecond=0)
    token = create_access_token("42", "reader@example.com", "customer", now=now)

    claims = verify_access_token(token)

    assert claims.sub == "42"
    assert claims.email == "reader@example.com"
    assert claims.role == "customer"
    assert claims.iat == int(now.timestamp())
    assert claims.exp - claims.iat == 24 * 3600


def test_integer_user_id_is_carried_as_string():
    claims = verify_access_token(create_access_token(7, "a@b.com", "admin"))
    assert claims.user_id == "7"
    assert claims.is_admin


def test_token_signed_with_another_secret_is_rejected():
    token = create_access_token("1", "a@b.com", "customer", secret="someone-else")
    with pytest.raises(AuthError):
        verify_access_token(token)


def test_expired_token_is_rejected():
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = create_access_token("1", "a@b.com", "customer", now=issued)
    with pytest.raises(AuthError):
        verify_access_token(token)


def test_garbage_token_is_rejected():
    with pytest.raises(AuthError):
        verify_access_token("not-a-token")


def test_payload_without_required_claims_is_rejected():
    exp = int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp())
    token = jwt.encode({"sub": "1", "exp": exp}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    with pytest.raises(AuthError):
        verify_access_token(token)
