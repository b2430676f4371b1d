import jwt
import pytest

from brainly.api.brain import SHARE_ALPHABET, generate_share_hash
from brainly.core.errors import AuthError
from brainly.core.security import TokenService, hash_password, verify_password


def test_generate_share_hash_length():
    share_hash = generate_share_hash()
    # Ожидаем, что длина сгенерированного хэша равна 10 символам
    assert len(share_hash) == 10


def test_generate_share_hash_alphabet():
    share_hash = generate_share_hash(200)
    for char in share_hash:
        assert char in SHARE_ALPHABET
    for char in "0O1lI":
        assert char not in SHARE_ALPHABET


def test_password_hash_roundtrip():
    hashed = hash_password("pw")
    assert hashed != "pw"
    assert verify_password("pw", hashed)
    assert not verify_password("wrong", hashed)


def test_password_hash_is_salted():
    assert hash_password("pw") != hash_password("pw")


def test_token_service_issue_and_verify():
    tokens = TokenService("secret")
    claims = tokens.verify(tokens.issue({"id": 7}))
    assert claims["id"] == 7
    assert "exp" not in claims


def test_token_service_adds_expiry():
    tokens = TokenService("secret", expire_minutes=5)
    claims = tokens.verify(tokens.issue({"id": 7}))
    assert "exp" in claims


def test_token_service_rejects_foreign_signature():
    token = TokenService("other").issue({"id": 7})
    with pytest.raises(AuthError):
        TokenService("secret").verify(token)


def test_token_service_rejects_expired_token():
    token = jwt.encode({"id": 7, "exp": 1}, "secret", algorithm="HS256")
    with pytest.raises(AuthError):
        TokenService("secret").verify(token)


@pytest.mark.parametrize("token", [None, "", "not-a-token"])
def test_token_service_rejects_missing_or_malformed(token):
    with pytest.raises(AuthError):
        TokenService("secret").verify(token)
