import time
import uuid

import jwt
import pytest

from authgate.ports import AuthError
from authgate.security import BcryptCryptoService, JwtTokenService


@pytest.fixture
def crypto():
    return BcryptCryptoService(cost=4)


def test_hash_has_bcrypt_format(crypto):
    password = "password"
    stored = crypto.hash_password(password)
    assert stored.startswith("$2b$04$")
    assert len(stored) == 60


def test_hash_verifies_original(crypto):
    password = "password"
    stored = crypto.hash_password(password)
    assert crypto.verify_password(password, stored) is True


def test_wrong_password_does_not_verify(crypto):
    password = "password"
    wrong_password = "secret"
    stored = crypto.hash_password(password)
    assert crypto.verify_password(wrong_password, stored) is False


def test_hashes_are_salted(crypto):
    password = "password"
    first = crypto.hash_password(password)
    second = crypto.hash_password(password)
    assert first[:7] == second[:7] == "$2b$04$"
    assert first[7:29] != second[7:29]
    assert crypto.verify_password(password, first) is True
    assert crypto.verify_password(password, second) is True


def test_malformed_hash_does_not_verify(crypto):
    password = "password"
    assert crypto.verify_password(password, "not-a-hash") is False


def test_invalid_cost_raises_auth_error():
    password = "password"
    with pytest.raises(AuthError, match="Hash error"):
        BcryptCryptoService(cost=3).hash_password(password)


def test_default_cost_is_twelve():
    assert BcryptCryptoService().cost == 12


def test_token_carries_subject_and_expiry():
    service = JwtTokenService("secret", 3600)
    user_id = uuid.uuid4()
    before = int(time.time())
    token = service.generate_token(user_id)
    after = int(time.time())
    claims = jwt.decode(token, "secret", algorithms=["HS256"])
    assert claims["sub"] == str(user_id)
    assert before + 3600 <= claims["exp"] <= after + 3600


def test_token_header_is_default_hs256():
    token = JwtTokenService("secret", 60).generate_token(uuid.uuid4())
    assert jwt.get_unverified_header(token) == {"alg": "HS256", "typ": "JWT"}


def test_token_rejects_other_key():
    token = JwtTokenService("secret", 60).generate_token(uuid.uuid4())
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(token, "token", algorithms=["HS256"])


def test_negative_lifetime_is_rejected():
    with pytest.raises(ValueError):
        JwtTokenService("secret", -1)