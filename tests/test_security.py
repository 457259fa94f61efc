"""
Tests for token issuance/verification and password hashing.
"""

from datetime import timedelta
import pytest
from jose import JWTError, jwt

from jobly.core.config import settings
from jobly.core.security import (
    TokenSigningError,
    create_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from jobly.models.user import User


def _payload(token):
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


class TestCreateToken:
    """Tests for create_token"""

    def test_not_admin(self):
        payload = _payload(create_token({"username": "test", "isAdmin": False}))

        assert isinstance(payload.pop("iat"), int)
        assert payload == {"username": "test", "isAdmin": False}

    def test_admin(self):
        payload = _payload(create_token({"username": "test", "isAdmin": True}))

        assert isinstance(payload.pop("iat"), int)
        assert payload == {"username": "test", "isAdmin": True}

    def test_default_no_admin(self):
        # A missing flag must never grant admin
        payload = _payload(create_token({"username": "test"}))

        assert isinstance(payload.pop("iat"), int)
        assert payload == {"username": "test", "isAdmin": False}

    @pytest.mark.parametrize("flag", [None, 1, "true", "yes"])
    def test_only_literal_true_grants_admin(self, flag):
        payload = _payload(create_token({"username": "test", "isAdmin": flag}))

        assert payload["isAdmin"] is False

    def test_from_user_model(self):
        user = User(username="boss", password="x", first_name="B", last_name="S",
                    email="boss@example.com", is_admin=True)

        payload = _payload(create_token(user))

        assert payload["username"] == "boss"
        assert payload["isAdmin"] is True

    def test_no_expiry_by_default(self):
        payload = _payload(create_token({"username": "test"}))

        assert "exp" not in payload

    def test_expiry_when_requested(self):
        payload = _payload(create_token({"username": "test"}, expires_delta=timedelta(minutes=5)))

        assert payload["exp"] - payload["iat"] == 300

    def test_missing_username(self):
        with pytest.raises(ValueError):
            create_token({"isAdmin": True})

    def test_missing_secret_is_fatal(self, monkeypatch):
        monkeypatch.setattr(settings, "SECRET_KEY", "")

        with pytest.raises(TokenSigningError):
            create_token({"username": "test"})


class TestDecodeToken:
    """Tests for decode_token"""

    def test_round_trip_claims(self):
        payload = decode_token(create_token({"username": "test", "isAdmin": True}))

        assert payload["username"] == "test"
        assert payload["isAdmin"] is True

    def test_wrong_secret(self):
        token = jwt.encode({"username": "test", "isAdmin": True}, "not-the-secret", algorithm="HS256")

        with pytest.raises(JWTError):
            decode_token(token)

    def test_expired(self):
        token = create_token({"username": "test"}, expires_delta=timedelta(seconds=-60))

        with pytest.raises(JWTError):
            decode_token(token)


class TestPasswordHashing:
    """Tests for bcrypt hashing helpers"""

    def test_hash_and_verify(self):
        hashed = get_password_hash("password1")

        assert hashed != "password1"
        assert verify_password("password1", hashed)
        assert not verify_password("password2", hashed)
