from datetime import timedelta

from fastapi import HTTPException
import jwt
import pytest

from slotbook.auth import create_access_token, decode_access_token, get_current_account_id
from slotbook.core.config import settings


class TestAccessTokens:
    def test_round_trip_keeps_subject(self) -> None:
        token = create_access_token({"sub": "01HF4G12ABCDEF3456789XYZAB"})
        payload = decode_access_token(token)
        assert payload["sub"] == "01HF4G12ABCDEF3456789XYZAB"
        assert "exp" in payload

    def test_expired_token_is_rejected(self) -> None:
        token = create_access_token({"sub": "A1"}, expires_delta=timedelta(seconds=-5))
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token)


class TestGetCurrentAccountId:
    def test_valid_token(self) -> None:
        token = create_access_token({"sub": "A1"})
        assert get_current_account_id(token) == "A1"

    def test_missing_token(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            get_current_account_id(None)
        assert exc_info.value.status_code == 401

    def test_token_signed_with_other_key(self) -> None:
        token = jwt.encode({"sub": "A1"}, "some-other-key", algorithm=settings.algorithm)
        with pytest.raises(HTTPException) as exc_info:
            get_current_account_id(token)
        assert exc_info.value.status_code == 401

    def test_token_without_subject(self) -> None:
        token = create_access_token({"role": "customer"})
        with pytest.raises(HTTPException) as exc_info:
            get_current_account_id(token)
        assert exc_info.value.status_code == 401
