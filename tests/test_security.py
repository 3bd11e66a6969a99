"""Tests for access token helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from social_api.infrastructure.security import (
    create_access_token,
    decode_access_token,
    user_id_from_token,
)


def test_token_round_trip_carries_user_id() -> None:
    token = create_access_token(42)

    assert decode_access_token(token)["sub"] == "42"
    assert user_id_from_token(token) == 42


@pytest.mark.parametrize(
    "token",
    ["", "not-a-jwt", create_access_token(1, expires_delta=timedelta(seconds=-1))],
)
def test_invalid_tokens_raise_value_error(token: str) -> None:
    with pytest.raises(ValueError):
        user_id_from_token(token)
