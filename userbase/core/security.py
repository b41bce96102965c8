"""Random identifiers for stored users."""

from __future__ import annotations

import secrets

TOKEN_BYTES = 64
ID_BYTES = 16


def new_token() -> str:
    """Opaque secret token: 64 random bytes as 128 lowercase hex chars."""
    return secrets.token_hex(TOKEN_BYTES)


def new_id() -> str:
    return secrets.token_hex(ID_BYTES)
