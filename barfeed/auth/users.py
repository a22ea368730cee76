from __future__ import annotations

import uuid
from typing import Any

import bcrypt

_USER_NAMESPACE = uuid.UUID("6f1c1d3e-5b0a-4f6e-9b53-2d8f3c0a7e41")

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _user_id(username: str) -> str:
    return uuid.uuid5(_USER_NAMESPACE, username).hex


def _seed_users() -> None:
    """Pre-seed demo users on import."""
    for username, password, role in (
        ("user", "user123", "user"),
        ("admin", "admin123", "admin"),
    ):
        _users[username] = {
            "user_id": _user_id(username),
            "password_hash": _hash_password(password),
            "role": role,
        }


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{user_id, username, role}`` or ``None``."""
    record = _users.get(username)
    if record and _verify_password(password, record["password_hash"]):
        return {
            "user_id": record["user_id"],
            "username": username,
            "role": record["role"],
        }
    return None


_seed_users()
