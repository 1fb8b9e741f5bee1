from __future__ import annotations

from typing import Optional

from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

_SALT = "auth-token"


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=_SALT)


def issue_token(user) -> str:
    return _serializer().dumps({"id": user.id, "role": user.role})


def read_token(token: str) -> Optional[int]:
    """Return the user id inside a valid token, or None if expired/tampered."""
    max_age = int(current_app.config.get("AUTH_TOKEN_MAX_AGE", 7200))
    try:
        data = _serializer().loads(token, max_age=max_age)
    except (SignatureExpired, BadSignature):
        return None
    if not isinstance(data, dict) or "id" not in data:
        return None
    return int(data["id"])
