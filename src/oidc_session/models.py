"""Token bundle and sign-in result models."""

from dataclasses import dataclass, field, fields
import time
from typing import Any, Dict, Mapping, Optional

# camelCase keys written by JavaScript OIDC SDKs
_CAMEL_CASE_KEYS = {
    "accessToken": "access_token",
    "idToken": "id_token",
    "refreshToken": "refresh_token",
    "tokenType": "token_type",
    "sessionState": "session_state",
    "expiresIn": "expires_in",
    "createdAt": "created_at",
    "sub": "subject",
}

_INT_FIELDS = ("expires_in", "created_at")


@dataclass
class TokenBundle:
    """Tokens and metadata returned by the protocol engine for one principal."""

    access_token: str
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None
    subject: Optional[str] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None
    session_state: Optional[str] = None
    expires_in: Optional[int] = None
    created_at: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TokenBundle":
        """Build a bundle from a token response or a stored record.

        Unknown keys are kept in ``extra``.

        Raises:
            ValueError: if ``data`` is not a mapping or has no access token.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Token bundle must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)} - {"extra"}
        values: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in known:
                values[name] = value
            else:
                extra[key] = value

        access_token = values.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("Token bundle has no access token")

        for name in _INT_FIELDS:
            if values.get(name) is not None:
                values[name] = _coerce_int(name, values[name])

        return cls(extra=extra, **values)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                data[f.name] = value
        return data

    @property
    def expires_at(self) -> Optional[int]:
        if self.created_at is None or self.expires_in is None:
            return None
        return self.created_at + self.expires_in

    def is_expired(self, now: Optional[float] = None, leeway: int = 0) -> bool:
        """Return True once the access token lifetime has elapsed.

        A bundle without a known expiry never counts as expired.
        """
        expires_at = self.expires_at
        if expires_at is None:
            return False
        current = time.time() if now is None else now
        return current >= expires_at - leeway


@dataclass
class SignInResult:
    session_id: str
    tokens: TokenBundle


def _coerce_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


__all__ = ["SignInResult", "TokenBundle"]
