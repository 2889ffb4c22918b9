"""Unverified ID token claim access.

Signature and issuer checks belong to the protocol engine; these helpers only
read claims from a token the engine already accepted.
"""

import logging
from typing import Any, Dict, Optional

import jwt
from jwt.exceptions import PyJWTError

logger = logging.getLogger("oidc_session.oauth")


def decode_claims(id_token: Optional[str]) -> Dict[str, Any]:
    if not id_token:
        return {}
    try:
        return jwt.decode(id_token, options={"verify_signature": False})
    except PyJWTError as exc:
        logger.warning("Could not decode ID token claims: %s", exc)
        return {}


def extract_subject(id_token: Optional[str]) -> Optional[str]:
    subject = decode_claims(id_token).get("sub")
    return subject if isinstance(subject, str) and subject else None


__all__ = ["decode_claims", "extract_subject"]
