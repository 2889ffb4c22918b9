"""OIDC protocol engine helpers."""

from .authlib_engine import AuthlibProtocolEngine, bundle_from_token_response
from .claims import decode_claims, extract_subject
from .config import OIDCSettings, load_oidc_settings
from .engine import ProtocolEngine

__all__ = [
    "AuthlibProtocolEngine",
    "bundle_from_token_response",
    "decode_claims",
    "extract_subject",
    "load_oidc_settings",
    "OIDCSettings",
    "ProtocolEngine",
]
