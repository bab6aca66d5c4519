"""
Signed token codec.

Tokens are three base64url segments (header, body, signature) joined by
dots. The signature is HMAC-SHA256 over ``header.body``. The format is
the compact HS256 JWT layout, so tokens issued here verify in any
standard JWT library holding the same secret, and the reverse.

Two codecs share the format:

- ``SessionTokenCodec`` signs administrator sessions (``JWT_SECRET``).
- ``ActivationTokenCodec`` signs license activations (``LICENSE_TOKEN_SECRET``).
"""

import base64
import hashlib
import hmac
import json
import secrets
import time
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

from django.conf import settings

HEADER = {"alg": "HS256", "typ": "JWT"}
CLOCK_SKEW_SECONDS = 60
SESSION_TOKEN_TTL_SECONDS = 24 * 60 * 60
ACTIVATION_TOKEN_TYPE = "license_activation"
MIN_SECRET_LENGTH = 32


def b64url_encode(raw: bytes) -> str:
    """Encode bytes as unpadded base64url."""
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def b64url_decode(segment: str) -> bytes:
    """Decode an unpadded base64url segment."""
    padding = "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(segment + padding)


def _json_segment(value: Dict[str, Any]) -> str:
    return b64url_encode(json.dumps(value, separators=(",", ":")).encode("utf-8"))


def _is_timestamp(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


class TokenCodec:
    """
    HMAC-SHA256 signer and verifier.

    ``verify`` never raises: every failure, from a malformed segment to
    a stale ``exp``, returns ``None``.
    """

    def __init__(self, secret: str, clock: Callable[[], float] = time.time):
        """
        Initialize codec.

        Args:
            secret: Signing secret, at least 32 characters
            clock: Returns the current Unix time in seconds
        """
        if not secret or len(secret) < MIN_SECRET_LENGTH:
            raise ValueError(f"Token secret must be at least {MIN_SECRET_LENGTH} characters")
        self._secret = secret.encode("utf-8")
        self._clock = clock

    def now(self) -> int:
        """Current Unix time in whole seconds."""
        return int(self._clock())

    def _signature(self, header: str, body: str) -> str:
        digest = hmac.new(
            self._secret, f"{header}.{body}".encode("ascii"), hashlib.sha256
        ).digest()
        return b64url_encode(digest)

    def sign(self, payload: Dict[str, Any]) -> str:
        """
        Sign a payload.

        Args:
            payload: Claims; must already contain ``iat`` and ``exp``

        Returns:
            Compact token string
        """
        header = _json_segment(HEADER)
        body = _json_segment(payload)
        return f"{header}.{body}.{self._signature(header, body)}"

    def verify(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify a token and return its payload.

        Args:
            token: Compact token string

        Returns:
            Payload dict, or None if the token is invalid for any reason
        """
        try:
            return self._verify(token)
        except (ValueError, TypeError, UnicodeError, RecursionError):
            return None

    def _verify(self, token: str) -> Optional[Dict[str, Any]]:
        if not isinstance(token, str):
            return None
        parts = token.split(".")
        if len(parts) != 3:
            return None
        header, body, signature = parts
        if not header or not body or not signature:
            return None

        # Nothing unsigned is parsed.
        expected = self._signature(header, body)
        if not hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8")):
            return None

        header_claims = json.loads(b64url_decode(header))
        if not isinstance(header_claims, dict):
            return None
        if header_claims.get("alg") != HEADER["alg"] or header_claims.get("typ") != HEADER["typ"]:
            return None

        payload = json.loads(b64url_decode(body))
        if not isinstance(payload, dict):
            return None

        now = self.now()
        exp = payload.get("exp")
        if not _is_timestamp(exp) or exp < now:
            return None
        iat = payload.get("iat")
        if not _is_timestamp(iat) or iat > now + CLOCK_SKEW_SECONDS:
            return None
        if not self.has_required_claims(payload):
            return None
        return payload

    def has_required_claims(self, payload: Dict[str, Any]) -> bool:
        """Hook for codec-specific claim checks."""
        return True


@dataclass(frozen=True)
class SessionClaims:
    """Verified administrator session claims."""

    user_id: str
    email: str
    session_token: str
    issued_at: int
    expires_at: int


class SessionTokenCodec(TokenCodec):
    """Codec for 24 hour administrator session tokens."""

    REQUIRED = ("userId", "email", "sessionToken")

    def issue(self, user_id: str, email: str, session_token: str) -> str:
        """Mint a session token for a live server-side session."""
        issued_at = self.now()
        return self.sign(
            {
                "userId": user_id,
                "email": email,
                "sessionToken": session_token,
                "iat": issued_at,
                "exp": issued_at + SESSION_TOKEN_TTL_SECONDS,
            }
        )

    def has_required_claims(self, payload: Dict[str, Any]) -> bool:
        return all(isinstance(payload.get(name), str) and payload[name] for name in self.REQUIRED)

    def read_claims(self, token: str) -> Optional[SessionClaims]:
        """Verify a token and return typed claims."""
        payload = self.verify(token)
        if payload is None:
            return None
        return SessionClaims(
            user_id=payload["userId"],
            email=payload["email"],
            session_token=payload["sessionToken"],
            issued_at=int(payload["iat"]),
            expires_at=int(payload["exp"]),
        )


@dataclass(frozen=True)
class ActivationClaims:
    """Verified activation token claims."""

    jti: str
    license_id: str
    app_name: str
    machine_id: str
    issued_at: int
    expires_at: int


class ActivationTokenCodec(TokenCodec):
    """Codec for license activation tokens."""

    REQUIRED = ("jti", "licenseId", "appName", "machineId")

    def issue(
        self,
        license_id: str,
        app_name: str,
        machine_id: str,
        expires_at: datetime,
    ) -> str:
        """
        Mint an activation token.

        Args:
            license_id: License the activation belongs to
            app_name: Canonical app name
            machine_id: Client machine identity
            expires_at: Token expiry (aware datetime)

        Returns:
            Compact token string
        """
        return self.sign(
            {
                "typ": ACTIVATION_TOKEN_TYPE,
                "jti": secrets.token_hex(16),
                "licenseId": str(license_id),
                "appName": app_name,
                "machineId": machine_id,
                "iat": self.now(),
                "exp": int(expires_at.timestamp()),
            }
        )

    def has_required_claims(self, payload: Dict[str, Any]) -> bool:
        if payload.get("typ") != ACTIVATION_TOKEN_TYPE:
            return False
        return all(isinstance(payload.get(name), str) and payload[name] for name in self.REQUIRED)

    def read_claims(self, token: str) -> Optional[ActivationClaims]:
        """Verify a token and return typed claims."""
        payload = self.verify(token)
        if payload is None:
            return None
        return ActivationClaims(
            jti=payload["jti"],
            license_id=payload["licenseId"],
            app_name=payload["appName"],
            machine_id=payload["machineId"],
            issued_at=int(payload["iat"]),
            expires_at=int(payload["exp"]),
        )


@lru_cache(maxsize=None)
def get_session_token_codec() -> SessionTokenCodec:
    """Process-wide session codec built from settings."""
    return SessionTokenCodec(settings.JWT_SECRET)


@lru_cache(maxsize=None)
def get_activation_token_codec() -> ActivationTokenCodec:
    """Process-wide activation codec built from settings."""
    return ActivationTokenCodec(settings.LICENSE_TOKEN_SECRET)
