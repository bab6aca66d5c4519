"""
Server-side administrator sessions backing dashboard bearer tokens.
"""

from django.contrib.sessions.backends.db import SessionStore

from core.infrastructure.tokens import SESSION_TOKEN_TTL_SECONDS, get_session_token_codec


def open_admin_session(user) -> str:
    """
    Create a database session for ``user`` and mint a bearer token for it.

    The token stays usable until either its own expiry passes or the
    session row is deleted or expires.
    """
    session = SessionStore()
    session["admin_user_id"] = str(user.pk)
    session.set_expiry(SESSION_TOKEN_TTL_SECONDS)
    session.create()
    return get_session_token_codec().issue(
        user_id=str(user.pk),
        email=user.email,
        session_token=session.session_key,
    )


def close_admin_session(session_token: str) -> None:
    """Delete the session so tokens referencing it stop working."""
    SessionStore(session_key=session_token).delete()
