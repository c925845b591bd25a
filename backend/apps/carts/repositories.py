from typing import Any, MutableMapping, Optional

from django.conf import settings

DEFAULT_CART_SESSION_KEY = "cart"


class SessionCartRepository:
    """
    Keeps the serialized cart text in the visitor's session.

    The session lives in the process-local cache, so a cart ends with the
    session and never outlives the process.
    """

    def __init__(self, session_key: Optional[str] = None):
        self.session_key = session_key or getattr(
            settings, "CART_SESSION_KEY", DEFAULT_CART_SESSION_KEY
        )

    def load(self, session: MutableMapping[str, Any]) -> Optional[str]:
        text = session.get(self.session_key)
        return text if isinstance(text, str) else None

    def save(self, session: MutableMapping[str, Any], text: str) -> None:
        session[self.session_key] = text
        _mark_modified(session)

    def clear(self, session: MutableMapping[str, Any]) -> None:
        if self.session_key in session:
            del session[self.session_key]
            _mark_modified(session)


def _mark_modified(session) -> None:
    # Plain dicts (used in tests) have no modified flag.
    if hasattr(session, "modified"):
        session.modified = True
