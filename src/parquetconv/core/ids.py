from __future__ import annotations

import uuid


def short_token(length: int = 8) -> str:
    """Return ``length`` lowercase hex characters taken from a fresh UUID4."""
    return uuid.uuid4().hex[:length]
