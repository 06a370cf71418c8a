"""Resolve provider API keys from the environment."""
from __future__ import annotations

import os
from typing import Optional

__all__ = ["resolve_api_key", "ALPHA_VANTAGE_KEY_ENV"]

ALPHA_VANTAGE_KEY_ENV = "ALPHA_VANTAGE_API_KEY"


def resolve_api_key(name: str, explicit: Optional[str] = None) -> Optional[str]:
    """Return an explicitly supplied key, else the environment value, else ``None``."""
    for value in (explicit, os.getenv(name)):
        if value:
            value = value.strip()
            if value:
                return value
    return None
