"""
Data contracts and type definitions.
"""

__all__ = [
    "CookieRecord",
    "JarConfig",
    "SessionConfig",
]

from .config import JarConfig, SessionConfig
from .cookie import CookieRecord
