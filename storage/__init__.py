# storage/__init__.py
from .profile_store import ProfileStore

__all__ = ["ProfileStore"]
