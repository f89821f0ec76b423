"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- Inverts dependencies: the Core depends on abstractions, not on sources.
"""

from core.interfaces.sources import ProfileStore, Resolver, SecureStore

__all__ = ["ProfileStore", "Resolver", "SecureStore"]
