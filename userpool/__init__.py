"""User pool client: awaitable orchestration over a callback-style identity provider."""

__version__ = "1.0.0"
