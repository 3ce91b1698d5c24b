"""Consumers of the CRUD layer."""

from .identity import DbUserProvider, IdentityProvider

__all__ = ["DbUserProvider", "IdentityProvider"]
