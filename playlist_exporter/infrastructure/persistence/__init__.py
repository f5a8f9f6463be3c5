"""Credential persistence implementations."""

from .credential_store import InMemoryCredentialStore

__all__ = ["InMemoryCredentialStore"]
