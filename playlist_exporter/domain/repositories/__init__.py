"""Repository contracts for the domain layer."""

from .interfaces import CredentialStore

__all__ = ["CredentialStore"]
