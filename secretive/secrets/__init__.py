"""
Secret store module for token -> original value tables.
"""

from .store import SecretStore

__all__ = ['SecretStore']
