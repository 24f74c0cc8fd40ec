"""
Secretive - reversible scrubbing of nested Python values.

Walks arbitrary composite values (dataclasses, named tuples, lists,
tuples, dicts, optionals and scalars), replaces selected string leaves
with opaque tokens and keeps a secret store so the originals can be
restored later.
"""

__version__ = "0.1.0"
__author__ = "Secretive Team"

from pathlib import Path

# Package root directory
PACKAGE_ROOT = Path(__file__).parent

# Default configuration
DEFAULT_CONFIG = {
    "token_prefix": "$ref-",
    "skip_empty": True,     # Empty strings are never replaced by the default policy
    "sample_seed": 42,
}

from .secrets.store import SecretStore
from .scrub.scrubber import Scrubber, ScrubConfig, ScrubStats, scrub, restore
from .scrub.policies import default_on_value

__all__ = [
    'DEFAULT_CONFIG',
    'SecretStore',
    'Scrubber',
    'ScrubConfig',
    'ScrubStats',
    'default_on_value',
    'restore',
    'scrub',
]
