"""
Secret store: the token -> original value table produced by scrubbing.

The store is a plain string-to-string mapping and serializes to a flat
JSON object, so it can be persisted at the scrub site and loaded again
wherever the value is restored.

Stores are not locked. Restore copies the store before reading it, so a
store must not be mutated elsewhere while a restore is running.
"""

import json
import logging
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

logger = logging.getLogger(__name__)


class SecretStore(MutableMapping):
    """
    Mapping from token to original string value.

    Keys are unique tokens; values may repeat. Writing an existing token
    silently replaces the earlier original (last write wins).
    """

    def __init__(self, secrets: Optional[Mapping[str, str]] = None):
        self._secrets: Dict[str, str] = {}
        if secrets:
            for token, original in secrets.items():
                self[token] = original

    def __getitem__(self, token: str) -> str:
        return self._secrets[token]

    def __setitem__(self, token: str, original: str) -> None:
        if not isinstance(token, str) or not isinstance(original, str):
            raise ValueError(
                f"Secret store entries must be str -> str, got "
                f"{type(token).__name__} -> {type(original).__name__}"
            )
        self._secrets[token] = original

    def __delitem__(self, token: str) -> None:
        del self._secrets[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._secrets)

    def __len__(self) -> int:
        return len(self._secrets)

    def __repr__(self) -> str:
        # Never print the originals
        return f"SecretStore(<{len(self)} secrets>)"

    def record(self, token: str, original: str) -> None:
        """Record a token for an original value."""
        self[token] = original

    def copy(self) -> 'SecretStore':
        """Return an independent copy of the store."""
        return SecretStore(self._secrets)

    def to_dict(self) -> Dict[str, str]:
        """Convert to a plain dict."""
        return dict(self._secrets)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SecretStore':
        """Create a store from a mapping, validating every entry."""
        if not isinstance(data, Mapping):
            raise ValueError(f"Secret store must be a mapping, got {type(data).__name__}")
        return cls(data)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize as a flat JSON object."""
        return json.dumps(self._secrets, indent=indent, sort_keys=True)

    @classmethod
    def from_json(cls, text: str) -> 'SecretStore':
        """Parse a store from a flat JSON object."""
        return cls.from_dict(json.loads(text))

    def save(self, path: Union[str, Path]) -> Path:
        """Write the store to a JSON file."""
        output_path = Path(path)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info(f"Saved {len(self)} secrets to {output_path}")
        return output_path

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'SecretStore':
        """Read a store from a JSON file."""
        input_path = Path(path)
        with open(input_path, 'r', encoding='utf-8') as f:
            store = cls.from_json(f.read())
        logger.info(f"Loaded {len(store)} secrets from {input_path}")
        return store
