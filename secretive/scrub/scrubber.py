"""
Scrub and restore entry points.

scrub() returns a deep copy of a value with selected string leaves
replaced by tokens, plus the secret store mapping each token back to its
original. restore() takes a (scrubbed) value and a secret store and
returns a copy with tokens replaced by their originals.

Restore matches leaves by value, not by path: any string leaf anywhere in
the value that equals a known token is restored, even if it was never
scrubbed at that location. Each token is restored at most once per call.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .. import DEFAULT_CONFIG
from ..introspect.adapter import Shape, classify
from ..secrets.store import SecretStore
from ..traverse.engine import OnValueFunc, walk
from ..traverse.path import RESTORE_ROOT, SCRUB_ROOT
from .policies import default_on_value, make_prefix_policy, scrub_paths

logger = logging.getLogger(__name__)


@dataclass
class ScrubConfig:
    """Configuration for the default scrubbing policy."""
    token_prefix: str = DEFAULT_CONFIG["token_prefix"]
    skip_empty: bool = DEFAULT_CONFIG["skip_empty"]


@dataclass
class ScrubStats:
    """Statistics about scrub and restore calls."""
    strings_visited: int = 0
    strings_scrubbed: int = 0
    strings_restored: int = 0
    total_scrubs: int = 0
    total_restores: int = 0


def _check_root(obj: Any) -> None:
    """Fail before traversal when the root value cannot be walked."""
    if classify(obj) is Shape.OPAQUE:
        raise TypeError(
            f"Cannot traverse value of type {type(obj).__name__}: "
            "expected a dataclass, named tuple, list, tuple, dict, str, scalar or None"
        )


def scrub(obj: Any, on_value: Optional[OnValueFunc] = None) -> Tuple[Any, SecretStore]:
    """
    Scrub the given value.

    Args:
        obj: Value to scrub; it is not modified
        on_value: Decision callback, defaults to default_on_value

    Returns:
        (scrubbed copy, secret store of the tokens actually emitted)

    Example:
        >>> scrubbed, secrets = scrub({"field": "value"})
        >>> scrubbed
        {'field': '$ref-/field'}
        >>> secrets.to_dict()
        {'$ref-/field': 'value'}
    """
    if on_value is None:
        on_value = default_on_value
    _check_root(obj)

    secrets = SecretStore()
    scrubbed = walk(SCRUB_ROOT, obj, secrets, on_value)
    logger.info(f"Scrubbed {len(secrets)} values from {type(obj).__name__}")
    return scrubbed, secrets


def restore(obj: Any, secrets: Mapping[str, str]) -> Any:
    """
    Restore scrubbed data in the given value using the secrets mapping.

    Args:
        obj: Value to restore; it is not modified
        secrets: Token -> original mapping; it is not modified

    Returns:
        Copy of obj with every leaf equal to a known token replaced
    """
    restored, _ = _restore(obj, secrets)
    return restored


def _restore(obj: Any, secrets: Mapping[str, str]) -> Tuple[Any, int]:
    """Restore a value and return it with the number of leaves restored."""
    _check_root(obj)

    # Private copy, drained as tokens are restored
    remaining = dict(secrets)

    def on_value(field_path: str, value: str) -> Optional[str]:
        if value in remaining:
            return remaining.pop(value)
        return None

    # Receives original -> token pairs from the walk; not returned
    discarded: Dict[str, str] = {}
    restored = walk(RESTORE_ROOT, obj, discarded, on_value)
    n_restored = len(secrets) - len(remaining)
    logger.info(f"Restored {n_restored} of {len(secrets)} secrets")
    return restored, n_restored


class Scrubber:
    """
    Reusable scrubber holding a policy and call statistics.

    Wraps scrub() and restore() and counts the string leaves each call
    visits, scrubs and restores.
    """

    def __init__(
        self,
        on_value: Optional[OnValueFunc] = None,
        token_prefix: str = DEFAULT_CONFIG["token_prefix"],
        skip_empty: bool = DEFAULT_CONFIG["skip_empty"],
    ):
        """
        Initialize the scrubber.

        Args:
            on_value: Custom decision callback; overrides the prefix policy
            token_prefix: Prefix of tokens emitted by the prefix policy
            skip_empty: Whether the prefix policy leaves empty strings alone
        """
        self.config = ScrubConfig(token_prefix=token_prefix, skip_empty=skip_empty)
        if on_value is None:
            on_value = make_prefix_policy(self.config.token_prefix, self.config.skip_empty)
        self.on_value = on_value
        self.stats = ScrubStats()

    def _counting(self, on_value: OnValueFunc) -> OnValueFunc:
        def counted(field_path: str, value: str) -> Optional[str]:
            self.stats.strings_visited += 1
            replacement = on_value(field_path, value)
            if replacement is not None and replacement != value:
                self.stats.strings_scrubbed += 1
            return replacement

        return counted

    def scrub(self, obj: Any) -> Tuple[Any, SecretStore]:
        """Scrub a value with this scrubber's policy."""
        scrubbed, secrets = scrub(obj, self._counting(self.on_value))
        self.stats.total_scrubs += 1
        return scrubbed, secrets

    def restore(self, obj: Any, secrets: Mapping[str, str]) -> Any:
        """Restore a value and count the restored leaves."""
        restored, n_restored = _restore(obj, secrets)
        self.stats.strings_restored += n_restored
        self.stats.total_restores += 1
        return restored

    def get_stats(self) -> Dict[str, int]:
        """Get scrubbing statistics."""
        return {
            'strings_visited': self.stats.strings_visited,
            'strings_scrubbed': self.stats.strings_scrubbed,
            'strings_restored': self.stats.strings_restored,
            'total_scrubs': self.stats.total_scrubs,
            'total_restores': self.stats.total_restores,
        }

    def reset_stats(self):
        """Reset scrubbing statistics."""
        self.stats = ScrubStats()

    @classmethod
    def create_default(cls) -> 'Scrubber':
        """Create a scrubber using the "$ref-" + path policy."""
        return cls()

    @classmethod
    def create_for_paths(cls, paths: Iterable[str], prefix: str = "scrubbed") -> 'Scrubber':
        """Create a scrubber that only replaces leaves at the given paths."""
        return cls(on_value=scrub_paths(paths, prefix=prefix))

