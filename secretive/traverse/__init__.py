"""
Traversal module: path building and the depth-first walk.
"""

from .engine import OnValueFunc, walk
from .path import RESTORE_ROOT, SCRUB_ROOT

__all__ = ['OnValueFunc', 'walk', 'RESTORE_ROOT', 'SCRUB_ROOT']
