"""
Scrub module: scrub/restore entry points and decision policies.
"""

from .policies import (
    default_on_value,
    make_prefix_policy,
    scrub_matching,
    scrub_paths,
)
from .scrubber import Scrubber, ScrubConfig, ScrubStats, restore, scrub

__all__ = [
    'Scrubber',
    'ScrubConfig',
    'ScrubStats',
    'default_on_value',
    'make_prefix_policy',
    'restore',
    'scrub',
    'scrub_matching',
    'scrub_paths',
]
