"""
Sample data module for generating nested records to scrub.
"""

from .generator import Customer, SampleGenerator

__all__ = ['Customer', 'SampleGenerator']
