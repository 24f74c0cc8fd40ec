"""
Introspection module for classifying and rebuilding arbitrary values.
"""

from .adapter import Shape, classify, record_fields

__all__ = ['Shape', 'classify', 'record_fields']
