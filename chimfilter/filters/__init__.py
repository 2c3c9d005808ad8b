"""
holds the filters which reject candidates explained by technical artifacts. Importing this package registers
the built-in filters
"""
from .base import Filter, REGISTRY, filter_names, register_filter, registered_filters  # noqa: F401
from . import anchor, contigs, hairpin  # noqa: F401
