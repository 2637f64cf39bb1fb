"""Utilities package - Flat structure (no nested directories)"""

# URL utilities
from .url_utils import normalize_href

# Resource loaders
from .resource_loader import load_yaml_resource

__all__ = [
    "normalize_href",
    "load_yaml_resource",
]
