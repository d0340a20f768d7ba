"""
Component specs and placeholder substitution.
"""

from .spec import ComponentSpec, token_key, prune_empty
from .registry import SpecRegistry

__all__ = [
    "ComponentSpec",
    "SpecRegistry",
    "token_key",
    "prune_empty",
]
