"""Domain layer package exposing pure business abstractions."""

from . import entities
from . import interfaces

__all__ = [
    "entities",
    "interfaces",
]
