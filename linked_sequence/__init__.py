"""Singly linked list with list-like ergonomics."""
from .base import Container
from .data_structures.basic.linked_list import LinkedList, Match, Node
from .errors import (
    EmptyContainerError,
    MissingCallbackError,
    MissingValueError,
    OutOfRangeError,
    SequenceError,
    TypeMismatchError,
    UnsupportedSourceError,
)

__all__ = [
    "Container",
    "LinkedList",
    "Match",
    "Node",
    "SequenceError",
    "OutOfRangeError",
    "EmptyContainerError",
    "MissingCallbackError",
    "MissingValueError",
    "TypeMismatchError",
    "UnsupportedSourceError",
]
__version__ = "0.1.0"
