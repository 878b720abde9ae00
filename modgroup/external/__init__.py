from . import cosets
from .cosets import CosetEnumerationError

__all__ = [
    "cosets",
    "CosetEnumerationError",
]
