"""
Infrastructure layer - Tooling around the container.

It depends on both Application and Domain layers.
"""

from . import testing

__all__ = [
    "testing",
]
