"""
Domain value objects - immutable types and enums.
"""

from .enums import Environment, ErrorKind

__all__ = [
    "Environment",
    "ErrorKind",
]
