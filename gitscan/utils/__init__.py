"""Utilities package for gitscan."""

from .git import GitProber, ProbeError, parse_status
from .walker import find_repos

__all__ = [
    'GitProber',
    'ProbeError',
    'parse_status',
    'find_repos',
]
