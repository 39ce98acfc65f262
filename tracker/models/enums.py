"""
Enumerations for repository ownership.
"""

from enum import Enum


class OwnerKind(str, Enum):
    """GitHub account type that owns a repository."""
    USER = "User"
    ORGANIZATION = "Organization"
