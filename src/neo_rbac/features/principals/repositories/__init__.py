"""Principal repositories package."""

from .principal_directory import PrincipalDirectory

__all__ = ["PrincipalDirectory"]
