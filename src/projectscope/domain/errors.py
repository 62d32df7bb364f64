from __future__ import annotations

"""
Error Taxonomy.

Fatal conditions are raised as exceptions; recoverable per-node and
metadata problems are carried as warning strings instead.
"""


class ProjectScopeError(Exception):
    """Base class for every error raised by projectscope."""


class ProjectScanError(ProjectScopeError):
    """The scan root is missing, inaccessible or not a directory."""


class ProjectBaseError(ProjectScopeError):
    """The persisted project base cannot be used."""


class ProjectBaseNotFoundError(ProjectBaseError):
    """No artifact exists at the expected location."""


class ProjectBaseInvalidError(ProjectBaseError):
    """The artifact is unreadable, malformed or fails validation."""
