"""Exception hierarchy for vaultdoc."""

from __future__ import annotations


class VaultdocError(Exception):
    """Base class for all vaultdoc errors."""


class ConfigurationError(VaultdocError, ValueError):
    """Settings or config could not be parsed or validated. The run never starts."""


class ExportDirectoryError(VaultdocError):
    """The export target root could not be resolved or created."""

    def __init__(self, target: str, cause: Exception | None = None) -> None:
        self.target = target
        msg = f"Cannot create export directory '{target}'"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
        self.__cause__ = cause


class ServerStateError(VaultdocError):
    """A server lifecycle operation was called in the wrong state."""


class PathTraversalError(VaultdocError, ValueError):
    """A relative path would resolve outside of its root."""

    def __init__(self, path: str, root: str) -> None:
        self.path = path
        self.root = root
        super().__init__(f"Path '{path}' escapes export root '{root}'")


class DuplicateEntryError(VaultdocError):
    """Two bundle entries claim the same target path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Duplicate bundle entry: {path}")
