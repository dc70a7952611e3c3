"""Exception hierarchy shared by the models, importers and exporters."""

from __future__ import annotations


class SceneBuilderError(Exception):
    """Base class for every error raised by slsb."""


class ProjectLoadError(SceneBuilderError, ValueError):
    """Raised when a project (or input) file cannot be read or written."""


class LegacyFormatError(SceneBuilderError, ValueError):
    """Raised when a legacy animation document is missing or mistypes a field."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class OffsetFormatError(SceneBuilderError, ValueError):
    """Raised when an offset document does not match the project."""


class UnknownRaceError(SceneBuilderError, LookupError):
    """Raised when a legacy race name has no race key."""


class UnknownSexError(SceneBuilderError, ValueError):
    """Raised when a legacy actor type is not recognized."""


class UnmappedRaceError(SceneBuilderError, LookupError):
    """Raised when a race key has no target folder."""


class ConsistencyError(SceneBuilderError):
    """Raised when a scene violates a structural invariant."""

    def __init__(self, message: str, scene_id: str = "") -> None:
        super().__init__(message)
        self.scene_id = scene_id


class MigrationError(SceneBuilderError):
    """Raised when a scene cannot be brought up to the current version."""

    def __init__(self, message: str, scene_id: str = "") -> None:
        super().__init__(message)
        self.scene_id = scene_id


class EncodeError(SceneBuilderError, ValueError):
    """Raised when a value cannot be written by the binary codec."""


class NothingSelectedError(SceneBuilderError):
    """Raised when no path was chosen for an operation that needs one."""
