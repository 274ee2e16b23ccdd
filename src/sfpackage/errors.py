"""Error definitions and handling for sfpackage."""

from typing import Any, Dict, Optional


class SfPackageError(Exception):
    """Base exception for sfpackage errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with code, message, and optional details."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class FatalInputError(SfPackageError):
    """A changed path cannot be decomposed into type and member.

    Usually a truncated line of diff output. The run must abort without
    writing any manifest.
    """

    def __init__(self, path: str, segments: list[str]):
        super().__init__(
            code="UNPROCESSABLE_PATH",
            message=f'File name "{path}" cannot be processed',
            details={"path": path, "segments": segments},
        )
        self.path = path


class UnrecognizedOperationWarning(SfPackageError):
    """A diff status other than add, modify or delete on an in-scope path.

    Collected per record by the classifier, never raised by it.
    """

    def __init__(self, path: str, status: str):
        super().__init__(
            code="UNRECOGNIZED_OPERATION",
            message=f"Operation on file needs review: {path}",
            details={"path": path, "status": status},
        )
        self.path = path
        self.status = status


class GitUnavailableError(SfPackageError):
    """Git executable is missing or too old."""

    def __init__(self, detected_version: str, required_version: str = "2.0"):
        super().__init__(
            code="GIT_UNAVAILABLE",
            message=f"Git version {detected_version} is not usable. "
            f"Minimum required: {required_version}",
            details={
                "detected_version": detected_version,
                "required_version": required_version,
            },
        )


class GitDiffFailedError(SfPackageError):
    """The git diff command failed or reported errors."""

    def __init__(self, compare: str, branch: str, reason: str):
        super().__init__(
            code="GIT_DIFF_FAILED",
            message=f"An error has occurred: {reason}",
            details={"compare": compare, "branch": branch, "reason": reason},
        )


class StagingError(SfPackageError):
    """A changed file could not be copied into the build directory."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            code="STAGING_FAILED",
            message=f"Failed to stage {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class BuildDirectoryError(SfPackageError):
    """The package directory or its manifest could not be written."""

    def __init__(self, directory: str, reason: str):
        super().__init__(
            code="BUILD_DIR_FAILED",
            message=f"Failed to build package directory {directory}: {reason}",
            details={"directory": directory, "reason": reason},
        )
