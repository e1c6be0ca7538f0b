"""Custom exceptions for git-feature."""


class FeatureError(Exception):
    """Base exception for all git-feature errors."""

    exit_code: int = 1


class InputError(FeatureError):
    """Raised when a command argument is missing or invalid."""

    pass


class DuplicateFeatureError(InputError):
    """Raised when a feature is already in the registry."""

    pass


class FeatureNotFoundError(InputError):
    """Raised when a feature is not in the registry."""

    pass


class StateReadError(FeatureError):
    """Raised when a state document cannot be read or parsed.

    Never escapes the state store; readers fall back to empty defaults.
    """

    pass


class StateWriteError(FeatureError):
    """Raised when a state document cannot be written."""

    pass


class GatewayError(FeatureError):
    """Raised when a git operation fails."""

    exit_code: int = 4


class BranchExistsError(GatewayError):
    """Raised when a branch to be created already exists."""

    pass


class GitConflictError(FeatureError):
    """Raised when a cherry-pick stops on conflicts."""

    exit_code: int = 3

    def __init__(self, message: str, commit: str | None = None):
        super().__init__(message)
        self.commit = commit


class ReleaseAbortedError(FeatureError):
    """Raised when the user gives up on a conflicted release."""

    exit_code: int = 3


class PublishError(FeatureError):
    """Raised when a pull request cannot be created."""

    exit_code: int = 5

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause
