from pathlib import Path


class LfsCheckError(Exception):
    """
    Base class for failures that prevent the check from producing a verdict.
    These map to exit code 2, as opposed to policy violations (exit code 1).
    """
    def __init__(self, message: str, suggested_action: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggested_action = suggested_action


class NotAGitRepositoryError(LfsCheckError):
    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Path {path} is not inside a git work tree.",
            suggested_action="Run the check from a checked-out repository.")
        self.path = path


class GitLfsMissingError(LfsCheckError):
    def __init__(self, detail: str | None = None) -> None:
        message = "git-lfs is not available."
        if detail:
            message += f" ({detail})"
        super().__init__(
            message,
            suggested_action="Install git-lfs and run 'git lfs install'.")


class GitCommandFailedError(LfsCheckError):
    def __init__(self, command: str, status: int | str | None, stderr: str = "") -> None:
        message = f"'{command}' failed with status {status}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)
        self.command = command
        self.status = status
        self.stderr = stderr


class ConfigError(LfsCheckError):
    def __init__(self, message: str, path: Path | None = None) -> None:
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path
