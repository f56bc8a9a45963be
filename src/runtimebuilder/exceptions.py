from typing import Optional


class RuntimeBuilderError(Exception):
    """Base exception for all application-specific errors."""

    pass


# --- 1. Errors related to locating and parsing the app.yaml document ---
class ConfigurationError(RuntimeBuilderError):
    """Base class for errors encountered while finding, reading, or parsing config files."""

    pass


class ConfigFileMissingError(ConfigurationError):
    """Raised when an explicitly requested configuration file cannot be found."""

    pass


class ConfigParsingError(ConfigurationError):
    """Raised when a YAML configuration file is syntactically incorrect."""

    pass


class ConfigValidationError(ConfigurationError):
    """Raised when the configuration fails structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors raised while a build step runs ---
class BuildStepError(RuntimeBuilderError):
    """
    Raised when a build step cannot complete.

    `step` holds the kind of the failing step. Steps may leave it empty;
    the pipeline configurator fills it in before the error reaches the caller.
    """

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.step = step

    def __str__(self) -> str:
        if self.step:
            return f"[{self.step}] {self.message}"
        return self.message


class ArtifactNotFoundError(BuildStepError):
    """Raised when no deployable artifact can be found in the workspace."""

    pass


class TooManyArtifactsError(BuildStepError):
    """Raised when more than one candidate artifact is found and none is configured."""

    pass


class ArtifactLocationError(BuildStepError):
    """Raised when the build artifact location is set more than once."""

    pass


class UnsupportedRuntimeError(BuildStepError):
    """Raised for unknown jdk/server names or artifacts no runtime image can serve."""

    pass


# --- 3. Errors related to IO operations ---
class RuntimeBuilderIOError(RuntimeBuilderError):
    """Base class for IO-related errors."""

    pass


class PathExistsError(RuntimeBuilderIOError):
    """Raised when a file or directory already exists."""

    pass


class PathNotFoundError(RuntimeBuilderIOError):
    """Raised when a file or directory is not found."""

    pass


class PathNotAFileError(RuntimeBuilderIOError):
    """Raised when a file is expected, but a directory is found."""

    pass


class PathNotADirectoryError(RuntimeBuilderIOError):
    """Raised when a directory is expected, but a file is found."""

    pass


class PathDecodeError(RuntimeBuilderIOError):
    """Raised when a text file is not valid UTF-8."""

    pass
