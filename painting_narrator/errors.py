"""Exception types raised by the narration pipeline."""


class NarratorError(Exception):
    """Base class for all painting narrator errors."""


class CatalogError(NarratorError):
    """Catalog file is missing or not in the expected shape."""


class ConfigError(NarratorError):
    """Required configuration value is missing or invalid."""


class DescriptionServiceError(NarratorError):
    """Text-generation request failed.

    ``payload`` holds the upstream error body when the service answered,
    otherwise the transport error message.
    """

    def __init__(self, message: str, payload=None):
        super().__init__(message)
        self.payload = payload


class LogWriteError(NarratorError):
    def __init__(self, path: str, cause: Exception):
        super().__init__(f"Could not append to {path}: {cause}")
        self.path = path
        self.cause = cause


class ChunkFetchError(NarratorError):
    """One or more speech chunks could not be downloaded.

    ``paths`` lists every temp file created for the painting, fetched or not,
    so the caller can remove them.
    """

    def __init__(self, message: str, paths: list[str] | None = None):
        super().__init__(message)
        self.paths = list(paths or [])


class AssemblyError(NarratorError):
    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
