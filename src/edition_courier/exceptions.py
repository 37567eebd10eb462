"""Exceptions raised while acquiring, assembling and distributing an edition."""

from pathlib import Path


class CourierError(Exception):
    """Base exception for all edition courier errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConfigError(CourierError):
    """Raised at startup when required configuration is missing or invalid."""

    pass


class NavigationError(CourierError):
    """Raised when the viewer never became usable within the allowed attempts."""

    def __init__(self, attempts: int, url: str | None = None):
        self.attempts = attempts
        self.url = url
        target = f" {url}" if url else ""
        super().__init__(f"Viewer{target} not usable after {attempts} attempts")


class PageMismatch(CourierError):
    """Describes a viewer that rendered a different page than requested.

    Mismatches are recorded on the page artifact rather than raised.
    """

    def __init__(self, requested: int, actual: str | None):
        self.requested = requested
        self.actual = actual
        super().__init__(f"Page mismatch: expected {requested}, got {actual}")


class ExportTimeout(CourierError):
    """Raised when waiting on the viewer for a page exceeds its bound.

    Attributes:
        page_index: Page being acquired
        stage: Which wait timed out: "render", "export" or "download"
    """

    def __init__(self, page_index: int, stage: str, timeout: float | None = None):
        self.page_index = page_index
        self.stage = stage
        self.timeout = timeout
        bound = f" after {timeout:g}s" if timeout is not None else ""
        super().__init__(f"Timed out waiting for {stage} of page {page_index}{bound}")


class MergeError(CourierError):
    """Raised when page artifacts cannot be combined into one document."""

    def __init__(self, message: str, page_index: int | None = None):
        self.page_index = page_index
        super().__init__(message)


class DistributionFailure(CourierError):
    """Raised inside the distributor when a delivery step fails."""

    def __init__(self, step: str, reason: str):
        self.step = step
        self.reason = reason
        super().__init__(f"{step}: {reason}")


class CleanupError(CourierError):
    """Describes a file that could not be deleted during cleanup."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Could not delete {path}: {reason}")
