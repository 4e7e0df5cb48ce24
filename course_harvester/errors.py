"""Error taxonomy shared across the harvester."""

from __future__ import annotations


class HarvestError(Exception):
    """Base error for the course harvester."""


class ConfigurationError(HarvestError):
    """Raised when configuration cannot be loaded or validated."""


class DiscoveryError(HarvestError):
    """Raised when the course index cannot be fetched before any task starts."""


class FetchError(HarvestError):
    """Raised when a remote resource cannot be retrieved."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class CourseParseError(HarvestError):
    """Raised when a course page lacks required metadata."""


class MediaToolError(HarvestError):
    """Raised when the external media tool exits with a non-zero status."""

    def __init__(self, message: str, returncode: int, output: str = "") -> None:
        super().__init__(f"{message} (exit code {returncode})\n{output}".rstrip())
        self.returncode = returncode
        self.output = output


__all__ = [
    "ConfigurationError",
    "CourseParseError",
    "DiscoveryError",
    "FetchError",
    "HarvestError",
    "MediaToolError",
]
