"""Exception taxonomy for site exploration."""


class SiteExplorerError(Exception):
    """Base class for all site explorer errors."""


class OracleError(SiteExplorerError):
    """An oracle call (answering or embedding) failed."""


class OracleFormatError(OracleError):
    """An oracle response did not match the expected JSON shape.

    Args:
        message: Description of the mismatch.
        raw: The raw response text, kept for debugging.
    """

    def __init__(self, message: str, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw


class FetchError(SiteExplorerError):
    """A page could not be fetched."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ReportError(SiteExplorerError):
    """The report sink rejected or failed to receive the answers."""
