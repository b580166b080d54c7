"""Exception types raised while scraping a Dynomite node."""


class ExporterError(Exception):
    """Base class for exporter errors."""


class UnreachableUpstreamError(ExporterError):
    """The Dynomite stats endpoint could not be fetched or read.

    Attributes:
        address: The upstream address that was queried.
    """

    def __init__(self, message: str, address: str = "") -> None:
        super().__init__(message)
        self.address = address


class DocumentDecodeError(UnreachableUpstreamError):
    """The response body is not a decodable stats document."""


class InternalProjectionError(ExporterError):
    """Projecting a decoded document onto metric samples failed."""
