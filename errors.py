"""Error taxonomy for metadata fetching.

Every failure of a fetch or extraction surfaces as exactly one of these,
chained to the library exception that caused it.
"""


class MetadataError(Exception):
    """Base class for all metadata acquisition failures."""

    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"{message} ({url})")


class TransportError(MetadataError):
    """The request could not be completed (DNS, connect, timeout, read)."""


class HTTPStatusError(MetadataError):
    """The server answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(url, f"HTTP {status_code}")


class MalformedBodyError(MetadataError):
    """The body could not be parsed into the expected document shape.

    `body` holds the exact text that failed to parse.
    """

    def __init__(self, url: str, body: str, reason: str):
        self.body = body
        self.reason = reason
        super().__init__(url, f"Malformed document: {reason}")


class ValidationError(MetadataError):
    """The document parsed but violates semantic constraints."""

    def __init__(self, url: str, problems: list[str]):
        self.problems = list(problems)
        super().__init__(url, "Invalid document: " + "; ".join(self.problems))


class ArchiveIOError(MetadataError):
    """The archive could not be written to or read from temporary storage."""


class ArchiveFormatError(MetadataError):
    """The download is not a readable zip archive."""


class DocumentNotFoundError(ArchiveFormatError):
    """The archive has no `.json` entry."""

    def __init__(self, url: str):
        super().__init__(url, "Unable to find version document in archive")
