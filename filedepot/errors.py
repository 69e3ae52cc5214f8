"""File Depot client error types.

Invalid arguments are reported with the built-in ``ValueError`` before any
request is made. Everything that happens after that is a ``FileDepotError``.
"""


class FileDepotError(Exception):
    """Base class for File Depot client errors."""


class FileDepotServerError(FileDepotError):
    """Error reported by the server (``success: false`` envelope or no response)."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(self._build_message(code, message))
        self.code = code
        self.error_message = message

    @staticmethod
    def _build_message(code: str | None, message: str) -> str:
        if code is None or not code.strip():
            return message
        return f"[{code}] {message}"


class FileDepotClientError(FileDepotError):
    """Client side failure: network, timeout or deserialization."""
