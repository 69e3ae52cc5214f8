"""API client for the File Depot server."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import ClientConfig
from .errors import FileDepotClientError, FileDepotError, FileDepotServerError
from .models import (
    BatchDownloadRequest,
    Chunk,
    CommonResponse,
    ConfirmUploadRequest,
    DownloadUrlResponse,
    StorageItem,
    UploadUrlResponse,
)
from .types import MAX_FILE_NAME_LENGTH
from .validation import require_max_length, require_non_blank, require_non_empty_ids

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

PREPARE_UPLOAD_PATH = "/api/files/prepare-upload"
CONFIRM_UPLOAD_PATH = "/api/files/confirm-upload"
DELETE_PATH = "/api/files/delete"
BATCH_DOWNLOAD_PATH = "/api/files/download/batch"


def _file_path(file_id: str, suffix: str = "") -> str:
    return f"/api/files/{quote(file_id, safe='')}{suffix}"


def _flag(name: str, enabled: bool) -> dict[str, str] | None:
    # Flags are only sent when set
    return {name: "true"} if enabled else None


# =============================================================================
# Response handling
# =============================================================================


def _decode_envelope(response: httpx.Response) -> CommonResponse:
    """Parse a response body into an envelope with an untyped payload.

    Raises:
        FileDepotServerError: If the body is empty
        FileDepotClientError: If the body is not a valid envelope
    """
    if not response.content:
        raise FileDepotServerError("No response from server")
    try:
        return CommonResponse[Any].model_validate_json(response.content)
    except ValidationError as e:
        raise FileDepotClientError(f"unexpected: {e}") from e


def _unwrap(envelope: CommonResponse, payload_type: Any) -> Any:
    """Return envelope data as payload_type, raising if the server reported a failure.

    The payload is only validated on success, failure envelopes may carry
    arbitrary error details in ``data``.
    """
    if not envelope.success:
        message = envelope.message or "Request failed"
        logger.warning(f"File Depot server error: {message}")
        raise FileDepotServerError(message, code=envelope.code)
    if envelope.data is None:
        return None
    try:
        return TypeAdapter(payload_type).validate_python(envelope.data)
    except ValidationError as e:
        raise FileDepotClientError(f"unexpected: {e}") from e


def _error_from_status(response: httpx.Response) -> FileDepotError:
    """Translate a non-2xx response into a client exception.

    A failure envelope in the body is reported as a server error with its
    message and code. Anything else is a client error.
    """
    try:
        envelope = _decode_envelope(response)
    except FileDepotError:
        envelope = None

    if envelope is not None and not envelope.success:
        message = envelope.message or response.reason_phrase
        logger.warning(
            f"File Depot server error: {response.status_code} - {message}",
            extra={"url": str(response.request.url)},
        )
        return FileDepotServerError(message, code=envelope.code)

    logger.warning(
        f"File Depot request failed: {response.status_code}",
        extra={"url": str(response.request.url)},
    )
    return FileDepotClientError(
        f"unexpected: {response.status_code} - {response.text}"
    )


def _read_envelope(response: httpx.Response, payload_type: Any) -> Any:
    if response.is_error:
        raise _error_from_status(response)
    return _unwrap(_decode_envelope(response), payload_type)


def _read_bytes(response: httpx.Response) -> bytes:
    if response.is_error:
        raise _error_from_status(response)
    return response.content


def _check_presigned(response: httpx.Response, action: str) -> None:
    # Object storage answers presigned requests directly, without an envelope
    if response.is_error:
        raise FileDepotClientError(
            f"{action} failed: {response.status_code} - {response.text}"
        )


class FileDepotClient:
    """API client for the File Depot server.

    Every method may raise:
        ValueError: Invalid arguments, raised before any request is sent
        FileDepotServerError: The server reported a failure
        FileDepotClientError: Network, timeout or deserialization failure

    Example:
        with FileDepotClient("http://localhost:8080") as client:
            item = client.upload_file(b"Hello, File Depot!", "hello.txt")
            url = client.get_download_url(item.id)
            print(url.download_url)
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ):
        """Create a new File Depot client.

        Args:
            base_url: Base URL of the File Depot server
            timeout: Request timeout in seconds (default: 30.0)
            http_client: Pre-configured httpx client to send requests with.
                Its base URL is replaced with base_url. The caller keeps
                ownership and must close it.

        Raises:
            ValueError: If base_url is None or blank
        """
        require_non_blank(base_url, "base_url")
        self._base_url = base_url.rstrip("/")

        if http_client is None:
            self._client = httpx.Client(base_url=self._base_url, timeout=timeout)
            self._owns_client = True
        else:
            http_client.base_url = self._base_url
            self._client = http_client
            self._owns_client = False

    @classmethod
    def from_config(cls, config: ClientConfig | None = None) -> "FileDepotClient":
        """Create a client from configuration (default: FILEDEPOT_ env vars)."""
        config = config or ClientConfig()
        return cls(str(config.base_url), timeout=config.timeout)

    def _request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request, wrapping transport failures in FileDepotClientError."""
        logger.debug(f"{method} {url}")
        try:
            return self._client.request(
                method,
                url,
                json=json,
                params=params,
                content=content,
                headers=headers,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"File Depot request failed: {method} {url}: {e}")
            raise FileDepotClientError(f"unexpected: {e}") from e

    def prepare_upload(self) -> UploadUrlResponse:
        """Reserve a file id and obtain a presigned upload URL.

        POST /api/files/prepare-upload

        Returns:
            Upload URL info (id, upload_url, expiry_seconds)
        """
        response = self._request("POST", PREPARE_UPLOAD_PATH)
        return _read_envelope(response, UploadUrlResponse)

    def confirm_upload(self, file_id: str, file_name: str | None = None) -> StorageItem:
        """Confirm that the content was uploaded to the presigned URL.

        POST /api/files/confirm-upload

        Args:
            file_id: File id returned by prepare_upload
            file_name: Display name, at most 255 characters. The server
                uses the id when omitted.

        Returns:
            Metadata of the stored file
        """
        require_non_blank(file_id, "file_id")
        require_max_length(file_name, MAX_FILE_NAME_LENGTH, "file_name")
        body = ConfirmUploadRequest(id=file_id, file_name=file_name)
        response = self._request("POST", CONFIRM_UPLOAD_PATH, json=body.to_dict())
        return _read_envelope(response, StorageItem)

    def get_file_metadata(
        self, file_id: str, with_content: bool = False
    ) -> StorageItem:
        """Get metadata of a stored file.

        GET /api/files/{id}[?withContent=true]

        Args:
            file_id: File id
            with_content: Include the extracted text content

        Returns:
            Metadata of the stored file
        """
        require_non_blank(file_id, "file_id")
        response = self._request(
            "GET", _file_path(file_id), params=_flag("withContent", with_content)
        )
        return _read_envelope(response, StorageItem)

    def get_download_url(self, file_id: str) -> DownloadUrlResponse:
        """Obtain a presigned download URL for a stored file.

        GET /api/files/{id}/download-url
        """
        require_non_blank(file_id, "file_id")
        response = self._request("GET", _file_path(file_id, "/download-url"))
        return _read_envelope(response, DownloadUrlResponse)

    def delete_files(self, ids: list[str]) -> None:
        """Delete files (soft delete on the server).

        POST /api/files/delete

        Args:
            ids: File ids to delete, non-empty, no blank elements
        """
        require_non_empty_ids(ids, "ids")
        response = self._request("POST", DELETE_PATH, json=list(ids))
        _read_envelope(response, Any)

    def download_batch(self, ids: list[str]) -> bytes:
        """Download several files as a single ZIP archive.

        POST /api/files/download/batch

        Args:
            ids: File ids to include, non-empty, no blank elements

        Returns:
            ZIP archive bytes
        """
        require_non_empty_ids(ids, "ids")
        body = BatchDownloadRequest(ids=list(ids))
        response = self._request("POST", BATCH_DOWNLOAD_PATH, json=body.to_dict())
        return _read_bytes(response)

    def get_chunks(self, file_id: str, with_embedding: bool = False) -> list[Chunk]:
        """List the chunks of a stored file.

        GET /api/files/{id}/chunks[?withEmbedding=true]
        """
        require_non_blank(file_id, "file_id")
        response = self._request(
            "GET",
            _file_path(file_id, "/chunks"),
            params=_flag("withEmbedding", with_embedding),
        )
        return _read_envelope(response, list[Chunk])

    def upload_file(
        self,
        content: bytes,
        file_name: str | None = None,
        content_type: str | None = None,
    ) -> StorageItem:
        """Upload content in one call: prepare, PUT to the presigned URL, confirm.

        Args:
            content: File content
            file_name: Display name, at most 255 characters
            content_type: Optional MIME type sent with the upload

        Returns:
            Metadata of the stored file
        """
        require_max_length(file_name, MAX_FILE_NAME_LENGTH, "file_name")
        prepared = self.prepare_upload()

        headers = {"Content-Type": content_type} if content_type else None
        response = self._request(
            "PUT", prepared.upload_url, content=content, headers=headers
        )
        _check_presigned(response, "Upload")

        logger.info(f"Uploaded {len(content)} bytes as {prepared.id}")
        return self.confirm_upload(prepared.id, file_name)

    def download_file(self, file_id: str) -> bytes:
        """Download the content of a stored file through its presigned URL."""
        download = self.get_download_url(file_id)
        response = self._request("GET", download.download_url)
        _check_presigned(response, "Download")
        return response.content

    def close(self) -> None:
        """Close the client connection."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "FileDepotClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()


class AsyncFileDepotClient:
    """Async API client for the File Depot server.

    Same operations and errors as FileDepotClient, as coroutines.

    Example:
        async with AsyncFileDepotClient("http://localhost:8080") as client:
            prepared = await client.prepare_upload()
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Create a new async File Depot client.

        Args:
            base_url: Base URL of the File Depot server
            timeout: Request timeout in seconds (default: 30.0)
            http_client: Pre-configured httpx async client, owned by the caller
        """
        require_non_blank(base_url, "base_url")
        self._base_url = base_url.rstrip("/")

        if http_client is None:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=timeout)
            self._owns_client = True
        else:
            http_client.base_url = self._base_url
            self._client = http_client
            self._owns_client = False

    @classmethod
    def from_config(
        cls, config: ClientConfig | None = None
    ) -> "AsyncFileDepotClient":
        """Create a client from configuration (default: FILEDEPOT_ env vars)."""
        config = config or ClientConfig()
        return cls(str(config.base_url), timeout=config.timeout)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        logger.debug(f"{method} {url}")
        try:
            return await self._client.request(
                method,
                url,
                json=json,
                params=params,
                content=content,
                headers=headers,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"File Depot request failed: {method} {url}: {e}")
            raise FileDepotClientError(f"unexpected: {e}") from e

    async def prepare_upload(self) -> UploadUrlResponse:
        """Reserve a file id and obtain a presigned upload URL."""
        response = await self._request("POST", PREPARE_UPLOAD_PATH)
        return _read_envelope(response, UploadUrlResponse)

    async def confirm_upload(
        self, file_id: str, file_name: str | None = None
    ) -> StorageItem:
        """Confirm that the content was uploaded to the presigned URL."""
        require_non_blank(file_id, "file_id")
        require_max_length(file_name, MAX_FILE_NAME_LENGTH, "file_name")
        body = ConfirmUploadRequest(id=file_id, file_name=file_name)
        response = await self._request(
            "POST", CONFIRM_UPLOAD_PATH, json=body.to_dict()
        )
        return _read_envelope(response, StorageItem)

    async def get_file_metadata(
        self, file_id: str, with_content: bool = False
    ) -> StorageItem:
        """Get metadata of a stored file."""
        require_non_blank(file_id, "file_id")
        response = await self._request(
            "GET", _file_path(file_id), params=_flag("withContent", with_content)
        )
        return _read_envelope(response, StorageItem)

    async def get_download_url(self, file_id: str) -> DownloadUrlResponse:
        """Obtain a presigned download URL for a stored file."""
        require_non_blank(file_id, "file_id")
        response = await self._request("GET", _file_path(file_id, "/download-url"))
        return _read_envelope(response, DownloadUrlResponse)

    async def delete_files(self, ids: list[str]) -> None:
        """Delete files (soft delete on the server)."""
        require_non_empty_ids(ids, "ids")
        response = await self._request("POST", DELETE_PATH, json=list(ids))
        _read_envelope(response, Any)

    async def download_batch(self, ids: list[str]) -> bytes:
        """Download several files as a single ZIP archive."""
        require_non_empty_ids(ids, "ids")
        body = BatchDownloadRequest(ids=list(ids))
        response = await self._request(
            "POST", BATCH_DOWNLOAD_PATH, json=body.to_dict()
        )
        return _read_bytes(response)

    async def get_chunks(
        self, file_id: str, with_embedding: bool = False
    ) -> list[Chunk]:
        """List the chunks of a stored file."""
        require_non_blank(file_id, "file_id")
        response = await self._request(
            "GET",
            _file_path(file_id, "/chunks"),
            params=_flag("withEmbedding", with_embedding),
        )
        return _read_envelope(response, list[Chunk])

    async def upload_file(
        self,
        content: bytes,
        file_name: str | None = None,
        content_type: str | None = None,
    ) -> StorageItem:
        """Upload content in one call: prepare, PUT to the presigned URL, confirm."""
        require_max_length(file_name, MAX_FILE_NAME_LENGTH, "file_name")
        prepared = await self.prepare_upload()

        headers = {"Content-Type": content_type} if content_type else None
        response = await self._request(
            "PUT", prepared.upload_url, content=content, headers=headers
        )
        _check_presigned(response, "Upload")

        logger.info(f"Uploaded {len(content)} bytes as {prepared.id}")
        return await self.confirm_upload(prepared.id, file_name)

    async def download_file(self, file_id: str) -> bytes:
        """Download the content of a stored file through its presigned URL."""
        download = await self.get_download_url(file_id)
        response = await self._request("GET", download.download_url)
        _check_presigned(response, "Download")
        return response.content

    async def close(self) -> None:
        """Close the client connection."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncFileDepotClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.close()
