"""File Depot Python client.

A client for the File Depot file-storage service: presigned uploads and
downloads, file metadata, chunk listing, deletion and ZIP batch downloads.

Example:
    from filedepot import FileDepotClient

    with FileDepotClient("http://localhost:8080") as client:
        # Upload in one call (prepare, PUT to presigned URL, confirm)
        item = client.upload_file(b"Hello, File Depot!", "hello.txt")

        # Or step by step
        prepared = client.prepare_upload()
        # ... PUT the content to prepared.upload_url ...
        item = client.confirm_upload(prepared.id, "hello.txt")

        metadata = client.get_file_metadata(item.id)
        url = client.get_download_url(item.id).download_url
        archive = client.download_batch([item.id])
        client.delete_files([item.id])
"""

from importlib.metadata import PackageNotFoundError, version

from .client import AsyncFileDepotClient, FileDepotClient
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

try:
    __version__ = version("filedepot-client")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "MAX_FILE_NAME_LENGTH",
    # Client
    "AsyncFileDepotClient",
    "BatchDownloadRequest",
    "Chunk",
    "ClientConfig",
    "CommonResponse",
    "ConfirmUploadRequest",
    "DownloadUrlResponse",
    "FileDepotClient",
    "FileDepotClientError",
    "FileDepotError",
    "FileDepotServerError",
    "StorageItem",
    "UploadUrlResponse",
    # Version
    "__version__",
]
