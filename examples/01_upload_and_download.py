"""Upload and download example.

This example demonstrates:
- Building a client from FILEDEPOT_ environment variables
- Uploading a file through a presigned URL in one call
- Fetching metadata and chunks
- Downloading a single file and a ZIP batch
- Deleting files

Run against a local server:
    FILEDEPOT_BASE_URL=http://localhost:8080 python examples/01_upload_and_download.py
"""

import io
import logging
import zipfile

from filedepot import FileDepotClient, FileDepotServerError

logging.basicConfig(level=logging.DEBUG)

with FileDepotClient.from_config() as client:
    first = client.upload_file(b"Hello, File Depot!", "hello.txt", "text/plain")
    second = client.upload_file(b"Second file", "second.txt", "text/plain")
    print(f"Uploaded: {first.id} ({first.size} bytes), {second.id}")

    metadata = client.get_file_metadata(first.id, with_content=True)
    print(f"Metadata: {metadata.file_name}, content={metadata.content!r}")

    for chunk in client.get_chunks(first.id):
        print(f"Chunk {chunk.index}: {chunk.content!r}")

    print(f"Download URL: {client.get_download_url(first.id).download_url}")
    print(f"Content: {client.download_file(first.id)!r}")

    archive = zipfile.ZipFile(io.BytesIO(client.download_batch([first.id, second.id])))
    print(f"Batch archive: {archive.namelist()}")

    client.delete_files([first.id, second.id])
    try:
        client.get_file_metadata(first.id)
    except FileDepotServerError as e:
        print(f"Deleted: {e}")
