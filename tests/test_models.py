"""Tests for File Depot request and response models."""

from datetime import datetime
from typing import Any

import pytest
from pydantic import ValidationError

from filedepot import (
    BatchDownloadRequest,
    Chunk,
    CommonResponse,
    ConfirmUploadRequest,
    DownloadUrlResponse,
    StorageItem,
    UploadUrlResponse,
)


class TestCommonResponse:
    """Test the response envelope."""

    def test_success_with_typed_data(self):
        envelope = CommonResponse[UploadUrlResponse].model_validate(
            {
                "success": True,
                "message": None,
                "data": {"id": "abc", "uploadUrl": "http://x", "expirySeconds": 60},
            }
        )
        assert envelope.success is True
        assert isinstance(envelope.data, UploadUrlResponse)
        assert envelope.data.expiry_seconds == 60

    def test_failure_keeps_message_and_code(self):
        envelope = CommonResponse[Any].model_validate(
            {"success": False, "message": "File not found", "code": "F404"}
        )
        assert envelope.success is False
        assert envelope.message == "File not found"
        assert envelope.code == "F404"
        assert envelope.data is None

    def test_numeric_code_kept_as_text(self):
        envelope = CommonResponse[Any].model_validate(
            {"success": False, "message": "Storage unavailable", "code": 503}
        )
        assert envelope.code == "503"

    def test_list_payload(self):
        envelope = CommonResponse[list[Chunk]].model_validate_json(
            '{"success": true, "data": [{"index": 0, "content": "a"}]}'
        )
        assert envelope.data == [Chunk(index=0, content="a")]

    def test_success_flag_is_required(self):
        with pytest.raises(ValidationError):
            CommonResponse[Any].model_validate({"message": "hi"})


class TestStorageItem:
    """Test StorageItem model."""

    def test_from_camel_case(self):
        item = StorageItem.model_validate(
            {
                "id": "0f8e2c7a",
                "fileName": "report.pdf",
                "size": 2048,
                "contentType": "application/pdf",
                "createdAt": "2025-03-01T10:15:30",
            }
        )
        assert item.file_name == "report.pdf"
        assert item.size == 2048
        assert item.content_type == "application/pdf"
        assert item.created_at == datetime(2025, 3, 1, 10, 15, 30)

    def test_from_field_names(self):
        item = StorageItem(id="0f8e2c7a", file_name="a.txt", size=1)
        assert item.file_name == "a.txt"

    def test_keeps_unknown_server_fields(self):
        item = StorageItem.model_validate({"id": "x", "checksum": "sha256:00"})
        assert item.model_extra == {"checksum": "sha256:00"}

    def test_rejects_file_name_over_limit(self):
        with pytest.raises(ValidationError):
            StorageItem(id="x", file_name="a" * 256)

    def test_rejects_empty_id(self):
        with pytest.raises(ValidationError):
            StorageItem(id="")


class TestRequestBodies:
    """Test request body serialization."""

    def test_confirm_upload_request_uses_camel_case(self):
        body = ConfirmUploadRequest(id="abc", file_name="a.txt")
        assert body.to_dict() == {"id": "abc", "fileName": "a.txt"}

    def test_confirm_upload_request_null_file_name(self):
        assert ConfirmUploadRequest(id="abc").to_dict() == {
            "id": "abc",
            "fileName": None,
        }

    def test_batch_download_request(self):
        body = BatchDownloadRequest(ids=["a", "b"])
        assert body.to_dict() == {"ids": ["a", "b"]}

    def test_batch_download_request_requires_ids(self):
        with pytest.raises(ValidationError):
            BatchDownloadRequest(ids=[])


class TestUrlResponses:
    """Test presigned URL responses."""

    def test_upload_url_response(self):
        response = UploadUrlResponse.model_validate(
            {"id": "abc", "uploadUrl": "http://minio/abc?X-Amz-Algorithm=A"}
        )
        assert response.upload_url.endswith("X-Amz-Algorithm=A")
        assert response.expiry_seconds is None

    def test_download_url_response(self):
        response = DownloadUrlResponse.model_validate(
            {"downloadUrl": "http://minio/abc", "expirySeconds": 3600}
        )
        assert response.download_url == "http://minio/abc"
        assert response.expiry_seconds == 3600
