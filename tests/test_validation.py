"""Tests for argument validation helpers."""

import pytest

from filedepot.validation import (
    require_max_length,
    require_non_blank,
    require_non_empty_ids,
)


class TestRequireNonBlank:
    """Test require_non_blank."""

    @pytest.mark.parametrize("value", ["a", " x ", "0f8e2c7a-3b5d"])
    def test_accepts_non_blank(self, value):
        require_non_blank(value, "id")

    @pytest.mark.parametrize("value", [None, "", " ", "\n\t "])
    def test_rejects_blank(self, value):
        with pytest.raises(ValueError, match="^id must not be null or blank$"):
            require_non_blank(value, "id")

    def test_rejects_non_string(self):
        with pytest.raises(ValueError):
            require_non_blank(123, "id")


class TestRequireMaxLength:
    """Test require_max_length."""

    def test_none_is_allowed(self):
        require_max_length(None, 255, "fileName")

    def test_at_limit(self):
        require_max_length("a" * 255, 255, "fileName")

    def test_over_limit(self):
        with pytest.raises(
            ValueError, match="^fileName must not exceed 255 characters$"
        ):
            require_max_length("a" * 256, 255, "fileName")


class TestRequireNonEmptyIds:
    """Test require_non_empty_ids."""

    def test_accepts_ids(self):
        require_non_empty_ids(["a", "b"], "ids")

    def test_accepts_tuple(self):
        require_non_empty_ids(("a",), "ids")

    @pytest.mark.parametrize("ids", [None, [], ()])
    def test_rejects_empty(self, ids):
        with pytest.raises(ValueError, match="^ids must not be null or empty$"):
            require_non_empty_ids(ids, "ids")

    def test_rejects_bare_string(self):
        with pytest.raises(ValueError, match="must not be null or empty"):
            require_non_empty_ids("abc", "ids")

    @pytest.mark.parametrize(
        ("ids", "index"),
        [
            ([" "], 0),
            (["a", None], 1),
            (["a", "b", ""], 2),
        ],
    )
    def test_reports_index_of_blank_element(self, ids, index):
        with pytest.raises(ValueError, match=rf"^ids\[{index}\] must not be null"):
            require_non_empty_ids(ids, "ids")
