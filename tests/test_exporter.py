"""Unit tests for exporter utilities."""

import json
from datetime import datetime

import pytest

from sitelens.core.exporter import result_filename, save_json
from sitelens.models.result import ErrorCategory, ScrapeResult


@pytest.fixture
def result() -> ScrapeResult:
    return ScrapeResult(
        url="https://www.acme.example/about",
        success=True,
        brand_name="Acme",
        description="Acme makes rockets.",
        raw_description="acme makes rockets",
        enhanced=True,
        scraped_at=datetime(2024, 1, 2, 3, 4, 5),
        duration_ms=1234.5,
    )


class TestSaveJson:
    """Test writing results to disk."""

    def test_save_creates_parent_dirs(self, tmp_path, result):
        """Missing parent directories are created."""
        path = save_json(result, tmp_path / "nested" / "out.json")
        assert path.exists()

    def test_saved_file_is_valid_json(self, tmp_path, result):
        """Written file parses back to the result fields."""
        path = save_json(result, tmp_path / "out.json")
        parsed = json.loads(path.read_text(encoding="utf-8"))
        assert parsed["brand_name"] == "Acme"
        assert parsed["success"] is True
        assert ScrapeResult.model_validate(parsed) == result

    def test_failure_serializes_category(self, tmp_path):
        """Error category is written as its string value."""
        failed = ScrapeResult.failure("https://x.invalid", ErrorCategory.DOMAIN_NOT_FOUND, "raw")
        path = save_json(failed, tmp_path / "failed.json")
        parsed = json.loads(path.read_text(encoding="utf-8"))
        assert parsed["error_category"] == "DOMAIN_NOT_FOUND"
        assert parsed["brand_name"] is None


class TestResultFilename:
    """File naming."""

    def test_uses_host_without_www(self, result):
        """Host drives the name and a leading www. is dropped."""
        assert result_filename(result) == "acme.example.json"
