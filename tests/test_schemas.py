"""Tests for the domain schemas."""

from datetime import date
from pathlib import Path

import pytest

from schemas import (
    ArtifactStatus,
    CompleteUpload,
    DistributionOutcome,
    Edition,
    MergedDocument,
    PageArtifact,
    RunResult,
    UploadTarget,
)


class TestEdition:
    """Tests for the Edition domain object."""

    def test_date_str_is_iso(self, edition):
        """date_str renders the publication date as YYYY-MM-DD."""
        assert edition.date_str == "2026-01-15"

    def test_viewer_url_points_at_first_page(self, edition):
        """viewer_url is {base}/{date}/1."""
        assert edition.viewer_url == "https://epaper.example.com/viewer/2026-01-15/1"

    def test_viewer_url_strips_trailing_slash(self):
        """A trailing slash on the base URL is not doubled."""
        edition = Edition(date=date(2026, 3, 2), base_url="https://epaper.example.com/")

        assert edition.viewer_url == "https://epaper.example.com/2026-03-02/1"

    def test_page_count_starts_unknown(self, edition):
        """A new edition has no page count."""
        assert edition.total_pages is None

    def test_with_page_count_returns_copy(self, edition):
        """with_page_count leaves the original untouched."""
        counted = edition.with_page_count(12)

        assert counted.total_pages == 12
        assert edition.total_pages is None
        assert counted.date == edition.date

    def test_with_page_count_is_idempotent(self, edition):
        """Setting the same count twice is allowed."""
        counted = edition.with_page_count(12)

        assert counted.with_page_count(12).total_pages == 12

    def test_with_page_count_rejects_conflict(self, edition):
        """A second, different count is rejected."""
        counted = edition.with_page_count(12)

        with pytest.raises(ValueError, match="already has 12 pages"):
            counted.with_page_count(10)

    def test_with_page_count_rejects_negative(self, edition):
        """Negative page counts are rejected."""
        with pytest.raises(ValueError, match="negative"):
            edition.with_page_count(-1)

    def test_is_immutable(self, edition):
        """Editions cannot be modified in place."""
        with pytest.raises(AttributeError):
            edition.total_pages = 4


class TestPageArtifact:
    """Tests for the PageArtifact domain object."""

    def test_ok_constructor(self, tmp_path):
        """ok() builds an acquired artifact with payload and path."""
        artifact = PageArtifact.ok(3, b"%PDF", tmp_path / "page.pdf")

        assert artifact.status is ArtifactStatus.OK
        assert artifact.is_ok
        assert artifact.payload == b"%PDF"
        assert artifact.path == tmp_path / "page.pdf"
        assert artifact.error is None

    def test_mismatch_constructor(self):
        """mismatch() builds an artifact with no payload."""
        artifact = PageArtifact.mismatch(4, "Page mismatch: expected 4, got 3")

        assert artifact.status is ArtifactStatus.MISMATCH
        assert not artifact.is_ok
        assert artifact.payload is None
        assert "expected 4" in artifact.error

    def test_status_values(self):
        """Statuses serialize to their lowercase names."""
        assert [s.value for s in ArtifactStatus] == ["ok", "mismatch", "failed"]


class TestRunResult:
    """Tests for the RunResult domain object."""

    def _result(self, edition, requested=5):
        return RunResult(edition=edition.with_page_count(requested), requested=requested)

    def test_append_in_order(self, edition):
        """Artifacts are kept in page order."""
        result = self._result(edition)
        for i in range(1, 4):
            result.append(PageArtifact.ok(i, b"x"))

        assert [a.page_index for a in result.artifacts] == [1, 2, 3]

    def test_append_rejects_repeated_page(self, edition):
        """A page index cannot appear twice."""
        result = self._result(edition)
        result.append(PageArtifact.ok(1, b"x"))

        with pytest.raises(ValueError, match="Page 1 recorded after page 1"):
            result.append(PageArtifact.ok(1, b"x"))

    def test_append_rejects_going_backwards(self, edition):
        """Artifacts cannot be reordered by appending."""
        result = self._result(edition)
        result.append(PageArtifact.ok(2, b"x"))

        with pytest.raises(ValueError):
            result.append(PageArtifact.ok(1, b"x"))

    def test_append_rejects_page_beyond_request(self, edition):
        """No more pages than requested can be recorded."""
        result = self._result(edition, requested=2)

        with pytest.raises(ValueError, match="outside 1..2"):
            result.append(PageArtifact.ok(3, b"x"))

    def test_acquired_and_mismatched(self, edition):
        """acquired lists ok artifacts; mismatched lists skipped pages."""
        result = self._result(edition, requested=3)
        result.append(PageArtifact.ok(1, b"x"))
        result.append(PageArtifact.mismatch(2, "mismatch"))
        result.append(PageArtifact.ok(3, b"x"))

        assert [a.page_index for a in result.acquired] == [1, 3]
        assert result.mismatched == [2]
        assert not result.is_complete

    def test_is_complete(self, edition):
        """A run is complete when every requested page was acquired."""
        result = self._result(edition, requested=1)
        result.append(PageArtifact.ok(1, b"x"))

        assert result.is_complete


class TestMergedDocument:
    """Tests for the MergedDocument domain object."""

    def test_filename_before_writing(self):
        """Unwritten documents are named after the edition date."""
        document = MergedDocument(date(2026, 1, 15), b"%PDF", page_count=2)

        assert document.filename == "2026-01-15_odiya_news.pdf"

    def test_written_to_sets_path(self):
        """written_to returns a copy carrying the path."""
        document = MergedDocument(date(2026, 1, 15), b"%PDF", page_count=2)

        written = document.written_to(Path("/tmp/out/edition.pdf"))

        assert written.path == Path("/tmp/out/edition.pdf")
        assert written.filename == "edition.pdf"
        assert document.path is None


class TestDistributionOutcome:
    """Tests for the DistributionOutcome tagged result."""

    def test_success(self):
        outcome = DistributionOutcome.success("F123")

        assert outcome.is_success
        assert outcome.status == "success"
        assert outcome.remote_id == "F123"
        assert outcome.reason is None

    def test_failure(self):
        outcome = DistributionOutcome.failure("invalid_auth")

        assert not outcome.is_success
        assert outcome.status == "failure"
        assert outcome.reason == "invalid_auth"
        assert outcome.remote_id is None


class TestSlackSchemas:
    """Tests for Slack response schemas."""

    def test_upload_target_parses(self):
        target = UploadTarget.model_validate({
            "ok": True,
            "upload_url": "https://files.slack.com/upload/v1/abc",
            "file_id": "F123",
        })

        assert target.ok
        assert target.file_id == "F123"

    def test_upload_target_error_response(self):
        target = UploadTarget.model_validate({"ok": False, "error": "not_authed"})

        assert not target.ok
        assert target.error == "not_authed"
        assert target.upload_url is None

    def test_complete_upload_keeps_extra_fields(self):
        completed = CompleteUpload.model_validate({
            "ok": True,
            "files": [{"id": "F123", "title": "paper.pdf", "name": "paper.pdf"}],
            "response_metadata": {},
        })

        assert completed.files[0].id == "F123"
