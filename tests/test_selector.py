# ==============================================
# Tests for Storage Selector
# ==============================================
#
# class TestSelectStore:
#     one test per selection rule plus precedence between them
#
# class TestSelectStoreForBatch:
#     data majority, single media category, mixed, empty
# ==============================================

import pytest

from dualstore.analysis.decision import StorageBackend
from dualstore.models import FileDescriptor
from dualstore.storage.selector import explain_store, select_store, select_store_for_batch

MB = 1024 * 1024


class TestSelectStore:
    def test_json_with_uniform_content(self, uniform_rows):
        file = FileDescriptor("users.json", 120, "application/json", uniform_rows)
        assert select_store(file) is StorageBackend.RELATIONAL

    def test_json_with_divergent_content(self, divergent_rows):
        file = FileDescriptor("events.json", 120, "application/json", divergent_rows)
        assert select_store(file) is StorageBackend.DOCUMENT

    def test_json_content_wins_over_size(self, uniform_rows):
        """The analysis runs first even for large payloads."""
        file = FileDescriptor("big.json", 5 * MB, "application/json", uniform_rows)
        assert select_store(file) is StorageBackend.RELATIONAL

    def test_uppercase_json_extension(self, uniform_rows):
        file = FileDescriptor("USERS.JSON", 120, "application/json", uniform_rows)
        assert select_store(file) is StorageBackend.RELATIONAL

    def test_large_json_mime_without_parsed_content(self):
        file = FileDescriptor("export.txt", 2 * MB, "application/json")
        assert select_store(file) is StorageBackend.DOCUMENT

    def test_small_json_mime_falls_through(self):
        file = FileDescriptor("export.txt", 100, "application/json")
        assert select_store(file) is StorageBackend.RELATIONAL

    def test_large_json_threshold_is_configurable(self):
        file = FileDescriptor("export.txt", 2048, "application/json")
        assert select_store(file, large_json_bytes=1024) is StorageBackend.DOCUMENT

    def test_deep_metadata_on_non_json_file(self):
        file = FileDescriptor("notes.txt", 10, "text/plain", {"a": {"b": {"c": {"d": 1}}}})
        assert select_store(file) is StorageBackend.DOCUMENT

    def test_depth_three_metadata_is_not_deep(self):
        file = FileDescriptor("notes.txt", 10, "text/plain", {"a": {"b": {"c": 1}}})
        assert select_store(file) is StorageBackend.RELATIONAL

    def test_data_category(self):
        file = FileDescriptor("data.xml", 500, "application/xml")
        assert select_store(file) is StorageBackend.DOCUMENT

    def test_json_without_content_is_data(self):
        file = FileDescriptor("data.json", 500, "application/json")
        assert select_store(file) is StorageBackend.DOCUMENT

    @pytest.mark.parametrize("name", ["photo.jpg", "PHOTO.JPG", "clip.mp4", "song.flac"])
    def test_media(self, name):
        assert select_store(FileDescriptor(name, 2 * MB, "")) is StorageBackend.RELATIONAL

    def test_photo_example(self):
        file = FileDescriptor("photo.jpg", 500000, "image/jpeg")
        assert select_store(file) is StorageBackend.RELATIONAL

    @pytest.mark.parametrize("name", ["report.pdf", "archive.zip", "README", ".env", "file."])
    def test_everything_else(self, name):
        assert select_store(FileDescriptor(name)) is StorageBackend.RELATIONAL

    def test_accepts_mapping(self, divergent_rows):
        file = {"filename": "e.json", "sizeBytes": 10, "mimeType": "application/json", "content": divergent_rows}
        assert select_store(file) is StorageBackend.DOCUMENT

    def test_result_compares_to_string(self):
        assert select_store({"filename": "photo.png"}) == "relational"

    def test_log_analysis_prints_summary(self, uniform_rows, capsys):
        select_store(FileDescriptor("u.json", 10, "application/json", uniform_rows), log_analysis=True)
        out = capsys.readouterr().out
        assert "📊 JSON Structure Analysis" in out
        assert "Recommendation: RELATIONAL" in out

    def test_no_log_for_non_json(self, capsys):
        select_store(FileDescriptor("photo.jpg"), log_analysis=True)
        assert capsys.readouterr().out == ""

    def test_explain_store_returns_analysis(self, uniform_rows):
        backend, analysis = explain_store(FileDescriptor("u.json", content=uniform_rows))
        assert backend is analysis.recommended_storage
        assert analysis.schema_consistency == pytest.approx(100.0)

        backend, analysis = explain_store(FileDescriptor("photo.jpg"))
        assert analysis is None


class TestSelectStoreForBatch:
    def test_data_majority(self):
        names = ["a.json", "b.json", "c.xml", "d.yaml", "e.png", "f.pdf"]
        files = [{"filename": n} for n in names]
        assert select_store_for_batch(files) is StorageBackend.DOCUMENT

    def test_exactly_half_data_is_not_a_majority(self):
        files = [{"filename": n} for n in ["a.json", "b.xml", "c.png", "d.pdf"]]
        assert select_store_for_batch(files) is StorageBackend.RELATIONAL

    def test_single_media_category(self):
        files = [FileDescriptor(n) for n in ["a.jpg", "b.png", "c.gif"]]
        assert select_store_for_batch(files) is StorageBackend.RELATIONAL

    def test_mixed(self):
        files = [FileDescriptor(n) for n in ["a.jpg", "b.mp3", "c.zip"]]
        assert select_store_for_batch(files) is StorageBackend.RELATIONAL

    def test_single_data_file(self):
        assert select_store_for_batch([FileDescriptor("a.sql")]) is StorageBackend.DOCUMENT

    def test_empty_batch(self):
        assert select_store_for_batch([]) is StorageBackend.RELATIONAL
