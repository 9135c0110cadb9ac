"""Tests for records module."""
import json

import pytest

from incremental_search.records import extract_records, read_records


class TestReadRecords:
    def test_reads_keyed_object(self, sample_records_path):
        records = read_records(sample_records_path)
        assert [r["id"] for r in records] == ["p1", "p2", "p3", "p4"]

    def test_reads_bare_list(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps([{"id": "u1"}, {"id": "u2"}]))
        assert read_records(path) == [{"id": "u1"}, {"id": "u2"}]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_records(tmp_path / "nope.json")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            read_records(path)


class TestExtractRecords:
    def test_skips_non_objects(self):
        assert extract_records([{"id": 1}, "stray", 3, None]) == [{"id": 1}]

    def test_alternate_keys(self):
        assert extract_records({"orders": [{"orderNumber": "ORD-1"}]}) == [{"orderNumber": "ORD-1"}]

    def test_object_without_list(self):
        with pytest.raises(ValueError):
            extract_records({"products": "none"})

    def test_scalar(self):
        with pytest.raises(ValueError):
            extract_records(42)
