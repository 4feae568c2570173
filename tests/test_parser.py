"""
Tests for HAR loading and the HAR data model.
"""

import json

import pytest

from conftest import har_entry, har_file
from src.hartap.errors import EmptyInputError, MalformedInputError
from src.hartap.har import HarDocument, HarEntry, HarLoader, load_har_files, parse_har_data
from src.hartap.har.parser import expand_patterns


class TestHarLoader:
    """Test suite for HarLoader."""

    def test_load_valid_file(self, write_har):
        path = write_har(har_file([har_entry(url="https://api.example.com/api/items")]))

        document = HarLoader(path).load()

        assert isinstance(document, HarDocument)
        assert len(document.entries) == 1
        assert document.entries[0].request.url == "https://api.example.com/api/items"
        assert document.creator == {"name": "test", "version": "1.0"}

    def test_load_from_file(self, write_har):
        path = write_har(har_file([]))
        assert HarLoader.load_from_file(path).entries == ()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HarLoader(str(tmp_path / "nope.har")).load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.har"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(MalformedInputError) as exc_info:
            HarLoader(str(path)).load()

        assert "Invalid JSON" in str(exc_info.value)
        assert exc_info.value.source == str(path)
        assert str(path) in str(exc_info.value)


class TestStructureValidation:
    """Test suite for structural checks."""

    @pytest.mark.parametrize("data,message", [
        ([], "HAR file must be a JSON object"),
        ({}, 'HAR file must have a "log" property'),
        ({"log": {}}, 'HAR log must have an "entries" array'),
        ({"log": {"entries": {}}}, 'HAR log must have an "entries" array'),
        ({"log": {"entries": ["x"]}}, "HAR entry must be an object"),
        ({"log": {"entries": [{"response": {}}]}}, 'HAR entry must have a "request" object'),
        ({"log": {"entries": [{"request": {"url": "u", "method": "GET"}}]}}, 'HAR entry must have a "response" object'),
        ({"log": {"entries": [{"request": {"method": "GET"}, "response": {}}]}}, 'HAR request must have a "url" string'),
        ({"log": {"entries": [{"request": {"url": 5, "method": "GET"}, "response": {}}]}}, 'HAR request must have a "url" string'),
        ({"log": {"entries": [{"request": {"url": "u"}, "response": {}}]}}, 'HAR request must have a "method" string'),
    ])
    def test_violations(self, data, message):
        with pytest.raises(MalformedInputError) as exc_info:
            parse_har_data(data, "session.har")

        assert exc_info.value.reason == message
        assert str(exc_info.value) == f'Failed to parse HAR file "session.har": {message}'

    def test_file_violation_names_file(self, write_har):
        path = write_har({"log": {"entries": [{"request": {}}]}})

        with pytest.raises(MalformedInputError) as exc_info:
            HarLoader(path).load()

        assert path in str(exc_info.value)

    def test_minimal_entry_accepted(self):
        document = parse_har_data({"log": {"entries": [{"request": {"url": "/x", "method": "GET"}, "response": {}}]}})

        entry = document.entries[0]
        assert entry.response.status == 0
        assert entry.response_size == 0
        assert entry.request.post_data is None


class TestLoadHarFiles:
    """Test suite for load_har_files()."""

    def test_glob_patterns(self, write_har, tmp_path):
        write_har(har_file([har_entry()]), "a.har")
        write_har(har_file([har_entry(), har_entry()]), "nested/b.har")

        results = load_har_files([str(tmp_path / "**" / "*.har")])

        assert [len(doc.entries) for _, doc in results] == [1, 2]

    def test_duplicates_removed(self, write_har):
        path = write_har(har_file([har_entry()]))
        assert expand_patterns([path, path]) == [path]

    def test_no_match(self, tmp_path):
        with pytest.raises(EmptyInputError) as exc_info:
            load_har_files([str(tmp_path / "*.har")])

        assert "No HAR files found matching patterns" in str(exc_info.value)

    def test_malformed_file_aborts(self, write_har):
        good = write_har(har_file([har_entry()]), "good.har")
        bad = write_har({"log": {}}, "bad.har")

        with pytest.raises(MalformedInputError):
            load_har_files([good, bad])


class TestModels:
    """Test suite for the HAR model."""

    def test_round_trip_keeps_unknown_keys(self):
        data = har_entry(query={"page": "1"}, post_text='{"a": 1}')
        data["timings"] = {"wait": 10}
        data["request"]["_initiator"] = "script"
        data["response"]["_transferSize"] = 99

        entry = HarEntry.from_dict(data)
        result = entry.to_dict()

        assert result["timings"] == {"wait": 10}
        assert result["request"]["_initiator"] == "script"
        assert result["response"]["_transferSize"] == 99
        assert result["request"]["postData"] == {"mimeType": "application/json", "text": '{"a": 1}'}
        assert result["request"]["queryString"] == [{"name": "page", "value": "1"}]

    def test_document_to_dict(self):
        document = parse_har_data(har_file([har_entry()]))
        result = document.to_dict()

        assert result["log"]["version"] == "1.2"
        assert len(result["log"]["entries"]) == 1
        assert json.loads(json.dumps(result)) == result

    def test_non_numeric_status(self):
        data = har_entry()
        data["response"]["status"] = "n/a"

        assert HarEntry.from_dict(data).response.status == 0

    def test_entries_are_immutable(self):
        entry = HarEntry.from_dict(har_entry())
        with pytest.raises(Exception):
            entry.request.url = "changed"
