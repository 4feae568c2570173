"""
Tests for OpenAPI path normalization.
"""

import copy

import pytest

from conftest import CHORE_ID, FRAME_ID
from src.hartap.openapi import extract_path_parameters, normalize_openapi_paths, normalize_path


class TestNormalizePath:
    """Test suite for normalize_path()."""

    def test_nested_resources(self):
        path = f"/api/frames/{FRAME_ID}/chores/{CHORE_ID}"
        assert normalize_path(path) == "/api/frames/{frameId}/chores/{choreId}"

    @pytest.mark.parametrize("path,expected", [
        ("/api/frames/abc/lists/def/items/123", "/api/frames/{frameId}/lists/{listId}/items/{itemId}"),
        ("/api/frames/1/reward_points", "/api/frames/{frameId}/reward_points"),
        ("/api/frames/1/source_calendars/2/calendar_events/3",
         "/api/frames/{frameId}/source_calendars/{sourceCalendarId}/calendar_events/{calendarEventId}"),
        ("/api/devices/ab12/", "/api/devices/{deviceId}/"),
        ("/api/categories", "/api/categories"),
    ])
    def test_resource_table(self, path, expected):
        assert normalize_path(path) == expected

    def test_generic_uuid(self):
        assert normalize_path(f"/api/users/{FRAME_ID}/profile") == "/api/users/{id}/profile"

    def test_generic_numeric(self):
        assert normalize_path("/api/orders/12345") == "/api/orders/{id}"
        assert normalize_path("/api/orders/1234") == "/api/orders/1234"

    def test_repeated_generic_names_are_unique(self):
        assert normalize_path("/api/users/12345/posts/67890") == "/api/users/{id}/posts/{id2}"

    def test_matches_leading_id_characters_of_segment(self):
        assert normalize_path("/api/frames/abc123xyz") == "/api/frames/{frameId}xyz"
        assert normalize_path("/api/categories/default") == "/api/categories/{categoryId}ult"
        assert normalize_path("/api/orders/1234567.json") == "/api/orders/{id}.json"
        assert normalize_path("/api/v1/report-123456.csv") == "/api/v1/report-123456.csv"

    def test_idempotent(self):
        template = normalize_path(f"/api/frames/{FRAME_ID}/chores/{CHORE_ID}")
        assert normalize_path(template) == template


class TestExtractPathParameters:
    """Test suite for extract_path_parameters()."""

    def test_parameters_in_order(self):
        params = extract_path_parameters("/api/frames/{frameId}/chores/{choreId}")

        assert params == [
            {"name": "frameId", "in": "path", "required": True, "schema": {"type": "string"}},
            {"name": "choreId", "in": "path", "required": True, "schema": {"type": "string"}},
        ]

    def test_no_parameters(self):
        assert extract_path_parameters("/api/categories") == []


class TestNormalizeOpenApiPaths:
    """Test suite for normalize_openapi_paths()."""

    def test_colliding_paths_merge_methods(self):
        paths = {
            f"/api/frames/{FRAME_ID}/chores": {"get": {"responses": {"200": {"description": "OK"}}}},
            f"/api/frames/{CHORE_ID}/chores": {"post": {"responses": {"201": {"description": "Created"}}}},
        }

        result = normalize_openapi_paths(paths)

        assert list(result) == ["/api/frames/{frameId}/chores"]
        assert set(result["/api/frames/{frameId}/chores"]) == {"get", "post"}

    def test_first_operation_wins(self):
        paths = {
            "/api/lists/1": {"get": {"summary": "first", "responses": {}}},
            "/api/lists/2": {"get": {"summary": "second", "responses": {}}},
        }

        result = normalize_openapi_paths(paths)

        assert result["/api/lists/{listId}"]["get"]["summary"] == "first"

    def test_path_parameters_prepended(self):
        query = {"name": "date", "in": "query", "schema": {"type": "string"}}
        paths = {f"/api/frames/{FRAME_ID}/chores/{CHORE_ID}": {"get": {"parameters": [query], "responses": {}}}}

        result = normalize_openapi_paths(paths)

        params = result["/api/frames/{frameId}/chores/{choreId}"]["get"]["parameters"]
        assert [p["name"] for p in params] == ["frameId", "choreId", "date"]

    def test_declared_parameters_not_duplicated(self):
        existing = {"name": "frameId", "in": "path", "required": True, "schema": {"type": "integer"}}
        paths = {"/api/frames/1": {"get": {"parameters": [existing], "responses": {}}}}

        result = normalize_openapi_paths(paths)

        assert result["/api/frames/{frameId}"]["get"]["parameters"] == [existing]

    def test_every_method_gets_parameters(self):
        paths = {
            "/api/lists/1": {"get": {"responses": {}}},
            "/api/lists/2": {"delete": {"responses": {}}},
        }

        result = normalize_openapi_paths(paths)

        for method in ("get", "delete"):
            assert result["/api/lists/{listId}"][method]["parameters"][0]["name"] == "listId"

    def test_input_not_mutated(self):
        paths = {"/api/lists/1": {"get": {"responses": {}}}}
        snapshot = copy.deepcopy(paths)

        normalize_openapi_paths(paths)

        assert paths == snapshot

    def test_empty_path_items_skipped(self):
        assert normalize_openapi_paths({"/api/x": {}, "/api/y": None}) == {}
