"""
Tests for HAR to OpenAPI conversion.
"""

import json

import pytest

from conftest import FRAME_ID, OTHER_FRAME_ID, make_document, make_entry
from src.hartap.openapi import convert_har_to_openapi, generate_tag_from_path


@pytest.fixture
def chores_document(chores_response):
    return make_document(
        make_entry(
            url=f"https://app.example.com/api/frames/{FRAME_ID}/chores?date=2024-03-15",
            query={"date": "2024-03-15"},
            request_headers={
                "Accept": "application/json",
                "Authorization": "Bearer x",
                "X-Client-Version": "4.2",
            },
            response_body=chores_response,
        ),
        make_entry(
            url=f"https://app.example.com/api/frames/{OTHER_FRAME_ID}/chores?date=2024-03-16",
            query={"date": "2024-03-16", "view": "week"},
            response_body={"data": []},
        ),
    )


class TestConvertHarToOpenApi:
    """Test suite for convert_har_to_openapi()."""

    def test_document_skeleton(self, chores_document):
        spec = convert_har_to_openapi(chores_document, title="Chores", version="2.0.0")

        assert spec["openapi"] == "3.0.3"
        assert spec["info"] == {"title": "Chores", "version": "2.0.0"}
        assert spec["servers"] == [{"url": "https://app.example.com"}]

    def test_paths_are_templated_and_merged(self, chores_document):
        spec = convert_har_to_openapi(chores_document)

        assert list(spec["paths"]) == ["/api/frames/{frameId}/chores"]
        operation = spec["paths"]["/api/frames/{frameId}/chores"]["get"]
        assert operation["tags"] == ["Chores"]

    def test_parameters(self, chores_document):
        spec = convert_har_to_openapi(chores_document)
        params = spec["paths"]["/api/frames/{frameId}/chores"]["get"]["parameters"]

        assert [(p["name"], p["in"]) for p in params] == [
            ("frameId", "path"),
            ("date", "query"),
            ("X-Client-Version", "header"),
        ]
        assert params[1]["example"] == "2024-03-15"
        assert params[1]["required"] is False

    def test_normalization_can_be_disabled(self, chores_document):
        spec = convert_har_to_openapi(chores_document, normalize_paths=False)

        assert set(spec["paths"]) == {
            f"/api/frames/{FRAME_ID}/chores",
            f"/api/frames/{OTHER_FRAME_ID}/chores",
        }
        second = spec["paths"][f"/api/frames/{OTHER_FRAME_ID}/chores"]["get"]
        assert [p["name"] for p in second["parameters"]] == ["date", "view"]

    def test_response_schema_and_example(self, chores_document, chores_response):
        spec = convert_har_to_openapi(chores_document)
        response = spec["paths"]["/api/frames/{frameId}/chores"]["get"]["responses"]["200"]

        assert response["description"] == "OK"
        media = response["content"]["application/json"]
        assert media["example"] == chores_response
        assert media["schema"]["type"] == "object"
        assert media["schema"]["properties"]["data"]["type"] == "array"
        assert "included" in media["schema"]["properties"]

    def test_jsonapi_component_schemas(self, chores_document):
        spec = convert_har_to_openapi(chores_document)
        schemas = spec["components"]["schemas"]

        assert list(schemas) == ["CategoryResource", "ChoreResource"]
        chore = schemas["ChoreResource"]
        assert chore["description"] == "JSON:API resource object"
        assert chore["required"] == ["type", "id"]
        assert chore["properties"]["attributes"]["properties"]["color"]["pattern"] == "^#?[0-9A-Fa-f]{6}$"
        assert chore["properties"]["attributes"]["properties"]["due_on"]["format"] == "date"

    def test_no_components_without_resources(self):
        spec = convert_har_to_openapi(make_document(make_entry(response_body={"ok": True})))
        assert "components" not in spec

    def test_paths_without_success_dropped(self):
        document = make_document(
            make_entry(url="https://x.com/api/broken", status=500, response_body={"error": "x"}),
            make_entry(url="https://x.com/api/ok", status=200, response_body={}),
        )

        spec = convert_har_to_openapi(document)

        assert list(spec["paths"]) == ["/api/ok"]

    def test_responses_per_status(self):
        document = make_document(
            make_entry(url="https://x.com/api/items", status=200, response_body=[{"id": 1}]),
            make_entry(url="https://x.com/api/items", status=304),
            make_entry(url="https://x.com/api/items", status=404, response_body={"error": "gone"}),
        )

        responses = convert_har_to_openapi(document)["paths"]["/api/items"]["get"]["responses"]

        assert list(responses) == ["200", "304", "404"]
        assert responses["304"] == {"description": "Not Modified"}
        assert responses["404"]["content"]["application/json"]["schema"]["properties"]["error"]["type"] == "string"

    def test_request_body_merged(self):
        document = make_document(
            make_entry(method="POST", url="https://x.com/api/lists", status=201,
                       post_text=json.dumps({"title": "a"}), response_body={}),
            make_entry(method="POST", url="https://x.com/api/lists", status=201,
                       post_text=json.dumps({"title": "b", "notes": None}), response_body={}),
        )

        operation = convert_har_to_openapi(document)["paths"]["/api/lists"]["post"]
        body = operation["requestBody"]["content"]["application/json"]

        assert operation["requestBody"]["required"] is True
        assert set(body["schema"]["properties"]) == {"title", "notes"}
        assert body["schema"]["required"] == ["title"]
        assert body["example"] == {"title": "a"}
        assert operation["responses"]["201"]["description"] == "Created"

    def test_form_request_body(self):
        entry = make_entry(
            method="POST", url="https://x.com/api/login", post_text="user=a",
            post_mime="application/x-www-form-urlencoded",
            post_params=[{"name": "user", "value": "a"}], response_body={},
        )

        body = convert_har_to_openapi(make_document(entry))["paths"]["/api/login"]["post"]["requestBody"]

        form = body["content"]["application/x-www-form-urlencoded"]
        assert form["schema"]["properties"] == {"user": {"type": "string"}}
        assert form["example"] == {"user": "a"}

    def test_raw_request_body(self):
        entry = make_entry(method="PUT", url="https://x.com/api/notes", post_text="hello",
                           post_mime="text/plain; charset=utf-8", response_body={})

        body = convert_har_to_openapi(make_document(entry))["paths"]["/api/notes"]["put"]["requestBody"]

        assert body["content"]["text/plain"] == {"schema": {"type": "string"}, "example": "hello"}

    def test_get_has_no_request_body(self):
        entry = make_entry(url="https://x.com/api/items", post_text='{"a": 1}', response_body={})
        operation = convert_har_to_openapi(make_document(entry))["paths"]["/api/items"]["get"]
        assert "requestBody" not in operation

    def test_json_detected_under_other_media_type(self):
        entry = make_entry(url="https://x.com/api/status", response_body='{"ok": true}', response_mime="text/html")

        response = convert_har_to_openapi(make_document(entry))["paths"]["/api/status"]["get"]["responses"]["200"]

        assert response["content"]["application/json"]["example"] == {"ok": True}

    def test_non_json_response(self):
        entry = make_entry(url="https://x.com/page", response_body="<html></html>", response_mime="text/html; charset=utf-8")

        response = convert_har_to_openapi(make_document(entry))["paths"]["/page"]["get"]["responses"]["200"]

        assert response["content"] == {"text/html": {"schema": {"type": "string"}}}

    def test_one_operation_per_method(self):
        document = make_document(
            make_entry(method="GET", url="https://x.com/api/lists/12ab", response_body={}),
            make_entry(method="DELETE", url="https://x.com/api/lists/34cd", status=204),
        )

        path_item = convert_har_to_openapi(document)["paths"]["/api/lists/{listId}"]

        assert set(path_item) == {"get", "delete"}
        assert path_item["delete"]["parameters"][0]["name"] == "listId"


class TestGenerateTag:
    """Test suite for generate_tag_from_path()."""

    @pytest.mark.parametrize("path,tag", [
        ("/api/frames/{frameId}/chores", "Chores"),
        ("/api/frames/{frameId}/reward_points", "Reward Points"),
        ("/api/frames/{frameId}", "Frames"),
        ("/api/frames/{frameId}/", "Frames"),
        ("/api/categories", "Categories"),
        ("/api/calendar_events/{calendarEventId}", "Calendar Events"),
        ("/health", None),
    ])
    def test_tags(self, path, tag):
        assert generate_tag_from_path(path) == tag
