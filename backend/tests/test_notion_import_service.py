# backend/tests/test_notion_import_service.py

import json
from typing import Any, Dict, List

import httpx
import pytest

from conftest import make_block, make_blocks_response, make_span

from blog_cms.auth.service import AccessGuard
from blog_cms.errors import (
    AuthorizationError,
    InputError,
    IntegrationNotConfiguredError,
    UpstreamNotFoundError,
)
from blog_cms.notion.client import NotionClient
from blog_cms.notion.config import NotionConfig
from blog_cms.notion.service import NotionImportService

PAGE_ID = "0123456789abcdef0123456789abcdef"
HYPHENATED = "01234567-89ab-cdef-0123-456789abcdef"
PAGE_URL = f"https://www.notion.so/my-workspace/My-Post-{PAGE_ID}?pvs=4"

CONFIG = NotionConfig(api_token="secret", base_url="https://notion.test/v1")


class StaticAuthBackend:
    def __init__(self, role=None) -> None:
        self._role = role

    def get_user_id(self, credential: str) -> str:
        return "user-1"

    def get_role(self, credential: str, user_id: str):
        return self._role


class RecordingNotionAPI:
    """
    Notion API を模した MockTransport。リクエストをすべて記録する。
    """

    def __init__(self, title_spans: List[Dict[str, Any]], block_pages: List[List[Dict[str, Any]]]) -> None:
        self.requests: List[httpx.Request] = []
        self._page = {
            "object": "page",
            "id": HYPHENATED,
            "properties": {"title": {"id": "title", "type": "title", "title": title_spans}},
        }
        self._block_pages = block_pages

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == f"/v1/pages/{HYPHENATED}":
            return httpx.Response(200, json=self._page)
        if request.url.path == f"/v1/blocks/{HYPHENATED}/children":
            index = int(request.url.params.get("start_cursor", "0"))
            next_cursor = str(index + 1) if index + 1 < len(self._block_pages) else None
            return httpx.Response(200, json=make_blocks_response(self._block_pages[index], next_cursor))
        return httpx.Response(404, text=json.dumps({"message": "not found"}))

    def source_factory(self, config):
        return NotionClient(config, transport=httpx.MockTransport(self.handler))


def _service(api: RecordingNotionAPI, role="editor") -> NotionImportService:
    return NotionImportService(
        access_guard=AccessGuard(StaticAuthBackend(role)),
        notion_config=CONFIG,
        source_factory=api.source_factory,
    )


def test_import_heading_and_paragraph():
    api = RecordingNotionAPI(
        [make_span("My Post")],
        [[make_block("heading_1", "Intro"), make_block("paragraph", "Hello world")]],
    )

    result = _service(api).import_from_notion(PAGE_URL, "Bearer token")

    assert result.title == "My Post"
    assert result.content == "# Intro\nHello world"
    assert [r.url.path for r in api.requests] == [
        f"/v1/pages/{HYPHENATED}",
        f"/v1/blocks/{HYPHENATED}/children",
    ]


def test_import_collapses_blank_paragraphs_between_headings():
    empty = make_block("paragraph", rich_text=[])
    api = RecordingNotionAPI(
        [make_span("T")],
        [[make_block("heading_1", "One"), empty, empty, empty, make_block("heading_1", "Two")]],
    )

    result = _service(api).import_from_notion(PAGE_URL, "Bearer token")

    assert result.content == "# One\n\n# Two"


def test_import_concatenates_paginated_blocks_in_order():
    api = RecordingNotionAPI(
        [],
        [
            [make_block("bulleted_list_item", "a"), make_block("bulleted_list_item", "b")],
            [make_block("bulleted_list_item", "c")],
        ],
    )

    result = _service(api).import_from_notion(PAGE_URL, "Bearer token")

    assert result.title == "Imported from Notion"
    assert result.content == "- a\n- b\n- c"
    assert len(api.requests) == 3


def test_unauthorized_caller_never_reaches_notion():
    api = RecordingNotionAPI([make_span("T")], [[make_block("paragraph", "x")]])

    with pytest.raises(AuthorizationError):
        _service(api, role=None).import_from_notion(PAGE_URL, "Bearer token")

    assert api.requests == []


def test_missing_credential_never_reaches_notion():
    api = RecordingNotionAPI([], [[]])

    with pytest.raises(AuthorizationError):
        _service(api).import_from_notion(PAGE_URL, None)

    assert api.requests == []


@pytest.mark.parametrize("url", [None, "", "  "])
def test_missing_url_is_input_error(url):
    api = RecordingNotionAPI([], [[]])

    with pytest.raises(InputError, match="Notion URL is required"):
        _service(api).import_from_notion(url, "Bearer token")

    assert api.requests == []


def test_unresolvable_url_is_input_error():
    api = RecordingNotionAPI([], [[]])

    with pytest.raises(InputError) as excinfo:
        _service(api).import_from_notion("https://www.notion.so/Just-A-Title", "Bearer token")

    assert excinfo.value.http_status == 400
    assert api.requests == []


def test_missing_notion_token_is_reported_before_requests():
    service = NotionImportService(
        access_guard=AccessGuard(StaticAuthBackend("admin")),
        notion_config=NotionConfig(api_token=""),
    )

    with pytest.raises(IntegrationNotConfiguredError):
        service.import_from_notion(PAGE_URL, "Bearer token")


def test_page_not_found_returns_no_partial_result():
    other_url = "https://www.notion.so/ffffffffffffffffffffffffffffffff"
    api = RecordingNotionAPI([make_span("T")], [[make_block("paragraph", "x")]])

    with pytest.raises(UpstreamNotFoundError):
        _service(api).import_from_notion(other_url, "Bearer token")

    assert len(api.requests) == 1
