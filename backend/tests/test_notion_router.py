# backend/tests/test_notion_router.py

from fastapi.testclient import TestClient

from blog_cms.errors import (
    AuthorizationError,
    InputError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamNotFoundError,
)
from blog_cms.main import create_app
from blog_cms.notion.router import get_notion_import_service
from blog_cms.notion.schemas import NotionImportResponse


class DummyImportService:
    """
    /notion/import ルーター用のダミーサービス。

    呼び出し内容を記録し、固定の結果を返すか、指定の例外を投げる。
    """

    def __init__(self, error: Exception = None) -> None:
        self.calls = []
        self._error = error

    def import_from_notion(self, url, credential) -> NotionImportResponse:
        self.calls.append((url, credential))
        if self._error is not None:
            raise self._error
        return NotionImportResponse(title="Title", content="# Body")


def _create_client_with_dummy_service(service: DummyImportService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_notion_import_service] = lambda: service
    return TestClient(app)


def test_notion_import_success():
    service = DummyImportService()
    client = _create_client_with_dummy_service(service)

    resp = client.post(
        "/notion/import",
        json={"url": "https://www.notion.so/abc"},
        headers={"Authorization": "Bearer jwt"},
    )

    assert resp.status_code == 200
    assert resp.json() == {"title": "Title", "content": "# Body"}
    assert service.calls == [("https://www.notion.so/abc", "Bearer jwt")]


def test_notion_import_without_url_reaches_service():
    # url 未指定でも 422 にはせず、サービス側で 400 にする
    service = DummyImportService(error=InputError("Notion URL is required"))
    client = _create_client_with_dummy_service(service)

    resp = client.post("/notion/import", json={}, headers={"Authorization": "Bearer jwt"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Notion URL is required"
    assert service.calls == [(None, "Bearer jwt")]


def test_notion_import_error_status_mapping():
    cases = [
        (AuthorizationError("Access denied. Admin or editor role required."), 403),
        (UpstreamAuthError("Notion authentication failed.", status_code=401), 401),
        (UpstreamNotFoundError("Page not found.", status_code=404), 404),
        (UpstreamError("Notion API error: 429", status_code=429), 429),
        (UpstreamError("Unexpected Notion API response format."), 502),
    ]

    for error, expected_status in cases:
        client = _create_client_with_dummy_service(DummyImportService(error=error))
        resp = client.post("/notion/import", json={"url": "x"})

        assert resp.status_code == expected_status
        assert resp.json()["detail"] == str(error)


def test_notion_import_unexpected_error_is_500():
    client = _create_client_with_dummy_service(DummyImportService(error=ValueError("boom")))

    resp = client.post("/notion/import", json={"url": "x"})

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Unknown error occurred"


def test_cors_preflight_is_answered():
    client = _create_client_with_dummy_service(DummyImportService())

    resp = client.options(
        "/notion/import",
        headers={
            "Origin": "https://blog.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] in ("*", "https://blog.example.com")


def test_health():
    client = TestClient(create_app())

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
