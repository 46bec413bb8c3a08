"""Tests for the HTTP interface."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from managed_git.domain.exceptions import CapabilityNotImplementedError
from managed_git.infrastructure.config import EnvironmentVault
from managed_git.interface.app import create_app
from managed_git.interface.dependencies import get_transport, get_vault

_ENV = {"CORP_HOST": "gitlab.example.com", "CORP_USER": "bot", "CORP_TOKEN": "glpat-secret"}


def _upstream(request: httpx.Request) -> httpx.Response:
    path = request.url.raw_path.decode()
    if path == "/repos/acme/widget/tags":
        return httpx.Response(200, json=[{"name": "v1.1"}, {"name": "v1.0"}])
    if path == "/repos/acme/empty/tags":
        return httpx.Response(200, json=[])
    if path == "/api/v4/groups?top_level_only=true":
        return httpx.Response(200, json=[{"name": "platform"}, {"name": "tools"}])
    if path == "/api/v4/projects/platform%2Fapi/repository/tags":
        return httpx.Response(200, json=[{"name": "v3"}])
    if path.startswith("/api/v4/projects/platform%2Fapi/repository/files/package.json/raw"):
        return httpx.Response(200, text='{"version": "3.0.0"}')
    if path.startswith("/api/v4/projects/platform%2Fapi/repository/files/broken.json/raw"):
        return httpx.Response(200, text="{")
    if path.startswith("/api/v4/projects/platform%2Fapi/repository/files/README.md/raw"):
        return httpx.Response(200, text="# API")
    if path.startswith("/api/v4/projects/platform%2Fapi/repository/files/logo.png/raw"):
        return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})
    return httpx.Response(404, json={"message": "404 Not Found"})


@pytest.fixture
def client(serve) -> TestClient:  # type: ignore[no-untyped-def]
    server = serve(_upstream)
    app = create_app()
    app.dependency_overrides[get_transport] = server.transport
    app.dependency_overrides[get_vault] = lambda: EnvironmentVault(_ENV)
    return TestClient(app)


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_github_tags(client: TestClient) -> None:
    response = client.get("/github/acme/widget/tags")
    assert response.status_code == 200
    assert response.json() == {"tags": ["v1.1", "v1.0"]}


def test_github_latest_tag(client: TestClient) -> None:
    assert client.get("/github/acme/widget/tags/latest").json() == {"tag": "v1.1"}


def test_github_latest_tag_absent(client: TestClient) -> None:
    response = client.get("/github/acme/empty/tags/latest")
    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "No tags for acme/empty."}


def test_error_envelope_is_documented(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()

    assert "ErrorResponse" in schema["components"]["schemas"]
    not_found = schema["paths"]["/github/{org}/{repo}/tags/latest"]["get"]["responses"]["404"]
    assert not_found["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")


def test_github_tags_fetch_failure(client: TestClient) -> None:
    assert client.get("/github/acme/missing/tags").status_code == 404


def test_gitlab_groups(client: TestClient) -> None:
    body = client.get("/gitlab/CORP/groups").json()

    assert body["state"] == "populated"
    assert [group["name"] for group in body["components"]] == ["platform", "tools"]
    assert body["components"][0]["is_top_level"] is True


def test_gitlab_unknown_host(client: TestClient) -> None:
    response = client.get("/gitlab/NOPE/groups")
    assert response.status_code == 404
    assert "NOPE_TOKEN" in response.json()["message"]


def test_gitlab_tags(client: TestClient) -> None:
    response = client.get("/gitlab/CORP/tags", params={"group": "platform", "repo": "api"})
    assert response.json() == {"tags": ["v3"]}


def test_gitlab_latest_tag(client: TestClient) -> None:
    response = client.get("/gitlab/CORP/tags/latest", params={"group": "platform", "repo": "api"})
    assert response.json() == {"tag": "v3"}


def test_gitlab_tags_requires_query(client: TestClient) -> None:
    response = client.get("/gitlab/CORP/tags", params={"group": "platform"})
    assert response.status_code == 422


@pytest.mark.parametrize(
    ("path", "kind", "content"),
    [
        ("README.md", "text", "# API"),
        ("package.json", "json", {"version": "3.0.0"}),
    ],
)
def test_gitlab_content(client: TestClient, path: str, kind: str, content: object) -> None:
    response = client.get(
        "/gitlab/CORP/content", params={"group": "platform", "repo": "api", "path": path}
    )
    assert response.status_code == 200
    assert response.json() == {"path": path, "kind": kind, "content": content}


def test_gitlab_content_unclassifiable(client: TestClient) -> None:
    response = client.get(
        "/gitlab/CORP/content", params={"group": "platform", "repo": "api", "path": "logo.png"}
    )
    assert response.status_code == 404


def test_gitlab_content_invalid_json(client: TestClient) -> None:
    response = client.get(
        "/gitlab/CORP/content", params={"group": "platform", "repo": "api", "path": "broken.json"}
    )
    assert response.status_code == 422


def test_github_content_not_implemented() -> None:
    # GitHub content has no route; the capability error maps to 501 when raised
    app = create_app()

    @app.get("/unimplemented")
    async def unimplemented() -> None:
        raise CapabilityNotImplementedError("GitHub", "content")

    response = TestClient(app).get("/unimplemented")
    assert response.status_code == 501
