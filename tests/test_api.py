from __future__ import annotations

import shutil

import pytest
from fastapi.testclient import TestClient

from api import create_app
from core.templates.repository import InMemoryTemplateRepository
from tests.conftest import png_bytes


@pytest.fixture
def repository():
    return InMemoryTemplateRepository()


@pytest.fixture
def client(settings, repository):
    return TestClient(create_app(settings, repository=repository))


def _images(count: int):
    return [("images", (f"img {i}.png", png_bytes(6, 4, (i * 40, 100, 200)), "image/png")) for i in range(count)]


def _create(client, name="Comic", count=5):
    return client.post("/api/templates", data={"name": name}, files=_images(count))


def test_health_and_index(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").status_code == 200


def test_index_serves_front_end_when_present(settings, client):
    (settings.storage.static_dir / "index.html").write_text("<html>hi</html>")

    response = client.get("/")

    assert response.status_code == 200
    assert "hi" in response.text


def test_create_and_list_templates(client, repository, settings):
    response = _create(client)

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Comic"
    assert body["imageCount"] == 5
    assert body["styleData"]["colorCount"] == 5 * 24
    assert body["thumbnailUrl"] == f"/outputs/thumbnail-{body['_id']}.jpg"
    assert len(repository) == 1
    assert client.get("/api/templates").json() == [body]
    assert client.get(body["thumbnailUrl"]).status_code == 200
    assert len(list(settings.storage.upload_dir.iterdir())) == 5


@pytest.mark.parametrize("name, count", [("Comic", 4), ("", 5)])
def test_create_template_requires_name_and_five_images(client, name, count):
    response = _create(client, name=name, count=count)

    assert response.status_code == 400
    assert "error" in response.json()


def test_create_template_rejects_too_many_images(client):
    response = _create(client, count=11)

    assert response.status_code == 400


def test_upload_size_limit(settings, repository):
    settings.max_upload_bytes = 10
    client = TestClient(create_app(settings, repository=repository))

    response = _create(client)

    assert response.status_code == 413
    assert list(settings.storage.upload_dir.iterdir()) == []


def test_delete_template(client, settings):
    template_id = _create(client).json()["_id"]

    assert client.delete(f"/api/templates/{template_id}").json() == {"success": True}
    assert client.get("/api/templates").json() == []
    assert not (settings.storage.models_dir / template_id).exists()
    assert client.delete(f"/api/templates/{template_id}").status_code == 404


def test_convert_both(client, settings):
    template_id = _create(client).json()["_id"]

    response = client.post(
        "/api/convert",
        data={"templateId": template_id, "generateOutline": "true", "generateColored": "true"},
        files={"photo": ("me.png", png_bytes(8, 8, (200, 100, 50)), "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["outline"].startswith("/outputs/outline-") and body["outline"].endswith(".jpg")
    assert body["colored"].startswith("/outputs/colored-")
    assert client.get(body["outline"]).status_code == 200
    assert (settings.storage.output_dir / body["colored"].rsplit("/", 1)[1]).exists()


def test_convert_only_true_flags_count(client):
    template_id = _create(client).json()["_id"]

    response = client.post(
        "/api/convert",
        data={"templateId": template_id, "generateOutline": "yes", "generateColored": "true"},
        files={"photo": ("me.png", png_bytes(4, 4, (0, 0, 0)), "image/png")},
    )

    assert set(response.json()) == {"colored"}


def test_convert_validation(client):
    photo = {"photo": ("me.png", png_bytes(4, 4, (0, 0, 0)), "image/png")}

    assert client.post("/api/convert", data={"generateOutline": "true"}, files=photo).status_code == 400
    assert client.post("/api/convert", data={"templateId": "123"}).status_code == 400
    assert client.post("/api/convert", data={"templateId": "123"}, files=photo).status_code == 404


def test_convert_undecodable_photo(client):
    template_id = _create(client).json()["_id"]

    response = client.post(
        "/api/convert",
        data={"templateId": template_id, "generateOutline": "true"},
        files={"photo": ("me.png", b"garbage", "image/png")},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "conversion failed"}


def test_safe_filename():
    from api.uploads import safe_filename

    assert safe_filename("../../etc/passwd") == "passwd"
    assert safe_filename("C:\\photos\\my pic.jpg") == "my_pic.jpg"
    assert safe_filename(None) == "upload"


def test_unexpected_failures_return_json(settings, repository):
    client = TestClient(create_app(settings, repository=repository), raise_server_exceptions=False)
    shutil.rmtree(settings.storage.models_dir)
    settings.storage.models_dir.write_text("not a directory")

    response = _create(client)

    assert response.status_code == 500
    assert response.json() == {"error": "server error"}
