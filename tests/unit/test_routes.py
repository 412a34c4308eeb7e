import pytest
from fastapi.testclient import TestClient

from dynmedia.api.dependencies import get_catalog, get_settings
from dynmedia.config import Settings
from dynmedia.core.catalog import default_catalog_path, load_catalog
from dynmedia.main import app

MY_IMAGE = "/content/dam/sample/my image.jpg"


@pytest.fixture
def client():
    catalog = load_catalog(default_catalog_path())
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_settings] = lambda: Settings(SIZE_LIMIT_WIDTH=2000, SIZE_LIMIT_HEIGHT=2000)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_image_path(client):
    response = client.get("/api/dynamic-media/image", params={"asset": MY_IMAGE, "width": 4000, "height": 2000})
    assert response.status_code == 200
    assert response.json() == {"path": "/is/image/folder/my%20image.jpg?wid=3000&hei=1500&fit=stretch"}


def test_plain_image_path(client):
    response = client.get("/api/dynamic-media/image", params={"asset": MY_IMAGE})
    assert response.json()["path"] == "/is/image/folder/my%20image.jpg"


def test_image_path_with_crop_and_rotation(client):
    params = {"asset": MY_IMAGE, "width": 800, "height": 600, "crop": "10,20,400,300", "rotate": 90}
    response = client.get("/api/dynamic-media/image", params=params)
    assert response.json()["path"] == (
        "/is/image/folder/my%20image.jpg?crop=10,20,400,300&rotate=90&wid=800&hei=600&fit=stretch"
    )


def test_image_path_auto_crop_preset(client):
    params = {"asset": MY_IMAGE, "width": 800, "height": 600, "crop": "auto"}
    response = client.get("/api/dynamic-media/image", params=params)
    assert response.json()["path"] == "/is/image/folder/my%20image.jpg%3Alandscape"


def test_image_path_auto_crop_computed(client):
    params = {"asset": MY_IMAGE, "width": 300, "height": 300, "crop": "auto"}
    response = client.get("/api/dynamic-media/image", params=params)
    assert response.json()["path"] == (
        "/is/image/folder/my%20image.jpg?crop=1000,0,2000,2000&wid=300&hei=300&fit=stretch"
    )


def test_image_path_auto_crop_needs_original(client):
    params = {"asset": "/content/dam/sample/manual.pdf", "width": 300, "height": 300, "crop": "auto"}
    response = client.get("/api/dynamic-media/image", params=params)
    assert response.status_code == 400


@pytest.mark.parametrize(
    "params",
    [
        {"width": 800},
        {"crop": "10,20,400"},
        {"crop": "a,b,c,d", "width": 800, "height": 600},
        {"crop": "0,0,0,10", "width": 800, "height": 600},
        {"rotate": 90},
    ],
)
def test_image_path_bad_request(client, params):
    response = client.get("/api/dynamic-media/image", params={"asset": MY_IMAGE, **params})
    assert response.status_code == 400


def test_unknown_asset(client):
    response = client.get("/api/dynamic-media/image", params={"asset": "/content/dam/missing.jpg"})
    assert response.status_code == 404


def test_content_path(client):
    response = client.get("/api/dynamic-media/content", params={"asset": MY_IMAGE, "download": "true"})
    assert response.json() == {"path": "/is/content/folder/my%20image.jpg?cdh=attachment"}


def test_auto_crop(client):
    response = client.get("/api/autocrop", params={"asset": MY_IMAGE, "mediaFormats": "square,download"})
    assert response.json() == {
        "crops": [{"mediaFormat": "square", "left": 320, "top": 0, "width": 640, "height": 640}]
    }


def test_auto_crop_unknown_format(client):
    response = client.get("/api/autocrop", params={"asset": MY_IMAGE, "mediaFormats": "missing"})
    assert response.status_code == 400


def test_renditions(client):
    response = client.get("/api/renditions", params={"asset": MY_IMAGE})
    body = response.json()
    assert [item["kind"] for item in body["renditions"]] == [None, "thumbnail", "thumbnail", "web"]
    assert body["webRendition"] == "cq5dam.web.1280.1280.jpg"


def test_validate_requires_parameters(client):
    assert client.get("/api/mediaformat/validate", params={"mediaFormats": "landscape"}).status_code == 404
    assert client.get("/api/mediaformat/validate", params={"mediaRef": MY_IMAGE}).status_code == 404


def test_validate_valid(client):
    params = {"mediaFormats": "landscape", "mediaFormatsMandatory": "true", "mediaCropAuto": "true", "mediaRef": MY_IMAGE}
    response = client.get("/api/mediaformat/validate", params=params)
    assert response.json() == {"valid": True}


def test_validate_invalid_localized(client):
    params = {"mediaFormats": "landscape", "mediaRef": MY_IMAGE, "locale": "de"}
    response = client.get("/api/mediaformat/validate", params=params)
    assert response.json() == {
        "valid": False,
        "reason": "Das Asset hat keine Rendition passend zu den geforderten Medienformaten.",
        "reasonTitle": "Ungültiges Asset",
    }


def test_validate_reports_unresolved_formats(client):
    params = {
        "mediaFormats": "download,landscape",
        "mediaFormatsMandatory": "true,false",
        "mediaRef": MY_IMAGE,
    }
    body = client.get("/api/mediaformat/validate", params=params).json()
    assert body["valid"] is True
    assert body["info"] == {
        "message": "The asset does not match all optional media formats.",
        "title": "Valid asset",
        "unresolvedMediaFormats": ["Landscape 4:3"],
    }


def test_validate_unknown_format(client):
    params = {"mediaFormats": "missing", "mediaRef": MY_IMAGE}
    assert client.get("/api/mediaformat/validate", params=params).status_code == 400


def test_image_path_auto_crop_extreme_ratio(client):
    params = {"asset": MY_IMAGE, "width": 1, "height": 5000, "crop": "auto"}
    response = client.get("/api/dynamic-media/image", params=params)
    assert response.status_code == 400


def test_image_path_preset_without_sized_original(client):
    params = {"asset": "/content/dam/sample/unprocessed.tif", "width": 800, "height": 600, "crop": "auto"}
    response = client.get("/api/dynamic-media/image", params=params)
    assert response.status_code == 200
    assert response.json() == {"path": "/is/image/sample/unprocessed%3Alandscape"}


def test_image_path_no_preset_without_sized_original(client):
    params = {"asset": "/content/dam/sample/unprocessed.tif", "width": 300, "height": 300, "crop": "auto"}
    response = client.get("/api/dynamic-media/image", params=params)
    assert response.status_code == 400


def test_image_path_preset_skipped_with_rotation(client):
    params = {"asset": "/content/dam/sample/unprocessed.tif", "width": 800, "height": 600, "crop": "auto", "rotate": 90}
    response = client.get("/api/dynamic-media/image", params=params)
    assert response.status_code == 400
