import logging

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from myflix.core.errors import NotFoundError, StorageError
from myflix.services.storage_service import ImageStorage, get_storage, image_key


class BrokenClient:
    def _fail(self, **kwargs):
        raise ClientError({"Error": {"Code": "AccessDenied", "Message": "no"}}, "Op")

    list_objects_v2 = get_object = put_object = _fail


@pytest.mark.parametrize(
    "filename, key",
    [
        ("poster.png", "poster.png"),
        ("nested/dir/poster.png", "poster.png"),
        ("..\\..\\poster.png", "poster.png"),
        ("  poster.png ", "poster.png"),
    ],
)
def test_image_key_strips_directories(filename, key):
    assert image_key(filename) == key


@pytest.mark.parametrize("filename", [None, "", "uploads/", ".."])
def test_image_key_rejects_empty_names(filename):
    with pytest.raises(ValueError):
        image_key(filename)


def test_storage_errors_are_wrapped():
    storage = ImageStorage(BrokenClient(), "bucket")
    with pytest.raises(StorageError):
        storage.list_images()
    with pytest.raises(StorageError):
        storage.get_image("poster.png")


def test_missing_object_is_not_found(s3):
    with pytest.raises(NotFoundError):
        ImageStorage(s3, "bucket").get_image("missing.png")


def test_storage_failure_response(client, app):
    app.dependency_overrides[get_storage] = lambda: ImageStorage(BrokenClient(), "bucket")
    resp = client.get("/images")
    assert resp.status_code == 502
    assert resp.json() == {"detail": "Object storage request failed."}


def test_unexpected_error_hides_details(app, caplog):
    def explode():
        raise RuntimeError("connection string with password")

    app.dependency_overrides[get_storage] = explode
    with TestClient(app, raise_server_exceptions=False) as client:
        with caplog.at_level(logging.INFO, logger="myflix.access"):
            resp = client.get("/images")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error."}
    assert "password" not in resp.text

    access_lines = [r.getMessage() for r in caplog.records if r.name == "myflix.access"]
    assert any(line.startswith("GET /images 500 ") for line in access_lines)
