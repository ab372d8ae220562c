import io

import pytest
from botocore.exceptions import ClientError
from botocore.response import StreamingBody
from fastapi.testclient import TestClient
from sqlmodel import Session

from myflix.core.config import Settings
from myflix.main import create_app
from myflix.scripts.load_movies import load_movies
from myflix.services.storage_service import ImageStorage, get_storage

INCEPTION_ID = "64ab1c2d3e4f5a6b7c8d9e0f"
ALIEN_ID = "64ab1c2d3e4f5a6b7c8d9e10"

MOVIES = [
    {
        "_id": {"$oid": INCEPTION_ID},
        "Title": "Inception",
        "Description": "A thief steals secrets through dream-sharing.",
        "Genre": {"Name": "Thriller", "Description": "Suspense and tension."},
        "Director": {
            "Name": "Christopher Nolan",
            "Bio": "British-American filmmaker.",
            "Birth": "1970",
        },
        "ImagePath": "inception.png",
        "Featured": True,
    },
    {
        "_id": ALIEN_ID,
        "Title": "Alien",
        "Description": "A crew meets a deadly lifeform.",
        "Genre": {"Name": "Horror", "Description": "Meant to frighten."},
        "Director": {"Name": "Ridley Scott", "Bio": "English filmmaker.", "Birth": "1937"},
    },
]


class FakeS3Client:
    """In-memory stand-in for the few boto3 S3 calls the gateway makes."""

    def __init__(self):
        self.objects = {}

    def list_objects_v2(self, Bucket):
        if not self.objects:
            return {"KeyCount": 0}
        return {
            "Contents": [
                {"Key": key, "Size": len(obj["Body"]), "ETag": obj["ETag"]}
                for key, obj in sorted(self.objects.items())
            ]
        }

    def put_object(self, Bucket, Key, Body, ContentType=None):
        data = Body.read()
        etag = '"%08x"' % (hash(data) & 0xFFFFFFFF)
        self.objects[Key] = {"Body": data, "ContentType": ContentType, "ETag": etag}
        return {"ETag": etag}

    def get_object(self, Bucket, Key):
        if Key not in self.objects:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "The specified key does not exist."}},
                "GetObject",
            )
        obj = self.objects[Key]
        return {
            "Body": StreamingBody(io.BytesIO(obj["Body"]), len(obj["Body"])),
            "ContentLength": len(obj["Body"]),
            "ContentType": obj["ContentType"],
        }


@pytest.fixture
def settings():
    return Settings(
        SECRET_KEY="test-secret",
        DATABASE_URL="sqlite://",
        BUCKET_NAME="test-bucket",
        _env_file=None,
    )


@pytest.fixture
def s3():
    return FakeS3Client()


@pytest.fixture
def app(settings, s3):
    app = create_app(settings)
    app.dependency_overrides[get_storage] = lambda: ImageStorage(s3, settings.BUCKET_NAME)
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client, app):
    with Session(app.state.engine) as session:
        yield session


@pytest.fixture
def movies(db):
    load_movies(db, MOVIES)
    return MOVIES


def register(client, username="alice12", password="Pass1234", email="alice@example.com", **extra):
    body = {"Username": username, "Password": password, "Email": email}
    body.update(extra)
    return client.post("/users", json=body)


def login(client, username="alice12", password="Pass1234"):
    resp = client.post("/login", json={"Username": username, "Password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    resp = register(client)
    assert resp.status_code == 201, resp.text
    return auth_headers(login(client))


@pytest.fixture
def bob(client):
    resp = register(client, username="bob12345", email="bob@example.com")
    assert resp.status_code == 201, resp.text
    return auth_headers(login(client, username="bob12345"))
