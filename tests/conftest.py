"""Shared fixtures: storage backends over a temp directory and a fake S3 client."""

from pathlib import Path

import pytest
from botocore.exceptions import ClientError

from config import StorageConfig
from contacts_api.storage import LocalDiskBackend, ObjectStoreBackend

CDN_URL = "https://cdn.example.com/photos/"
BUCKET = "contacts-photos"


class FakeS3Client:
    """In-memory stand-in for the parts of the boto3 S3 client we use."""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.calls: list[tuple[str, str]] = []
        self.staged_paths: list[Path] = []
        self.fail_upload = False
        self.fail_delete = False

    def upload_fileobj(self, fileobj, bucket, key, ExtraArgs=None):
        self.calls.append(("upload", key))
        self.staged_paths.append(Path(fileobj.name))
        assert Path(fileobj.name).exists()
        if self.fail_upload:
            raise ClientError(
                {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
                "PutObject",
            )
        self.objects[(bucket, key)] = fileobj.read()

    def delete_object(self, Bucket, Key):
        self.calls.append(("delete", Key))
        if self.fail_delete:
            raise ClientError(
                {"Error": {"Code": "InternalError", "Message": "We encountered an internal error"}},
                "DeleteObject",
            )
        # S3 answers 204 whether or not the key existed
        self.objects.pop((Bucket, Key), None)
        return {}


@pytest.fixture
def fake_s3():
    return FakeS3Client()


@pytest.fixture
def local_config(tmp_path):
    return StorageConfig(backend="local", local_root=tmp_path / "uploads")


@pytest.fixture
def s3_config(tmp_path):
    return StorageConfig(
        backend="s3",
        bucket_name=BUCKET,
        region="us-east-1",
        cdn_url=CDN_URL,
        temp_dir=tmp_path / "staging",
    )


@pytest.fixture
def local_backend(local_config):
    return LocalDiskBackend(local_config)


@pytest.fixture
def s3_backend(s3_config, fake_s3):
    return ObjectStoreBackend(s3_config, client=fake_s3)


@pytest.fixture(params=["local", "s3"])
def backend(request):
    """Each storage backend in turn."""
    if request.param == "local":
        return request.getfixturevalue("local_backend")
    return request.getfixturevalue("s3_backend")
