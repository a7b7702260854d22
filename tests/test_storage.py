from __future__ import annotations

import io

import pytest

from ledgerdocs.storage import s3_storage
from ledgerdocs.styling.common.logo import LogoEmbedded, load_logo
from ledgerdocs.models import Party

from helpers import png_bytes


class FakeS3:
    def __init__(self, objects):
        self.objects = objects
        self.calls = []

    def get_object(self, Bucket, Key):
        self.calls.append((Bucket, Key))
        return {"Body": io.BytesIO(self.objects[Key])}


class FakeSession:
    created = []

    def __init__(self, profile_name=None):
        self.profile_name = profile_name
        FakeSession.created.append(self)

    def client(self, service, region_name=None, config=None):
        assert service == "s3"
        self.region_name = region_name
        self.fake = FakeS3({"logos/acme.png": png_bytes(30, 30)})
        return self.fake


@pytest.fixture
def fake_boto(monkeypatch):
    FakeSession.created = []
    monkeypatch.setattr(s3_storage.boto3, "Session", FakeSession)
    monkeypatch.setattr(s3_storage, "_storage_singleton", None)
    return FakeSession


def test_missing_bucket_is_a_config_error(fake_boto, monkeypatch):
    monkeypatch.delenv("S3_BUCKET", raising=False)
    with pytest.raises(RuntimeError):
        s3_storage.S3Storage()


def test_storage_reads_env_and_downloads(fake_boto, monkeypatch):
    monkeypatch.setenv("S3_BUCKET", "ledger-assets")
    monkeypatch.setenv("AWS_REGION", "eu-west-1")
    monkeypatch.setenv("AWS_PROFILE", "ledger")

    store = s3_storage.get_storage()
    assert store is s3_storage.get_storage()
    assert len(fake_boto.created) == 1

    session = fake_boto.created[0]
    assert session.profile_name == "ledger"
    assert session.region_name == "eu-west-1"

    logo = load_logo(Party(name="Acme", logo_key="logos/acme.png"), store)
    assert isinstance(logo, LogoEmbedded)
    assert session.fake.calls == [("ledger-assets", "logos/acme.png")]
