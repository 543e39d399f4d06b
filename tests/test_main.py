"""Tests for the command line entry point."""

import json
import logging
from unittest import mock

import pytest

from gcsprovider.__main__ import build_parser, main

from conftest import MockStorageClient, SERVICE_ACCOUNT

BASE_URL = "https://storage.googleapis.com/media"


@pytest.fixture
def gcs_env(monkeypatch):
    monkeypatch.setenv("GCS_SERVICE_ACCOUNT", json.dumps(SERVICE_ACCOUNT))
    monkeypatch.setenv("GCS_BUCKET_NAME", "media")


@pytest.fixture
def mock_client():
    client = MockStorageClient(buckets=["media"])
    with mock.patch("gcsprovider.provider.create_storage_client", return_value=client):
        yield client


@pytest.fixture(autouse=True)
def reset_logging():
    """main() configures the root logger; restore it afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParser:
    """Test argument parsing."""

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_upload_arguments(self):
        args = build_parser().parse_args(["--config", "c.yaml", "upload", "cat.png", "--folder", "pets"])
        assert args.config == "c.yaml"
        assert args.command == "upload"
        assert args.path == "cat.png"
        assert args.folder == "pets"

    def test_delete_arguments(self):
        args = build_parser().parse_args(["delete", f"{BASE_URL}/a/a.png"])
        assert args.url == f"{BASE_URL}/a/a.png"


@pytest.mark.usefixtures("gcs_env")
class TestMain:
    """Test running commands."""

    def test_check(self, mock_client):
        with pytest.raises(SystemExit) as exc_info:
            main(["check"])
        assert exc_info.value.code == 0

    def test_check_creates_bucket(self):
        client = MockStorageClient()
        with mock.patch("gcsprovider.provider.create_storage_client", return_value=client):
            with pytest.raises(SystemExit):
                main(["check"])
        assert client.created == [("media", "us", "MULTI_REGIONAL")]

    def test_upload_prints_urls(self, mock_client, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("hello")

        with pytest.raises(SystemExit) as exc_info:
            main(["upload", str(path), "--folder", "docs"])

        assert exc_info.value.code == 0
        urls = json.loads(capsys.readouterr().out)
        assert urls["url"].startswith(f"{BASE_URL}/docs/notes_")
        assert urls["url"].endswith(".txt")
        [name] = mock_client.objects()
        assert mock_client.objects()[name].data == b"hello"

    def test_delete(self, mock_client):
        mock_client.objects()["a/a.png"] = mock.MagicMock()

        with pytest.raises(SystemExit) as exc_info:
            main(["delete", f"{BASE_URL}/a/a.png"])

        assert exc_info.value.code == 0
        assert mock_client.objects() == {}

    def test_config_file(self, mock_client, tmp_path, monkeypatch):
        monkeypatch.delenv("GCS_BUCKET_NAME")
        path = tmp_path / "config.yaml"
        path.write_text("gcs:\n  bucketName: media\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(path), "check"])

        assert exc_info.value.code == 0

    def test_missing_file_exits_with_error(self, mock_client, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["upload", str(tmp_path / "missing.txt")])
        assert exc_info.value.code == 1

    def test_invalid_config_exits_with_error(self, monkeypatch):
        monkeypatch.setenv("GCS_SERVICE_ACCOUNT", "{broken")
        with pytest.raises(SystemExit) as exc_info:
            main(["check"])
        assert exc_info.value.code == 1
