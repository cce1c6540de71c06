"""Shared fixtures for mcmeta-mojang tests."""

import io
import sys
import tempfile
import zipfile
from pathlib import Path

import pytest

# Add project root to path so we can import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Config


MANIFEST_URL = "https://piston-meta.example.com/mc/game/version_manifest_v2.json"


@pytest.fixture
def sample_manifest():
    """Sample version manifest data for testing."""
    return {
        "latest": {"release": "1.16.5", "snapshot": "21w03a"},
        "versions": [
            {
                "id": "21w03a",
                "type": "snapshot",
                "url": "https://piston-meta.example.com/v1/packages/aaa/21w03a.json",
                "time": "2021-01-20T15:00:00+00:00",
                "releaseTime": "2021-01-20T14:00:00+00:00",
                "sha1": "aaa",
                "complianceLevel": 0,
            },
            {
                "id": "1.16.5",
                "type": "release",
                "url": "https://piston-meta.example.com/v1/packages/bbb/1.16.5.json",
                "time": "2021-01-14T16:00:00+00:00",
                "releaseTime": "2021-01-14T16:05:32+00:00",
                "sha1": "bbb",
                "complianceLevel": 0,
            },
            {
                "id": "1.0",
                "type": "release",
                "url": "https://piston-meta.example.com/v1/packages/ccc/1.0.json",
                "time": "2019-06-28T07:05:57+00:00",
                "releaseTime": "2011-11-17T22:00:00+00:00",
            },
        ],
    }


@pytest.fixture
def sample_version():
    """Sample version document data for testing."""
    return {
        "id": "1.16.5",
        "type": "release",
        "time": "2021-01-14T16:00:00+00:00",
        "releaseTime": "2021-01-14T16:05:32+00:00",
        "mainClass": "net.minecraft.client.main.Main",
        "arguments": {"game": ["--username", "${auth_player_name}"], "jvm": []},
        "assetIndex": {
            "id": "1.16",
            "sha1": "f8e11ca03b475dd655755b945334c7a0ac2c3b43",
            "size": 295421,
            "totalSize": 330604420,
            "url": "https://launchermeta.example.com/v1/packages/f8e1/1.16.json",
        },
        "assets": "1.16",
        "downloads": {
            "client": {
                "sha1": "37fd3c903861eeff3bc24b71eed48f828b5269c8",
                "size": 17547153,
                "url": "https://launcher.example.com/v1/objects/37fd/client.jar",
            },
        },
        "libraries": [
            {
                "name": "com.mojang:patchy:1.1",
                "downloads": {
                    "artifact": {
                        "path": "com/mojang/patchy/1.1/patchy-1.1.jar",
                        "sha1": "aef610b34a1be37fa851825f12372b78424d8903",
                        "size": 15817,
                        "url": "https://libraries.example.com/com/mojang/patchy/1.1/patchy-1.1.jar",
                    }
                },
            }
        ],
        "javaVersion": {"component": "jre-legacy", "majorVersion": 8},
        "minimumLauncherVersion": 21,
        "complianceLevel": 0,
    }


@pytest.fixture
def sample_config():
    """Pre-configured Config instance for testing."""
    return Config(manifest_url=MANIFEST_URL, http_timeout=5.0)


@pytest.fixture
def make_zip():
    """Build an in-memory zip archive from (name, content) pairs, in order."""

    def _make_zip(entries: list[tuple[str, str | bytes]]) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            for name, content in entries:
                archive.writestr(name, content)
        return buffer.getvalue()

    return _make_zip


@pytest.fixture
def scratch_dir(tmp_path, monkeypatch):
    """Redirect tempfile to an empty directory so leftovers can be observed."""
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(scratch))
    return scratch


@pytest.fixture
def config_toml_content():
    """Sample config.toml content."""
    return """
manifest_url = "https://custom.example.com/version_manifest_v2.json"
http_timeout = 12.5
"""
