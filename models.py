"""Pydantic models for Mojang version manifests and version documents.

Structural checks (types, required keys) happen when a model is built;
semantic checks are reported by `problems()` on the top-level documents.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from config import is_absolute_url


class MojangModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class LatestVersions(MojangModel):
    release: str | None = None
    snapshot: str | None = None


class ManifestVersion(MojangModel):
    """Release summary as listed in the manifest."""

    id: str
    type: str
    url: str
    time: datetime
    release_time: datetime = Field(alias="releaseTime")
    sha1: str | None = None
    compliance_level: int | None = Field(default=None, alias="complianceLevel")


class VersionManifest(MojangModel):
    latest: LatestVersions | None = None
    versions: list[ManifestVersion] = Field(default_factory=list)

    def get_version(self, version_id: str) -> ManifestVersion | None:
        for version in self.versions:
            if version.id == version_id:
                return version
        return None

    def latest_version(self, channel: str = "release") -> ManifestVersion | None:
        """Summary of the newest version on `channel` ("release" or "snapshot")."""
        if self.latest is None:
            return None
        version_id = getattr(self.latest, channel, None)
        if version_id is None:
            return None
        return self.get_version(version_id)

    def problems(self) -> list[str]:
        problems: list[str] = []
        seen: set[str] = set()

        for index, version in enumerate(self.versions):
            if not version.id:
                problems.append(f"versions[{index}] has an empty id")
            elif version.id in seen:
                problems.append(f"duplicate version id {version.id!r}")
            seen.add(version.id)
            if not is_absolute_url(version.url):
                problems.append(f"version {version.id!r} has unresolvable url {version.url!r}")

        if self.latest is None:
            problems.append("missing latest release pointers")
            return problems

        for channel in ("release", "snapshot"):
            version_id = getattr(self.latest, channel)
            if version_id is None:
                problems.append(f"missing latest {channel} pointer")
            elif version_id not in seen:
                problems.append(f"latest {channel} {version_id!r} is not listed in versions")

        return problems


class Download(MojangModel):
    url: str
    sha1: str | None = None
    size: int | None = None


class AssetIndex(Download):
    id: str
    total_size: int | None = Field(default=None, alias="totalSize")


class JavaVersion(MojangModel):
    component: str
    major_version: int = Field(alias="majorVersion")


class LibraryDownloads(MojangModel):
    artifact: Download | None = None
    classifiers: dict[str, Download] | None = None


class Library(MojangModel):
    name: str
    downloads: LibraryDownloads | None = None
    natives: dict[str, str] | None = None
    rules: list[dict[str, Any]] | None = None


class MinecraftVersion(MojangModel):
    """A single release's full version document."""

    id: str
    type: str
    time: datetime
    release_time: datetime = Field(alias="releaseTime")
    main_class: str | None = Field(default=None, alias="mainClass")
    arguments: dict[str, Any] | None = None
    minecraft_arguments: str | None = Field(default=None, alias="minecraftArguments")
    asset_index: AssetIndex | None = Field(default=None, alias="assetIndex")
    assets: str | None = None
    downloads: dict[str, Download] = Field(default_factory=dict)
    libraries: list[Library] = Field(default_factory=list)
    java_version: JavaVersion | None = Field(default=None, alias="javaVersion")
    inherits_from: str | None = Field(default=None, alias="inheritsFrom")
    minimum_launcher_version: int | None = Field(default=None, alias="minimumLauncherVersion")
    compliance_level: int | None = Field(default=None, alias="complianceLevel")
    logging: dict[str, Any] | None = None

    def _download_urls(self):
        if self.asset_index is not None:
            yield "assetIndex", self.asset_index.url
        for key, download in self.downloads.items():
            yield f"downloads.{key}", download.url
        for library in self.libraries:
            if library.downloads is None:
                continue
            if library.downloads.artifact is not None:
                yield f"library {library.name}", library.downloads.artifact.url
            for classifier, download in (library.downloads.classifiers or {}).items():
                yield f"library {library.name} ({classifier})", download.url

    def problems(self) -> list[str]:
        problems: list[str] = []

        if not self.id:
            problems.append("empty version id")

        # Child documents take these from their parent.
        if self.inherits_from is None:
            if not self.main_class:
                problems.append("missing mainClass")
            if self.arguments is None and self.minecraft_arguments is None:
                problems.append("missing both arguments and minecraftArguments")

        if self.asset_index is not None and self.assets is not None:
            if self.asset_index.id != self.assets:
                problems.append(
                    f"assetIndex id {self.asset_index.id!r} does not match assets {self.assets!r}"
                )

        for where, url in self._download_urls():
            if not is_absolute_url(url):
                problems.append(f"{where} has unresolvable url {url!r}")

        for library in self.libraries:
            if len(library.name.split(":")) < 3:
                problems.append(f"library name {library.name!r} is not group:artifact:version")

        return problems
