import lzma

import pytest

from geoassets.core.config import AssetSettings
from geoassets.core.resources import RESOURCES
from geoassets.extractors.bundle import DirectoryBundle


def payload(name: str, version: str) -> bytes:
    return f"{name}@{version}".encode("utf-8")


class BundleBuilder:
    """Writes a directory bundle with xz-compressed resources and markers."""

    def __init__(self, root):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def put(self, name: str, data: bytes):
        (self.root / name).write_bytes(data)

    def set_version(self, version: str, resources=RESOURCES):
        for resource in resources:
            self.put(resource.compressed_name,
                     lzma.compress(payload(resource.name, version)))
            self.put(resource.version_marker_name, version.encode("utf-8"))


@pytest.fixture
def bundle_builder(tmp_path):
    return BundleBuilder(tmp_path / "bundle")


@pytest.fixture
def bundle(bundle_builder):
    bundle_builder.set_version("3")
    bundle_builder.put("index.html", b"<html>forwarder</html>")
    return DirectoryBundle(str(bundle_builder.root))


@pytest.fixture
def settings(tmp_path, bundle_builder):
    return AssetSettings(
        bundle_path=str(bundle_builder.root),
        internal_assets_path=str(tmp_path / "internal"),
        external_assets_path=str(tmp_path / "external"),
    )
