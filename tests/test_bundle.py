import zipfile

import pytest

from geoassets.core.errors import BundleEntryNotFound
from geoassets.extractors.bundle import DirectoryBundle, ZipBundle, open_bundle


def test_directory_bundle_reads_entries(bundle):
    assert bundle.read_text("geoip.version.txt") == "3"
    with bundle.open("index.html") as f:
        assert f.read() == b"<html>forwarder</html>"


def test_directory_bundle_missing_entry(bundle):
    with pytest.raises(BundleEntryNotFound) as excinfo:
        bundle.open("nope.txt")
    assert excinfo.value.entry_name == "nope.txt"


def test_directory_bundle_rejects_escaping_names(bundle):
    with pytest.raises(BundleEntryNotFound):
        bundle.open("../outside.txt")


def test_directory_bundle_prefix(tmp_path):
    (tmp_path / "v2ray").mkdir()
    (tmp_path / "v2ray" / "core.version.txt").write_text("12")

    reader = DirectoryBundle(str(tmp_path), prefix="v2ray/")
    assert reader.read_text("core.version.txt") == "12"


def test_zip_bundle(tmp_path):
    archive = tmp_path / "app.apk"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("assets/geoip.version.txt", "42")
        zf.writestr("assets/index.html", "<html/>")

    with open_bundle(str(archive), prefix="assets/") as reader:
        assert isinstance(reader, ZipBundle)
        assert reader.read_text("geoip.version.txt") == "42"
        with reader.open("index.html") as f:
            f.seek(1)
            assert f.read() == b"html/>"
        with pytest.raises(BundleEntryNotFound):
            reader.open("geosite.version.txt")


def test_zip_bundle_bad_archive(tmp_path):
    archive = tmp_path / "broken.apk"
    archive.write_bytes(b"not a zip")

    with pytest.raises(BundleEntryNotFound):
        ZipBundle(str(archive)).open("index.html")


def test_open_bundle_picks_directory(tmp_path):
    assert isinstance(open_bundle(str(tmp_path)), DirectoryBundle)
