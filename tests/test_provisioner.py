import dataclasses
import logging
import lzma
import zipfile

import pytest

from geoassets.core.errors import BundleEntryNotFound, ExtractionIOFailure
from geoassets.core.resources import GEOIP, GEOSITE
from geoassets.extractors.bundle import ZipBundle
from geoassets.provisioner import AssetProvisioner, OutcomeStatus

from conftest import payload


def statuses(provisioner):
    return {o.resource.name: o.status for o in provisioner.last_outcomes}


def all_with(status):
    return {"geoip.dat": status, "geosite.dat": status, "index.js": status}


def test_first_run_extracts_everything(settings, bundle, tmp_path):
    provisioner = AssetProvisioner(settings, bundle)
    provisioner.provision_all()

    assert statuses(provisioner) == all_with(OutcomeStatus.EXTRACTED)
    assert (tmp_path / "external" / "geoip.dat").exists()
    assert (tmp_path / "external" / "geosite.dat").exists()
    assert (tmp_path / "internal" / "index.js").exists()
    assert (tmp_path / "internal" / "core.version.txt").read_text() == "3"


def test_second_run_is_a_no_op(settings, bundle):
    provisioner = AssetProvisioner(settings, bundle)
    provisioner.provision_all()
    provisioner.provision_all()

    assert statuses(provisioner) == all_with(OutcomeStatus.SKIPPED)


def test_version_lifecycle(settings, bundle, bundle_builder, tmp_path):
    external = tmp_path / "external"
    provisioner = AssetProvisioner(settings, bundle)

    provisioner.provision_all(True)
    assert (external / "geoip.version.txt").read_text() == "3"

    bundle_builder.set_version("5")
    provisioner.provision_all(True)
    assert statuses(provisioner) == all_with(OutcomeStatus.EXTRACTED)
    assert (external / "geoip.version.txt").read_text() == "5"
    assert (external / "geoip.dat").read_bytes() == payload("geoip.dat", "5")

    bundle_builder.set_version("7")
    provisioner.provision_all(False)
    assert statuses(provisioner) == {
        "geoip.dat": OutcomeStatus.SKIPPED,
        "geosite.dat": OutcomeStatus.SKIPPED,
        "index.js": OutcomeStatus.EXTRACTED,
    }
    assert (external / "geoip.version.txt").read_text() == "5"

    outcome = provisioner.provision("geoip.dat", force=True, use_official=False)
    assert outcome.status is OutcomeStatus.EXTRACTED
    assert (external / "geoip.version.txt").read_text() == "7"


def test_user_supplied_file_is_not_clobbered(settings, bundle, tmp_path):
    external = tmp_path / "external"
    external.mkdir()
    (external / "geoip.dat").write_bytes(b"user database")

    AssetProvisioner(settings, bundle).provision_all()

    assert (external / "geoip.dat").read_bytes() == b"user database"
    assert not (external / "geoip.version.txt").exists()


def test_failure_does_not_block_other_resources(settings, bundle, bundle_builder,
                                                caplog):
    (bundle_builder.root / "geoip.dat.xz").unlink()
    provisioner = AssetProvisioner(settings, bundle)

    with caplog.at_level(logging.WARNING, logger="geoassets"):
        provisioner.provision_all()

    assert statuses(provisioner) == {
        "geoip.dat": OutcomeStatus.FAILED,
        "geosite.dat": OutcomeStatus.EXTRACTED,
        "index.js": OutcomeStatus.EXTRACTED,
    }
    assert isinstance(provisioner.last_outcomes[0].error, BundleEntryNotFound)
    assert "Extract geoip.dat failed" in caplog.text


def test_missing_bundle_marker_fails_only_that_resource(settings, bundle,
                                                        bundle_builder):
    provisioner = AssetProvisioner(settings, bundle)
    provisioner.provision_all()

    bundle_builder.set_version("4")
    (bundle_builder.root / GEOSITE.version_marker_name).unlink()
    provisioner.provision_all()

    assert statuses(provisioner) == {
        "geoip.dat": OutcomeStatus.EXTRACTED,
        "geosite.dat": OutcomeStatus.FAILED,
        "index.js": OutcomeStatus.EXTRACTED,
    }


def test_unreadable_marker_triggers_reextraction(settings, bundle, tmp_path):
    provisioner = AssetProvisioner(settings, bundle)
    provisioner.provision_all()

    marker = tmp_path / "external" / GEOIP.version_marker_name
    marker.write_bytes(b"\xff\xfe")
    provisioner.provision_all()

    assert statuses(provisioner)["geoip.dat"] is OutcomeStatus.EXTRACTED
    assert marker.read_text() == "3"


def test_channel_preference_callable_is_evaluated_once(settings, bundle,
                                                       bundle_builder):
    calls = []

    def use_official():
        calls.append(True)
        return True

    provisioner = AssetProvisioner(settings, bundle)
    provisioner.provision_all()
    bundle_builder.set_version("9")
    provisioner.provision_all(use_official)

    assert calls == [True]
    assert statuses(provisioner) == all_with(OutcomeStatus.EXTRACTED)


def test_settings_supply_default_channel(settings, bundle, bundle_builder):
    custom = dataclasses.replace(settings, use_official_assets=False)
    AssetProvisioner(settings, bundle).provision_all()
    bundle_builder.set_version("9")

    provisioner = AssetProvisioner(custom, bundle)
    provisioner.provision_all()

    assert statuses(provisioner)["geoip.dat"] is OutcomeStatus.SKIPPED
    assert statuses(provisioner)["index.js"] is OutcomeStatus.EXTRACTED


def test_disabled_provisioning_does_nothing(settings, bundle, tmp_path):
    disabled = dataclasses.replace(settings, provisioning_enabled=False)
    provisioner = AssetProvisioner(disabled, bundle)
    provisioner.provision_all()

    assert provisioner.last_outcomes == []
    assert not (tmp_path / "external").exists()


def test_provision_unknown_resource(settings, bundle):
    with pytest.raises(KeyError):
        AssetProvisioner(settings, bundle).provision("geoip.db")


def test_oversized_numeric_marker_is_compared_as_text(settings, bundle,
                                                      bundle_builder, tmp_path):
    provisioner = AssetProvisioner(settings, bundle)
    provisioner.provision_all()

    huge = "9" * 5000
    bundle_builder.set_version(huge)
    provisioner.provision_all()

    assert statuses(provisioner) == all_with(OutcomeStatus.EXTRACTED)
    assert (tmp_path / "external" / "geoip.version.txt").read_text() == huge

    provisioner.provision_all()
    assert statuses(provisioner) == all_with(OutcomeStatus.SKIPPED)


def corrupt_stored_blob(archive, blob: bytes):
    data = archive.read_bytes()
    assert data.count(blob) == 1
    flipped = blob[:-1] + bytes([blob[-1] ^ 0xFF])
    archive.write_bytes(data.replace(blob, flipped))


def test_corrupt_zip_entries_fail_only_their_resource(settings, tmp_path):
    archive = tmp_path / "app.apk"
    geosite_xz = lzma.compress(payload("geosite.dat", "1"))
    with zipfile.ZipFile(archive, "w", zipfile.ZIP_STORED) as zf:
        zf.writestr("geoip.dat.xz", lzma.compress(payload("geoip.dat", "1")))
        zf.writestr("geoip.version.txt", "GEOIPVER1")
        zf.writestr("geosite.dat.xz", geosite_xz)
        zf.writestr("geosite.version.txt", "1")
        zf.writestr("index.js.xz", lzma.compress(payload("index.js", "1")))
        zf.writestr("core.version.txt", "1")

    corrupt_stored_blob(archive, b"GEOIPVER1")
    corrupt_stored_blob(archive, geosite_xz)

    with ZipBundle(str(archive)) as bundle:
        provisioner = AssetProvisioner(settings, bundle)
        provisioner.provision_all()

    assert statuses(provisioner) == {
        "geoip.dat": OutcomeStatus.FAILED,
        "geosite.dat": OutcomeStatus.FAILED,
        "index.js": OutcomeStatus.EXTRACTED,
    }
    geoip_error, geosite_error = (o.error for o in provisioner.last_outcomes[:2])
    assert isinstance(geoip_error, BundleEntryNotFound)
    assert isinstance(geosite_error, ExtractionIOFailure)
    assert isinstance(geosite_error.__cause__, zipfile.BadZipFile)
    assert not (tmp_path / "external" / "geosite.version.txt").exists()


def test_failed_reextraction_after_discarded_marker_waits_for_force(
        settings, bundle, bundle_builder, tmp_path):
    external = tmp_path / "external"
    provisioner = AssetProvisioner(settings, bundle)
    provisioner.provision_all()

    (external / "geoip.version.txt").write_bytes(b"\xff\xfe")
    good_entry = (bundle_builder.root / "geoip.dat.xz").read_bytes()
    bundle_builder.put("geoip.dat.xz", b"not xz data")
    provisioner.provision_all()

    assert statuses(provisioner)["geoip.dat"] is OutcomeStatus.FAILED
    assert not (external / "geoip.version.txt").exists()

    bundle_builder.put("geoip.dat.xz", good_entry)
    provisioner.provision_all()
    assert statuses(provisioner)["geoip.dat"] is OutcomeStatus.SKIPPED

    provisioner.provision("geoip.dat", force=True)
    assert (external / "geoip.version.txt").read_text() == "3"
