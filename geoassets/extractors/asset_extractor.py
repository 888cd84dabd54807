# ==============================================================================
# ASSET EXTRACTOR
# ==============================================================================
# Copies one resource out of the bundle, decompresses it and stamps its
# version marker.
#
# Sequence for a resource "geoip.dat" extracted into DIR:
#   1. bundle "geoip.dat.xz"       -> DIR/geoip.dat.xz     (stream copy)
#   2. DIR/geoip.dat.xz            -> DIR/geoip.dat        (decompress_xz)
#   3. bundle version              -> DIR/geoip.version.txt
#
# The marker is written last. If anything before it fails the marker keeps
# its old value, and the next run decides to extract again. Re-running is
# always safe because every step overwrites.
#
# Usage:
#   extractor = AssetExtractor(bundle)
#   extractor.extract(GEOIP, "/sdcard/GeoAssets")
# ==============================================================================

import os
import shutil
import logging
from typing import Optional

from ..core.errors import BundleEntryNotFound, ExtractionIOFailure
from ..core.resources import ResourceDescriptor
from ..core.version_store import VersionStore
from .bundle import AssetBundleReader, BUNDLE_READ_ERRORS
from .decompression import decompress_xz, CHUNK_SIZE


logger = logging.getLogger(__name__)


class AssetExtractor:
    """
    Extracts managed resources from an asset bundle.

    Attributes:
        bundle:        Bundle to read compressed entries and markers from
        version_store: Marker reader/writer
    """

    def __init__(self, bundle: AssetBundleReader,
                 version_store: Optional[VersionStore] = None):
        self.bundle = bundle
        self.version_store = version_store or VersionStore()

    def load_bundle_version(self, resource: ResourceDescriptor) -> str:
        """
        Read the version marker shipped in the bundle for a resource.

        Raises:
            BundleEntryNotFound: If the marker entry is missing or unreadable
        """
        return self.bundle.read_text(resource.version_marker_name)

    def copy_entry(self, name: str, output_path: str):
        """
        Stream a bundle entry to a file.

        Raises:
            BundleEntryNotFound: If the entry is missing
            OSError:             If the output can't be written
        """
        with self.bundle.open(name) as src, open(output_path, 'wb') as dst:
            shutil.copyfileobj(src, dst, CHUNK_SIZE)
            dst.flush()
            os.fsync(dst.fileno())
        logger.debug("Extract >> %s", output_path)

    def extract(self, resource: ResourceDescriptor, target_dir: str,
                bundle_version: Optional[str] = None) -> str:
        """
        Extract a resource into target_dir and stamp its marker.

        Args:
            resource:       Resource to extract
            target_dir:     Directory receiving the resource and its marker
            bundle_version: Bundle marker if already loaded; read lazily
                            otherwise

        Returns:
            Path of the extracted resource

        Raises:
            BundleEntryNotFound:  If the compressed entry or marker is missing
            ExtractionIOFailure:  If copying, decompressing or stamping fails
        """
        if bundle_version is None:
            bundle_version = self.load_bundle_version(resource)

        compressed_path = os.path.join(target_dir, resource.compressed_name)

        try:
            os.makedirs(target_dir, exist_ok=True)
            self.copy_entry(resource.compressed_name, compressed_path)
            resource_path = decompress_xz(compressed_path)
        except BundleEntryNotFound:
            raise
        except BUNDLE_READ_ERRORS as e:
            raise ExtractionIOFailure(compressed_path) from e

        try:
            self.version_store.write(resource, target_dir, bundle_version)
        except OSError as e:
            marker_path = self.version_store.marker_path(resource, target_dir)
            raise ExtractionIOFailure(
                marker_path, f"write version marker {marker_path}"
            ) from e

        return resource_path
