# ==============================================================================
# EXTRACTORS MODULE INIT
# ==============================================================================
# Bundle access, extraction and lookup for GeoAssets.
#
# This package contains:
#   - AssetBundleReader: read-only bundle (DirectoryBundle, ZipBundle)
#   - decompress_xz: in-place .xz decompression
#   - should_extract: the extraction policy
#   - AssetExtractor: copy, decompress and stamp one resource
#   - VirtualFileResolver / FileSystemShim: lookup for the proxy engine
#
# Usage:
#   from geoassets.extractors import open_bundle, AssetExtractor
#   with open_bundle("assets") as bundle:
#       AssetExtractor(bundle).extract(GEOIP, "/tmp/out")
# ==============================================================================

from .bundle import AssetBundleReader, DirectoryBundle, ZipBundle, open_bundle
from .decompression import decompress_xz
from .decision import Decision, should_extract
from .asset_extractor import AssetExtractor
from .asset_vfs import (
    OrderedProbe,
    DirectoryCandidate,
    VirtualFileResolver,
    FileSystemShim,
    setup_file_system,
)

__all__ = [
    # Bundles
    'AssetBundleReader',
    'DirectoryBundle',
    'ZipBundle',
    'open_bundle',

    # Extraction
    'decompress_xz',
    'Decision',
    'should_extract',
    'AssetExtractor',

    # Lookup
    'OrderedProbe',
    'DirectoryCandidate',
    'VirtualFileResolver',
    'FileSystemShim',
    'setup_file_system',
]
