# ==============================================================================
# CORE MODULE INIT
# ==============================================================================
# Core building blocks for GeoAssets.
#
# This package contains:
#   - Config / AssetSettings: JSON-backed configuration and its snapshot
#   - Paths: default bundle and extraction locations
#   - Resources: the fixed set of managed resource descriptors
#   - VersionStore: on-disk version markers and their comparison rule
#   - Errors: the AssetError hierarchy
#
# Usage:
#   from geoassets.core import Config, VersionStore, RESOURCES
# ==============================================================================

from .errors import (
    AssetError,
    BundleEntryNotFound,
    VersionMarkerUnreadable,
    ExtractionIOFailure,
    ResolverNotFound,
)
from .resources import (
    ResourceDescriptor,
    RESOURCES,
    GEOIP,
    GEOSITE,
    BROWSER_FORWARDER_SCRIPT,
    get_resource,
)
from .version_store import VersionStore, DiskState, parse_version, is_update
from .config import Config, AssetSettings
from .paths import Paths
from .logger import get_logger

__all__ = [
    # Errors
    'AssetError',
    'BundleEntryNotFound',
    'VersionMarkerUnreadable',
    'ExtractionIOFailure',
    'ResolverNotFound',

    # Resources
    'ResourceDescriptor',
    'RESOURCES',
    'GEOIP',
    'GEOSITE',
    'BROWSER_FORWARDER_SCRIPT',
    'get_resource',

    # Versions
    'VersionStore',
    'DiskState',
    'parse_version',
    'is_update',

    # Configuration
    'Config',
    'AssetSettings',
    'Paths',
    'get_logger',
]
