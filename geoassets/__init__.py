# ==============================================================================
# GEOASSETS - SOURCE PACKAGE
# ==============================================================================
# Provisioning of bundled auxiliary resources (geo-routing databases and the
# browser forwarder script) for a proxy client.
#
# Subpackages:
#   - core: configuration, paths, resources, version markers, errors
#   - extractors: bundle readers, extraction policy, extractor, file lookup
#
# Entry points:
#   - main.py: provision once using the saved configuration
#   - geoassets.provisioner.AssetProvisioner: programmatic use
# ==============================================================================

__version__ = "1.0.0"
__description__ = "Bundled asset provisioning for proxy clients"

from .core import Config, AssetSettings, RESOURCES, get_logger
from .extractors import open_bundle, setup_file_system
from .provisioner import AssetProvisioner, ExtractionOutcome, OutcomeStatus

__all__ = [
    '__version__',
    '__description__',

    # Core
    'Config',
    'AssetSettings',
    'RESOURCES',
    'get_logger',

    # Extractors
    'open_bundle',
    'setup_file_system',

    # Provisioning
    'AssetProvisioner',
    'ExtractionOutcome',
    'OutcomeStatus',
]
