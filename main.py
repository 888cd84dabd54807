# ==============================================================================
# GEOASSETS - MAIN ENTRY POINT
# ==============================================================================
# Runs the startup provisioning step once using the saved configuration.
#
# Usage:
#   python main.py
#
# Settings are read from the user data directory (see geoassets.core.paths);
# there are no command line options.
# ==============================================================================

import sys

from geoassets import AssetProvisioner, Config, get_logger, open_bundle


def main() -> int:
    """
    Load configuration and provision every managed resource.

    Returns:
        0 when every resource is in place, 1 if any of them failed
    """
    config = Config()
    config.load()
    settings = config.to_settings()

    logger = get_logger(debug=settings.debug_mode)
    logger.debug("Bundle: %s", settings.bundle_path)
    logger.debug("Internal assets: %s", settings.internal_assets_path)
    logger.debug("External assets: %s", settings.external_assets_path)

    with open_bundle(settings.bundle_path, settings.bundle_prefix) as bundle:
        provisioner = AssetProvisioner(settings, bundle)
        provisioner.provision_all()

    failed = [o for o in provisioner.last_outcomes if not o.ok]
    return 1 if failed else 0


# ==============================================================================
# SCRIPT ENTRY POINT
# ==============================================================================
if __name__ == "__main__":
    sys.exit(main())
