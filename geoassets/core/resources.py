# ==============================================================================
# GEOASSETS - RESOURCE DESCRIPTORS
# ==============================================================================
# The fixed set of auxiliary files managed by the provisioner.
#
#   geoip.dat    - GeoIP routing database       (replaceable, external dir)
#   geosite.dat  - GeoSite routing database     (replaceable, external dir)
#   index.js     - browser forwarder script     (internal dir, always official)
#
# "Replaceable" resources live where the user or another installer may drop
# their own copy, so they are only auto-upgraded on the official channel.
# ==============================================================================

from dataclasses import dataclass
from typing import Dict, Tuple


# Suffix of the compressed form stored in the bundle
COMPRESSED_SUFFIX = ".xz"

GEOIP_DAT = "geoip.dat"
GEOSITE_DAT = "geosite.dat"
BROWSER_FORWARDER = "index.js"

GEOIP_VERSION = "geoip.version.txt"
GEOSITE_VERSION = "geosite.version.txt"
CORE_VERSION = "core.version.txt"


@dataclass(frozen=True)
class ResourceDescriptor:
    """
    Static description of one managed resource.

    Attributes:
        name:                Filename in the bundle and on disk
        version_marker_name: Filename of the sibling version stamp
        replaceable:         True if the file lives in the external directory
    """
    name: str
    version_marker_name: str
    replaceable: bool = True

    @property
    def compressed_name(self) -> str:
        """Name of the compressed entry inside the bundle."""
        return self.name + COMPRESSED_SUFFIX

    @property
    def follows_official_channel(self) -> bool:
        """Internal resources always track the official version."""
        return not self.replaceable


GEOIP = ResourceDescriptor(GEOIP_DAT, GEOIP_VERSION)
GEOSITE = ResourceDescriptor(GEOSITE_DAT, GEOSITE_VERSION)
BROWSER_FORWARDER_SCRIPT = ResourceDescriptor(BROWSER_FORWARDER, CORE_VERSION,
                                              replaceable=False)

# Provisioning order
RESOURCES: Tuple[ResourceDescriptor, ...] = (GEOIP, GEOSITE, BROWSER_FORWARDER_SCRIPT)

_BY_NAME: Dict[str, ResourceDescriptor] = {r.name: r for r in RESOURCES}


def get_resource(name: str) -> ResourceDescriptor:
    """
    Look up a descriptor by resource filename.

    Raises:
        KeyError: If the name is not one of the managed resources
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(f"unknown asset resource: {name}") from None
