# ==============================================================================
# EXTRACTION DECISION
# ==============================================================================
# Policy deciding whether a resource must be (re)extracted from the bundle.
#
# Precedence:
#   1. No marker on disk      -> extract if the file is missing too, or forced
#   2. Official channel, or   -> compare bundle marker with disk marker
#      non-replaceable           (unreadable disk marker: extract, drop marker)
#   3. Custom channel         -> extract only if forced
#
# A resource file without a marker is left alone unless forced, so a
# user-supplied database is never clobbered on first run.
#
# The bundle marker is loaded through a callable, only when rule 2 needs it.
# Whatever was loaded is handed back in the Decision so the extractor does
# not read it twice.
# ==============================================================================

from dataclasses import dataclass
from typing import Callable, Optional

from ..core.resources import ResourceDescriptor
from ..core.version_store import DiskState, is_update


@dataclass(frozen=True)
class Decision:
    """
    Outcome of should_extract().

    Attributes:
        extract:        True if the resource must be extracted
        bundle_version: Bundle marker, if it was loaded while deciding
        discard_marker: True if the on-disk marker is stale and unreadable
    """
    extract: bool
    bundle_version: Optional[str] = None
    discard_marker: bool = False

    def __bool__(self) -> bool:
        return self.extract


def should_extract(resource: ResourceDescriptor,
                   state: DiskState,
                   use_official: bool,
                   force: bool,
                   load_bundle_version: Callable[[], str]) -> Decision:
    """
    Decide whether to extract a resource.

    Args:
        resource:            Descriptor of the resource
        state:               On-disk snapshot from VersionStore.inspect()
        use_official:        Official channel selected for replaceable resources
        force:               Forced refresh
        load_bundle_version: Reads the bundle's marker for this resource

    Returns:
        A Decision

    Raises:
        BundleEntryNotFound: If the bundle marker is needed but unreadable
    """
    if not state.marker_present:
        return Decision(extract=not state.resource_present or force)

    if use_official or resource.follows_official_channel:
        bundle_version = load_bundle_version()

        if state.marker_error is not None:
            return Decision(extract=True, bundle_version=bundle_version,
                            discard_marker=True)

        return Decision(
            extract=is_update(bundle_version, state.marker) or force,
            bundle_version=bundle_version,
        )

    # Custom channel: user-managed files are never auto-upgraded
    return Decision(extract=force)
