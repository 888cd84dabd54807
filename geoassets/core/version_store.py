# ==============================================================================
# GEOASSETS - VERSION STORE
# ==============================================================================
# Reads and writes the one-line version marker kept next to each extracted
# resource, and compares marker values.
#
# Marker format:
#   UTF-8 text, read verbatim (no stripping), no trailing newline required.
#   Either a decimal unsigned 64-bit integer (official builds) or any opaque
#   string (custom builds).
#
# Comparison rule:
#   - both numeric:  bundle must be strictly greater to count as newer
#   - otherwise:     any exact string mismatch counts as "needs update"
#
# Usage:
#   store = VersionStore()
#   state = store.inspect(GEOIP, "/data/assets")
#   store.write(GEOIP, "/data/assets", "202410180000")
# ==============================================================================

import os
import re
from dataclasses import dataclass
from typing import Optional

from .errors import VersionMarkerUnreadable
from .resources import ResourceDescriptor


UINT64_MAX = 2 ** 64 - 1
UINT64_DIGITS = len(str(UINT64_MAX))

_DIGITS = re.compile(r"[0-9]+")


def parse_version(marker: str) -> Optional[int]:
    """
    Parse a marker as an unsigned 64-bit integer.

    Only plain ASCII digits are accepted; signs, whitespace and values
    above 2^64-1 are treated as non-numeric.

    Returns:
        The numeric value, or None if the marker is not a valid uint64
    """
    if not _DIGITS.fullmatch(marker):
        return None
    digits = marker.lstrip("0") or "0"
    # uint64 never needs more than 20 digits; skip int() on huge tokens
    if len(digits) > UINT64_DIGITS:
        return None
    value = int(digits)
    if value > UINT64_MAX:
        return None
    return value


def is_update(bundle_marker: str, local_marker: str) -> bool:
    """
    Decide whether the bundle marker supersedes the local one.

    Args:
        bundle_marker: Version shipped in the asset bundle
        local_marker:  Version recorded next to the extracted file

    Returns:
        True if the extracted copy should be replaced
    """
    bundle_value = parse_version(bundle_marker)
    local_value = parse_version(local_marker)
    if bundle_value is not None and local_value is not None:
        return bundle_value > local_value
    return bundle_marker != local_marker


@dataclass(frozen=True)
class DiskState:
    """
    Snapshot of a resource's on-disk state, taken before deciding.

    Attributes:
        directory:        Directory the resource is extracted into
        marker_present:   Whether the version marker file exists
        resource_present: Whether the extracted resource file exists
        marker:           Marker contents, if it could be read
        marker_error:     Why the marker could not be read, if it exists
                          but reading failed
    """
    directory: str
    marker_present: bool
    resource_present: bool
    marker: Optional[str] = None
    marker_error: Optional[VersionMarkerUnreadable] = None


class VersionStore:
    """File-backed version markers, one per resource directory."""

    ENCODING = "utf-8"

    def marker_path(self, resource: ResourceDescriptor, directory: str) -> str:
        return os.path.join(directory, resource.version_marker_name)

    def resource_path(self, resource: ResourceDescriptor, directory: str) -> str:
        return os.path.join(directory, resource.name)

    def read(self, resource: ResourceDescriptor, directory: str) -> str:
        """
        Read the marker for a resource.

        Raises:
            VersionMarkerUnreadable: If the file is missing, unreadable or
                                     not valid UTF-8
        """
        path = self.marker_path(resource, directory)
        try:
            with open(path, "r", encoding=self.ENCODING, newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise VersionMarkerUnreadable(path) from e

    def write(self, resource: ResourceDescriptor, directory: str, version: str):
        """
        Overwrite the marker for a resource.

        Raises:
            OSError: If the marker cannot be written
        """
        path = self.marker_path(resource, directory)
        with open(path, "w", encoding=self.ENCODING, newline="") as f:
            f.write(version)
            f.flush()
            os.fsync(f.fileno())

    def remove(self, resource: ResourceDescriptor, directory: str):
        """Delete a stale marker. Missing markers are ignored."""
        path = self.marker_path(resource, directory)
        try:
            os.remove(path)
        except FileNotFoundError:
            pass

    def inspect(self, resource: ResourceDescriptor, directory: str) -> DiskState:
        """
        Capture everything the extraction decision needs from disk.

        A marker that exists but cannot be read is recorded in
        ``marker_error`` instead of raising.
        """
        marker_present = os.path.exists(self.marker_path(resource, directory))
        resource_present = os.path.exists(self.resource_path(resource, directory))

        marker = None
        marker_error = None
        if marker_present:
            try:
                marker = self.read(resource, directory)
            except VersionMarkerUnreadable as e:
                marker_error = e

        return DiskState(
            directory=directory,
            marker_present=marker_present,
            resource_present=resource_present,
            marker=marker,
            marker_error=marker_error,
        )
