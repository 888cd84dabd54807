# ==============================================================================
# ASSET VIRTUAL FILE SYSTEM
# ==============================================================================
# Read-only file lookup handed to the proxy engine, so that it reads its
# databases from wherever the provisioner put them.
#
# Lookup is keyed by filename only (directories in the request are ignored):
#   1. The reserved name (default "index.html") is served from the bundle
#   2. Otherwise the internal then the external asset directory is probed,
#      and the first existing file wins
#
# There is no cache; the filesystem is probed on every call so files the
# user drops into the external directory are picked up immediately.
#
# Usage:
#   fs = setup_file_system(settings, bundle)
#   with fs.open_reader("/any/dir/geosite.dat") as f:
#       data = f.read()
# ==============================================================================

import os
import stat
import errno
import ntpath
import posixpath
from typing import BinaryIO, Callable, List, Optional, Sequence

from ..core.config import AssetSettings
from ..core.errors import ResolverNotFound
from .bundle import AssetBundleReader


# A candidate maps a filename to a concrete path or raises OSError
Candidate = Callable[[str], str]


def base_name(logical_path: str) -> str:
    """Final path component, accepting both / and \\ separators."""
    return ntpath.basename(posixpath.basename(logical_path))


# ==============================================================================
# ORDERED PROBE
# ==============================================================================
class DirectoryCandidate:
    """Candidate that finds a file directly inside one directory."""

    def __init__(self, directory: str):
        self.directory = directory

    def __call__(self, file_name: str) -> str:
        path = os.path.join(self.directory, file_name)
        if not stat.S_ISREG(os.stat(path).st_mode):
            raise FileNotFoundError(errno.ENOENT, "not a regular file", path)
        return path

    def __repr__(self) -> str:
        return f"DirectoryCandidate({self.directory!r})"


class OrderedProbe:
    """
    Tries candidates in order; first success wins.

    If every candidate fails, ResolverNotFound is raised chained to the
    last candidate's error.
    """

    def __init__(self, candidates: Sequence[Candidate]):
        self.candidates: List[Candidate] = list(candidates)

    def first(self, file_name: str) -> str:
        if not file_name:
            raise ResolverNotFound(file_name)

        last_error: Optional[OSError] = None
        for candidate in self.candidates:
            try:
                return candidate(file_name)
            except OSError as e:
                last_error = e
        raise ResolverNotFound(file_name) from last_error


# ==============================================================================
# RESOLVER
# ==============================================================================
class VirtualFileResolver:
    """
    Resolves logical filenames to readable streams.

    Attributes:
        bundle:        Bundle used for the reserved name
        reserved_name: Filename always served from the bundle
        probe:         Ordered probe over the extraction directories
    """

    def __init__(self, bundle: AssetBundleReader, internal_dir: str,
                 external_dir: str, reserved_name: str = "index.html"):
        self.bundle = bundle
        self.reserved_name = reserved_name
        self.probe = OrderedProbe([
            DirectoryCandidate(internal_dir),
            DirectoryCandidate(external_dir),
        ])

    @classmethod
    def from_settings(cls, settings: AssetSettings,
                      bundle: AssetBundleReader) -> 'VirtualFileResolver':
        return cls(
            bundle,
            settings.internal_assets_path,
            settings.external_assets_path,
            settings.reserved_bundle_name,
        )

    def resolve(self, logical_path: str) -> str:
        """
        Find the on-disk path for a logical file.

        Raises:
            ResolverNotFound: If no directory holds the file
        """
        return self.probe.first(base_name(logical_path))

    def open_for_read(self, logical_path: str) -> BinaryIO:
        """
        Open a logical file for reading. Caller closes the stream.

        Raises:
            BundleEntryNotFound: If the reserved entry is missing from the bundle
            ResolverNotFound:    If no directory holds the file
            OSError:             If the file exists but can't be opened
        """
        file_name = base_name(logical_path)

        if file_name == self.reserved_name:
            return self.bundle.open(file_name)

        return open(self.probe.first(file_name), 'rb')


# ==============================================================================
# FILESYSTEM SHIM
# ==============================================================================
class FileSystemShim:
    """
    File access capability injected into the proxy engine.

    Both entry points go through the resolver; every stream it returns
    supports seek().
    """

    def __init__(self, resolver: VirtualFileResolver):
        self.resolver = resolver

    def open_seeker(self, path: str) -> BinaryIO:
        """Open for random-access reading."""
        return self.resolver.open_for_read(path)

    def open_reader(self, path: str) -> BinaryIO:
        """Open for sequential reading."""
        return self.open_seeker(path)


def setup_file_system(settings: AssetSettings,
                      bundle: AssetBundleReader) -> Optional[FileSystemShim]:
    """
    Build the shim for the proxy engine.

    Returns:
        A FileSystemShim, or None when provisioning is disabled and the
        engine should keep its own file access
    """
    if not settings.provisioning_enabled:
        return None
    return FileSystemShim(VirtualFileResolver.from_settings(settings, bundle))
