# ==============================================================================
# ASSET BUNDLE READERS
# ==============================================================================
# Read-only access to the application's embedded resource bundle.
#
# Two bundle layouts are supported:
#   - DirectoryBundle: a plain folder (source checkout or PyInstaller _MEIPASS)
#   - ZipBundle:       a zip archive (APK / wheel style packaging)
#
# Both expose the same open-by-name capability and apply a configurable
# prefix to every entry name, e.g. prefix "assets/" + "geoip.dat.xz".
#
# Usage:
#   with open_bundle("/opt/app/assets") as bundle:
#       with bundle.open("geoip.version.txt") as f:
#           version = f.read().decode("utf-8")
# ==============================================================================

import os
import lzma
import zlib
import zipfile
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

from ..core.errors import BundleEntryNotFound


# Errors a bundle stream can raise while being read (zip CRC, codec failures)
BUNDLE_READ_ERRORS = (OSError, zipfile.BadZipFile, zlib.error, lzma.LZMAError, EOFError)


# ==============================================================================
# BASE READER
# ==============================================================================
class AssetBundleReader(ABC):
    """
    Abstract read-only bundle.

    Subclasses implement _open_entry() for their storage; open() takes
    care of prefixing and error translation.

    Can be used as a context manager:
        with ZipBundle("app.apk", prefix="assets/") as bundle:
            data = bundle.read_text("core.version.txt")
    """

    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def entry_name(self, name: str) -> str:
        """Full entry name for a logical bundle name."""
        return self.prefix + name

    @abstractmethod
    def _open_entry(self, entry_name: str) -> BinaryIO:
        """
        Open a fully-prefixed entry.

        Raises:
            BundleEntryNotFound: If the entry does not exist
        """
        pass

    def open(self, name: str) -> BinaryIO:
        """
        Open a bundle entry as a binary stream. Caller closes it.

        Raises:
            BundleEntryNotFound: If the entry does not exist or can't be opened
        """
        return self._open_entry(self.entry_name(name))

    def read_text(self, name: str, encoding: str = "utf-8") -> str:
        """
        Read a small text entry, such as a version marker, verbatim.

        Raises:
            BundleEntryNotFound: If the entry is missing or unreadable
        """
        entry_name = self.entry_name(name)
        with self.open(name) as f:
            try:
                return f.read().decode(encoding)
            except BUNDLE_READ_ERRORS + (UnicodeDecodeError,) as e:
                raise BundleEntryNotFound(
                    entry_name, f"read {entry_name} in assets"
                ) from e

    def close(self):
        """Release any resources held by the bundle."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


# ==============================================================================
# DIRECTORY BUNDLE
# ==============================================================================
class DirectoryBundle(AssetBundleReader):
    """Bundle stored as files under a root directory."""

    def __init__(self, root: str, prefix: str = ""):
        super().__init__(prefix)
        self.root = os.path.abspath(root)

    def _open_entry(self, entry_name: str) -> BinaryIO:
        path = os.path.normpath(os.path.join(self.root, entry_name))

        # Entry names must stay inside the bundle root
        if os.path.commonpath([self.root, path]) != self.root:
            raise BundleEntryNotFound(entry_name)

        try:
            return open(path, 'rb')
        except OSError as e:
            raise BundleEntryNotFound(entry_name) from e

    def __repr__(self) -> str:
        return f"DirectoryBundle({self.root!r}, prefix={self.prefix!r})"


# ==============================================================================
# ZIP BUNDLE
# ==============================================================================
class ZipBundle(AssetBundleReader):
    """
    Bundle stored inside a zip archive.

    The archive stays open until close(); streams returned by open()
    must be closed before the bundle is.
    """

    def __init__(self, archive_path: str, prefix: str = ""):
        super().__init__(prefix)
        self.archive_path = archive_path
        self._zip: Optional[zipfile.ZipFile] = None

    def _archive(self) -> zipfile.ZipFile:
        if self._zip is None:
            try:
                self._zip = zipfile.ZipFile(self.archive_path, 'r')
            except (OSError, zipfile.BadZipFile) as e:
                raise BundleEntryNotFound(
                    self.archive_path, f"open bundle {self.archive_path}"
                ) from e
        return self._zip

    def _open_entry(self, entry_name: str) -> BinaryIO:
        archive = self._archive()
        try:
            return archive.open(entry_name, 'r')
        except KeyError as e:
            raise BundleEntryNotFound(entry_name) from e
        except (OSError, zipfile.BadZipFile, NotImplementedError, RuntimeError) as e:
            raise BundleEntryNotFound(entry_name) from e

    def close(self):
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    def __repr__(self) -> str:
        return f"ZipBundle({self.archive_path!r}, prefix={self.prefix!r})"


# ==============================================================================
# FACTORY
# ==============================================================================
def open_bundle(path: str, prefix: str = "") -> AssetBundleReader:
    """
    Pick a reader for a bundle location.

    Directories become a DirectoryBundle; anything else is treated as a
    zip archive.

    Args:
        path:   Bundle directory or archive file
        prefix: Prefix applied to every entry name
    """
    if os.path.isdir(path):
        return DirectoryBundle(path, prefix)
    return ZipBundle(path, prefix)
