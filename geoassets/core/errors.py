# ==============================================================================
# GEOASSETS - ERROR TYPES
# ==============================================================================
# Exception hierarchy shared by the provisioning and resolver layers.
#
#   AssetError
#     ├── BundleEntryNotFound      (also a FileNotFoundError)
#     ├── VersionMarkerUnreadable
#     ├── ExtractionIOFailure
#     └── ResolverNotFound         (also a FileNotFoundError)
#
# Provisioning errors are caught per resource by the provisioner.
# Resolver errors propagate to whoever asked for the file.
# ==============================================================================


class AssetError(Exception):
    """Base class for all asset provisioning errors."""


class BundleEntryNotFound(AssetError, FileNotFoundError):
    """
    A requested entry does not exist in the asset bundle.

    Attributes:
        entry_name: Full name of the missing bundle entry
    """

    def __init__(self, entry_name: str, message: str = None):
        self.entry_name = entry_name
        super().__init__(message or f"open {entry_name} in assets")


class VersionMarkerUnreadable(AssetError):
    """An on-disk version marker exists but could not be read."""

    def __init__(self, path: str, message: str = None):
        self.path = path
        super().__init__(message or f"read version marker {path}")


class ExtractionIOFailure(AssetError):
    """Copying, decompressing or stamping a resource failed."""

    def __init__(self, path: str, message: str = None):
        self.path = path
        super().__init__(message or f"extract {path}")


class ResolverNotFound(AssetError, FileNotFoundError):
    """No candidate location holds the requested logical file."""

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"{file_name} not found in any asset directory")
