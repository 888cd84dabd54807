# ==============================================================================
# XZ DECOMPRESSION
# ==============================================================================
# In-place decompression of a ".xz" file next to its final location.
#
#   geoip.dat.xz  ->  geoip.dat.tmp  ->  (rename)  geoip.dat
#
# The decompressed data is written to a temporary sibling and renamed over
# the target only once complete, so the final file is never half-written.
# The compressed input is removed on success.
# ==============================================================================

import os
import lzma
import shutil

from ..core.resources import COMPRESSED_SUFFIX


# Chunk size for streaming decompression (256KB)
CHUNK_SIZE = 262144

TEMP_SUFFIX = ".tmp"


def decompressed_path(path: str) -> str:
    """Strip the compression suffix from a path."""
    if not path.endswith(COMPRESSED_SUFFIX):
        raise ValueError(f"not an {COMPRESSED_SUFFIX} path: {path}")
    return path[:-len(COMPRESSED_SUFFIX)]


def decompress_xz(path: str) -> str:
    """
    Decompress an .xz file in place.

    Args:
        path: Path to the compressed file (must end in .xz)

    Returns:
        Path of the decompressed file (path without the .xz suffix)

    Raises:
        OSError:         On any filesystem failure
        lzma.LZMAError:  If the input is not valid xz data
    """
    target = decompressed_path(path)
    temp = target + TEMP_SUFFIX

    try:
        with lzma.open(path, 'rb') as src, open(temp, 'wb') as dst:
            shutil.copyfileobj(src, dst, CHUNK_SIZE)
            dst.flush()
            os.fsync(dst.fileno())
        os.replace(temp, target)
    except BaseException:
        if os.path.exists(temp):
            os.remove(temp)
        raise

    os.remove(path)
    return target
