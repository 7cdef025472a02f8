"""brutus core: data model, format constants and validators.

This package is intentionally standalone and must not import
codecs/bundle/runtime/cli to avoid circular dependencies.
"""

from __future__ import annotations

from .model import (
    BUNDLE_FILE,
    ENTRY_POINT,
    FALLBACK_FILE,
    MAGIC,
    SOURCE_SUFFIX,
    VERSION_MAJOR,
    VERSION_MINOR,
    BundleHeader,
    EntryRecord,
    ModuleTable,
)
from .validate import (
    BundleError,
    BundleOverflowError,
    DecodeError,
    DecompressError,
    EntryError,
    EntryNameError,
    InvalidFlagError,
    MalformedHeaderError,
    TruncatedEntryError,
    UnsupportedVersionError,
    validate_header,
)

__all__ = [
    "BUNDLE_FILE",
    "ENTRY_POINT",
    "FALLBACK_FILE",
    "MAGIC",
    "SOURCE_SUFFIX",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "BundleHeader",
    "EntryRecord",
    "ModuleTable",
    "BundleError",
    "BundleOverflowError",
    "DecodeError",
    "DecompressError",
    "EntryError",
    "EntryNameError",
    "InvalidFlagError",
    "MalformedHeaderError",
    "TruncatedEntryError",
    "UnsupportedVersionError",
    "validate_header",
]
