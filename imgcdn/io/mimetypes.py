"""
Mime type lookups used to decide the delivered file format.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

DEFAULT_MAPPING: Dict[str, str] = {
    "image/gif": "gif",
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/svg+xml": "svg",
    "image/tiff": "tiff",
    "image/webp": "webp",
}

EXTENSION_ALIASES: Dict[str, str] = {
    "jpe": "jpg",
    "jpeg": "jpg",
    "tif": "tiff",
}


class MimeTypeTable:
    """
    Explicit mime type <-> extension lookup.

    The host application builds one table and hands it to every encoder that
    needs it, so overrides stay local to that host.
    """

    def __init__(self, mapping: Optional[Mapping[str, str]] = None):
        self._mapping: Dict[str, str] = dict(DEFAULT_MAPPING)
        if mapping:
            self._mapping.update({k.lower(): v.lower() for k, v in mapping.items()})
        self._reverse: Dict[str, str] = {}
        for mime_type, extension in self._mapping.items():
            self._reverse.setdefault(extension, mime_type)

    @staticmethod
    def normalize_extension(extension: str) -> str:
        extension = extension.lower().lstrip(".")
        return EXTENSION_ALIASES.get(extension, extension)

    def extension_for(self, mime_type: Optional[str]) -> Optional[str]:
        if not mime_type:
            return None
        mime_type = mime_type.split(";", 1)[0].strip().lower()
        return self._mapping.get(mime_type)

    def mime_type_for(self, extension: Optional[str]) -> Optional[str]:
        if not extension:
            return None
        return self._reverse.get(self.normalize_extension(extension))

    def __contains__(self, mime_type: str) -> bool:
        return self.extension_for(mime_type) is not None

    def __len__(self) -> int:
        return len(self._mapping)
