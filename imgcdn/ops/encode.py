"""
Serializes accumulated transform parameters into a delivery URL.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Mapping, Optional
from urllib.parse import parse_qsl, urlencode

from imgcdn.io.mimetypes import MimeTypeTable
from imgcdn.io.settings import DeliverySettings
from imgcdn.io.url import get_extension, replace_extension, split_style, strip_scheme

if TYPE_CHECKING:
    from imgcdn.ops.context import TransformContext


class ParameterEncoder:
    """
    Builds ``<CDN_BASE_URL>/<asset path>?<params>`` URLs.

    Query parameters are layered in this order, later ones winning on key
    conflicts: admin hints from ``EXTRA_PARAMS``, transform parameters, then
    whatever query the asset path already carries.
    """

    def __init__(
        self,
        settings: Optional[DeliverySettings] = None,
        mime_types: Optional[MimeTypeTable] = None,
    ):
        self._settings = settings or DeliverySettings()
        self._mime_types = mime_types or MimeTypeTable()

    @property
    def settings(self) -> DeliverySettings:
        return self._settings

    def encode(self, context: "TransformContext") -> str:
        # Only use the mime type when it is already known; encoding never triggers a lookup.
        mime_type = context.descriptor.mime_type if context.is_loaded else None
        return self.build_url(context.source_ref, context.cdn_params, mime_type=mime_type)

    def build_url(
        self,
        source_ref: str,
        params: Mapping[str, str],
        mime_type: Optional[str] = None,
    ) -> str:
        _, path = split_style(strip_scheme(source_ref))
        path, _, original_query = path.partition("?")
        path = self.normalize_extension(path, mime_type)

        query_params: Dict[str, str] = dict(self._settings.EXTRA_PARAMS)
        query_params.update({key: str(value) for key, value in params.items()})
        query_params.update(parse_qsl(original_query, keep_blank_values=True))

        url = f"{self._settings.CDN_BASE_URL}/{path.lstrip('/')}"
        if query_params:
            url = f"{url}?{urlencode(query_params, safe=',')}"
        return url

    def is_passthrough(self, extension: Optional[str], mime_type: Optional[str] = None) -> bool:
        """Animated and vector formats are delivered as they are."""
        passthrough = set(self._settings.PASSTHROUGH_FORMATS)
        if extension and self._mime_types.normalize_extension(extension) in passthrough:
            return True
        mime_extension = self._mime_types.extension_for(mime_type)
        return mime_extension is not None and mime_extension in passthrough

    def normalize_extension(self, path: str, mime_type: Optional[str] = None) -> str:
        """Swaps the path's extension for the default delivery format, if any."""
        default_format = self._settings.DEFAULT_FORMAT
        if not default_format:
            return path
        extension = get_extension(path)
        if extension is None or extension == default_format:
            return path
        if self.is_passthrough(extension, mime_type):
            return path
        return replace_extension(path, default_format)
