"""
Public package interface for imgcdn.

Image style operations are turned into delivery-service URL parameters
instead of being applied to pixels. A `TransformContext` tracks the virtual
dimensions of one image; `ParameterEncoder` renders its final URL.
"""

from __future__ import annotations

from imgcdn.api.metadata_api import AttachmentApi, InMemoryMetadataStore, MetadataStore
from imgcdn.domain.exceptions import (
    ArgumentError,
    ImgCdnError,
    NotFoundError,
    UnsupportedOperationError,
)
from imgcdn.domain.types.image import ImageDescriptor
from imgcdn.domain.types.operation import OperationKind, OperationRecord
from imgcdn.io.mimetypes import MimeTypeTable
from imgcdn.io.settings import DeliverySettings
from imgcdn.io.url import AssetUri, parse_asset_uri
from imgcdn.ops.context import TransformContext
from imgcdn.ops.encode import ParameterEncoder
from imgcdn.ops.pipeline import ImageStyle, Operation, apply_style, render_url

__all__ = [
    "ArgumentError",
    "AssetUri",
    "AttachmentApi",
    "DeliverySettings",
    "ImageDescriptor",
    "ImageStyle",
    "ImgCdnError",
    "InMemoryMetadataStore",
    "MetadataStore",
    "MimeTypeTable",
    "NotFoundError",
    "Operation",
    "OperationKind",
    "OperationRecord",
    "ParameterEncoder",
    "TransformContext",
    "UnsupportedOperationError",
    "apply_style",
    "parse_asset_uri",
    "render_url",
]
