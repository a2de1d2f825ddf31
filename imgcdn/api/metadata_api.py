from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional

import requests
from pydantic import ValidationError

from imgcdn.api._api import _Api
from imgcdn.domain.exceptions import NotFoundError
from imgcdn.domain.types.image import ImageDescriptor
from imgcdn.io.settings import DeliverySettings
from imgcdn.io.url import parse_asset_uri


def _attachment_id(asset_ref: str) -> Optional[str]:
    """Accepts either a bf:// URI or a bare attachment id."""
    if "://" not in asset_ref:
        return asset_ref or None
    asset_uri = parse_asset_uri(asset_ref)
    return asset_uri.attachment_id if asset_uri else None


class MetadataStore(ABC):
    """Source of stored image dimensions for attachments."""

    @abstractmethod
    def fetch_dimensions(self, asset_ref: str) -> Optional[ImageDescriptor]:
        """Return the descriptor for ``asset_ref`` or None when it is unknown."""


class InMemoryMetadataStore(MetadataStore):

    def __init__(self, descriptors: Optional[Dict[str, ImageDescriptor]] = None):
        self._descriptors: Dict[str, ImageDescriptor] = dict(descriptors or {})

    def add(self, descriptor: ImageDescriptor) -> None:
        if descriptor.attachment_id is None:
            raise ValueError("Descriptor must have an attachment id to be stored.")
        self._descriptors[descriptor.attachment_id] = descriptor

    def fetch_dimensions(self, asset_ref: str) -> Optional[ImageDescriptor]:
        attachment_id = _attachment_id(asset_ref)
        if attachment_id is None:
            return None
        descriptor = self._descriptors.get(attachment_id)
        if descriptor is None:
            return None
        return descriptor.model_copy(update={"source_ref": asset_ref})


class AttachmentApi(MetadataStore):
    """Looks attachments up on the remote asset API."""

    def __init__(self, api: _Api):
        self._api = api

    @classmethod
    def from_settings(cls, settings: Optional[DeliverySettings] = None) -> "AttachmentApi":
        settings = settings or DeliverySettings()
        settings.validate_credentials()
        api = _Api(
            server_address=settings.API_URL,
            token=settings.API_KEY.get_secret_value(),
            retry_count=settings.API_RETRY_COUNT,
            retry_sleep_sec=settings.API_RETRY_SLEEP_SEC,
        )
        return cls(api)

    def _endpoint_prefix(self) -> str:
        return "attachments"

    def fetch_dimensions(self, asset_ref: str) -> Optional[ImageDescriptor]:
        attachment_id = _attachment_id(asset_ref)
        if attachment_id is None:
            return None
        try:
            response = self._api.get(
                method=f"{self._endpoint_prefix()}/{attachment_id}",
                params={"fields": "width,height,mimetype,size"},
            )
            payload = response.json()
        except requests.exceptions.HTTPError as error:
            if error.response is not None and error.response.status_code == 404:
                return None
            raise NotFoundError(f"Lookup of attachment {attachment_id!r} failed: {error}") from error
        except (requests.exceptions.RequestException, ValueError) as error:
            raise NotFoundError(f"Lookup of attachment {attachment_id!r} failed: {error}") from error

        data = payload.get("data") if isinstance(payload, dict) else None
        attributes = (data if isinstance(data, dict) else {}).get("attributes") or {}
        if not isinstance(attributes, dict) or not attributes.get("width") or not attributes.get("height"):
            return None
        try:
            return ImageDescriptor(
                width=attributes["width"],
                height=attributes["height"],
                mime_type=attributes.get("mimetype"),
                filesize=attributes.get("size"),
                attachment_id=attachment_id,
                source_ref=asset_ref,
            )
        except ValidationError as error:
            raise NotFoundError(
                f"Attachment {attachment_id!r} has unusable image data: {error}"
            ) from error
