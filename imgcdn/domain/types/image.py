from typing import Optional

from pydantic import Field, field_validator

from imgcdn.domain.types.base import BaseInfo


class ImageDescriptor(BaseInfo):
    """Stored facts about one image attachment. Never changes once loaded."""

    width: int = Field(..., description="Original width in pixels")
    height: int = Field(..., description="Original height in pixels")
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    source_ref: Optional[str] = Field(default=None, alias="sourceRef")
    attachment_id: Optional[str] = Field(default=None, alias="attachmentId")
    filesize: Optional[int] = None

    @field_validator("width", "height")
    def validate_dimension(cls, v):
        if v <= 0:
            raise ValueError("Image dimensions must be positive.")
        return v
