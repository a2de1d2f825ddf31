"""
Tests for applying image styles.
"""

import logging

import pytest

from imgcdn.api.metadata_api import InMemoryMetadataStore
from imgcdn.domain.exceptions import ArgumentError, NotFoundError
from imgcdn.domain.types.image import ImageDescriptor
from imgcdn.domain.types.operation import OperationKind
from imgcdn.io.settings import DeliverySettings
from imgcdn.ops.context import TransformContext
from imgcdn.ops.encode import ParameterEncoder
from imgcdn.ops.pipeline import ImageStyle, Operation, apply_style, render_url


@pytest.fixture
def store():
    store = InMemoryMetadataStore()
    store.add(ImageDescriptor(width=1000, height=800, mime_type="image/png", attachment_id="abc123"))
    return store


@pytest.fixture
def encoder():
    return ParameterEncoder(DeliverySettings(_env_file=None))


def test_style_applies_effects_in_order(store, encoder):
    style = ImageStyle(
        name="teaser",
        effects=[
            Operation(OperationKind.RESIZE, {"width": 500, "height": 400}),
            Operation("crop", {"x": 50, "y": 40, "width": 100, "height": 80}),
        ],
    )
    context = apply_style(TransformContext("bf://SH123/at/abc123/photo.png", store, encoder), style)
    assert context.cdn_params == {
        "width": "100",
        "height": "80",
        "precrop": "200,160,x100,y80,safe",
    }


def test_unsupported_effects_are_skipped(store, encoder, caplog):
    style = ImageStyle(
        name="gray_thumb",
        effects=[
            Operation("desaturate", {"amount": 1}),
            Operation("scale_and_crop", {"width": 100, "height": 100}),
        ],
    )
    with caplog.at_level(logging.WARNING, logger="imgcdn.ops.pipeline"):
        url = render_url("bf://SH123/at/abc123/photo.png", style, store, encoder)
    assert "desaturate" in caplog.text
    assert url == (
        "https://cdn.bfldr.com/SH123/at/abc123/photo.jpg"
        "?width=100&height=100&precrop=800,800,x104,y0,safe"
    )


def test_invalid_effect_fails_the_derivative(store, encoder):
    style = ImageStyle(name="broken", effects=[Operation("resize", {"width": 0, "height": 10})])
    with pytest.raises(ArgumentError):
        render_url("bf://SH123/at/abc123/photo.png", style, store, encoder)


def test_missing_image_fails_the_derivative(store, encoder):
    style = ImageStyle(name="thumb", effects=[Operation("resize", {"width": 10, "height": 10})])
    with pytest.raises(NotFoundError):
        render_url("bf://SH123/at/missing/photo.png", style, store, encoder)


def test_empty_style(store, encoder):
    url = render_url("bf://SH123/at/abc123/photo.png", ImageStyle(name="original"), store, encoder)
    assert url == "https://cdn.bfldr.com/SH123/at/abc123/photo.jpg"


if __name__ == "__main__":
    pytest.main()
