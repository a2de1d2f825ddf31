"""
Tests for the unsupported desaturate operation.
"""

import pytest

from imgcdn.api.metadata_api import InMemoryMetadataStore
from imgcdn.domain.exceptions import UnsupportedOperationError
from imgcdn.domain.types.image import ImageDescriptor
from imgcdn.ops.context import TransformContext


@pytest.fixture
def context():
    store = InMemoryMetadataStore()
    store.add(ImageDescriptor(width=1000, height=800, mime_type="image/jpeg", attachment_id="abc123"))
    return TransformContext("bf://SH123/at/abc123/photo.jpg", store)


def test_desaturate_is_unsupported(context):
    with pytest.raises(UnsupportedOperationError):
        context.apply("desaturate")
    assert context.cdn_params == {}
    assert context.operation_log == ()


def test_desaturate_ignores_style_settings(context):
    with pytest.raises(UnsupportedOperationError):
        context.apply("desaturate", {"amount": 1})
    assert context.cdn_params == {}
    assert context.operation_log == ()
    assert not context.is_loaded


def test_desaturate_keeps_earlier_state(context):
    context.apply("resize", {"width": 500, "height": 400})
    url = context.get_delivery_url()
    with pytest.raises(NotImplementedError):
        context.apply("desaturate", {})
    assert context.cdn_params == {"width": "500", "height": "400"}
    assert context.size == (500, 400)
    assert len(context.operation_log) == 1
    assert context.get_delivery_url() == url


if __name__ == "__main__":
    pytest.main()
