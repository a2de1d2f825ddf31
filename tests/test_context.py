"""
Tests for the per-image transform context.
"""

import pytest

from imgcdn.api.metadata_api import InMemoryMetadataStore
from imgcdn.domain.exceptions import ArgumentError, NotFoundError
from imgcdn.domain.types.image import ImageDescriptor
from imgcdn.domain.types.operation import OperationKind
from imgcdn.ops.context import TransformContext
from imgcdn.ops.transforms.crop import Crop
from imgcdn.ops.transforms.registry import get_operation
from imgcdn.ops.transforms.resize import Resize

SOURCE = "bf://SH123/at/abc123/photo.png"


class CountingStore(InMemoryMetadataStore):

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = 0

    def fetch_dimensions(self, asset_ref):
        self.calls += 1
        return super().fetch_dimensions(asset_ref)


@pytest.fixture
def store():
    store = CountingStore()
    store.add(ImageDescriptor(width=1000, height=800, mime_type="image/png", attachment_id="abc123"))
    return store


@pytest.fixture
def context(store):
    return TransformContext(SOURCE, store)


def test_descriptor_is_loaded_lazily_once(context, store):
    assert store.calls == 0
    assert not context.is_loaded
    assert context.get_width() == 1000
    assert context.get_height() == 800
    assert context.size == (1000, 800)
    assert store.calls == 1
    assert context.descriptor.source_ref == SOURCE
    assert context.get_mime_type() == "image/png"


def test_missing_attachment_raises_not_found(store):
    context = TransformContext("bf://SH123/at/missing/photo.png", store)
    assert not context.is_valid()
    with pytest.raises(NotFoundError):
        context.get_width()
    with pytest.raises(NotFoundError):
        context.apply(OperationKind.RESIZE, {"width": 10, "height": 10})
    assert context.cdn_params == {}
    assert context.operation_log == ()


def test_failed_lookup_is_not_repeated(store):
    context = TransformContext("bf://SH123/at/missing/photo.png", store)
    assert not context.is_valid()
    for _ in range(3):
        with pytest.raises(NotFoundError):
            context.get_width()
    with pytest.raises(NotFoundError):
        context.apply("crop", {"x": 0, "y": 0, "width": 10})
    assert not context.is_valid()
    assert store.calls == 1


def test_original_dimension_ignores_virtual_size(context):
    context.apply("resize", {"width": 100, "height": 50})
    assert context.size == (100, 50)
    assert context.original_dimension("width") == 1000
    assert context.original_dimension("height") == 800
    with pytest.raises(ValueError):
        context.original_dimension("depth")


def test_merge_params_last_write_wins(context):
    context.merge_params({"width": 10, "crop": "1,1,x0,y0,safe"})
    context.merge_params({"width": 20})
    assert context.cdn_params == {"width": "20", "crop": "1,1,x0,y0,safe"}


def test_cdn_params_returns_a_copy(context):
    context.merge_params({"width": 10})
    params = context.cdn_params
    params["width"] = "999"
    assert context.cdn_params["width"] == "10"


def test_record_operation_appends(context):
    context.record_operation(OperationKind.RESIZE, {"width": 10, "height": 10})
    context.record_operation("crop", {"x": 0, "y": 0, "width": 5, "height": 5})
    kinds = [record.kind for record in context.operation_log]
    assert kinds == [OperationKind.RESIZE, OperationKind.CROP]
    assert context.operation_log[1].validated_args["width"] == 5


def test_set_dimensions_rejects_empty_size(context):
    with pytest.raises(ValueError):
        context.set_dimensions(0, 10)
    context.set_dimensions(1, 1)
    assert context.size == (1, 1)


def test_unknown_operation_is_an_argument_error(context):
    with pytest.raises(ArgumentError):
        context.apply("blur", {"radius": 2})
    with pytest.raises(ArgumentError):
        get_operation("rotate")


def test_registry_covers_every_kind():
    assert isinstance(get_operation("resize"), Resize)
    assert isinstance(get_operation(OperationKind.CROP), Crop)
    for kind in OperationKind:
        assert get_operation(kind).kind == kind


if __name__ == "__main__":
    pytest.main()
