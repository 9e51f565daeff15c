"""Tests for the capture registry."""

from dataclasses import dataclass

import pytest

from provenance_base.core.capture import CaptureRegistry, SupportsProvenance, provenance
from provenance_base.core.exceptions import InvalidProvenanceDataError, RegistryFrozenError
from provenance_base.core.models import StructuredData


@dataclass
class Dataset:
    url: str
    rows: int


@dataclass
class FilteredDataset(Dataset):
    predicate: str


class SelfDescribing:
    def __init__(self, version: int) -> None:
        self.version = version

    def __provenance__(self):
        return {"version": self.version}


class TestCaptureRegistry:
    """Test cases for CaptureRegistry."""

    @pytest.fixture
    def registry(self):
        registry = CaptureRegistry()

        @registry.register(Dataset)
        def _dataset(ds):
            return {"url": ds.url, "rows": ds.rows}

        return registry

    def test_unregistered_object_has_no_provenance(self, registry) -> None:
        assert registry.capture([1]) is None
        assert registry.capture(object()) is None

    def test_registered_capture(self, registry) -> None:
        data = registry.capture(Dataset("s3://bucket/x.csv", 10))
        assert isinstance(data, StructuredData)
        assert data == {"url": "s3://bucket/x.csv", "rows": 10}

    def test_subclass_uses_base_registration(self, registry) -> None:
        data = registry.capture(FilteredDataset("s3://bucket/x.csv", 5, "a > 1"))
        assert data == {"url": "s3://bucket/x.csv", "rows": 5}

    def test_most_specific_registration_wins(self, registry) -> None:
        registry.register(FilteredDataset, lambda ds: {"predicate": ds.predicate})
        data = registry.capture(FilteredDataset("s3://bucket/x.csv", 5, "a > 1"))
        assert data == {"predicate": "a > 1"}
        assert registry.dispatch(Dataset) is not registry.dispatch(FilteredDataset)

    def test_dunder_provenance_fallback(self, registry) -> None:
        obj = SelfDescribing(3)
        assert isinstance(obj, SupportsProvenance)
        assert registry.capture(obj) == {"version": 3}

    def test_registration_overrides_dunder(self, registry) -> None:
        registry.register(SelfDescribing, lambda obj: {"registered": True})
        assert registry.capture(SelfDescribing(3)) == {"registered": True}

    def test_class_object_is_not_captured(self, registry) -> None:
        assert registry.capture(SelfDescribing) is None

    def test_capture_returning_none(self, registry) -> None:
        registry.register(int, lambda value: None)
        assert registry.capture(5) is None

    def test_invalid_capture_result(self, registry) -> None:
        registry.register(int, lambda value: [value])
        with pytest.raises(InvalidProvenanceDataError):
            registry.capture(5)

    def test_capture_errors_propagate(self, registry) -> None:
        class Boom(RuntimeError):
            pass

        def _fail(value):
            raise Boom("capture failed")

        registry.register(int, _fail)
        with pytest.raises(Boom):
            registry.capture(5)

    def test_freeze(self, registry) -> None:
        registry.freeze()
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(int, lambda value: {"value": value})
        assert registry.capture(Dataset("u", 1)) == {"url": "u", "rows": 1}

    def test_registered_types(self, registry) -> None:
        assert Dataset in registry
        assert registry.registered_types == (Dataset,)

    def test_register_requires_class(self, registry) -> None:
        with pytest.raises(TypeError):
            registry.register("Dataset", lambda obj: {})  # type: ignore[arg-type]


def test_provenance_without_registry() -> None:
    assert provenance(SelfDescribing(1)) == {"version": 1}
    assert provenance(Dataset("u", 1)) is None
