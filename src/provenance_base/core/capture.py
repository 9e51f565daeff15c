# SPDX-License-Identifier: MPL-2.0
"""Capture of provenance data from arbitrary objects.

Producers take part in provenance capture in one of two ways:

* by defining ``__provenance__`` on their own classes, or
* by registering a capture function for a class on a :class:`CaptureRegistry`,
  which also works for classes they do not own.

Either way the result must be a mapping of field names to values, or ``None``
when no provenance is known. What the fields mean is up to the producer.

Example::

    registry = CaptureRegistry()

    @registry.register(Dataset)
    def _dataset_provenance(ds):
        return {"source": ds.url, "rows": len(ds)}

    registry.capture(Dataset(...))  # StructuredData(source=..., rows=...)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from .exceptions import InvalidProvenanceDataError, RegistryFrozenError
from .models import StructuredData

logger = logging.getLogger(__name__)

CaptureFunc = Callable[[Any], Optional[Mapping]]


@runtime_checkable
class SupportsProvenance(Protocol):
    """Objects that describe their own provenance."""

    def __provenance__(self) -> Optional[Mapping]:
        ...


class CaptureRegistry:
    """Maps object types to capture functions.

    Registrations are looked up along the MRO of the object's class, so a
    function registered for a base class also covers its subclasses unless a
    more specific one exists. Registration is expected to happen during program
    initialization; call :meth:`freeze` before sharing the registry between
    threads.
    """

    def __init__(self) -> None:
        self._registry: Dict[type, CaptureFunc] = {}
        self._frozen = False

    def register(self, cls: type, func: Optional[CaptureFunc] = None) -> Any:
        """Register ``func`` as the capture function for ``cls``.

        Can be used directly or as a decorator::

            registry.register(MyType, capture_my_type)

            @registry.register(MyType)
            def capture_my_type(obj): ...
        """
        if func is None:

            def decorator(f: CaptureFunc) -> CaptureFunc:
                self.register(cls, f)
                return f

            return decorator

        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {cls.__qualname__}: registry is frozen",
                {"type": cls.__qualname__},
            )
        if not isinstance(cls, type):
            raise TypeError(f"Expected a class, got {cls!r}")

        self._registry[cls] = func
        logger.debug("Registered provenance capture for %s", cls.__qualname__)
        return func

    def freeze(self) -> None:
        """Reject any further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def registered_types(self) -> tuple:
        return tuple(self._registry)

    def __contains__(self, cls: object) -> bool:
        return cls in self._registry

    def dispatch(self, cls: type) -> Optional[CaptureFunc]:
        """Return the capture function that applies to instances of ``cls``."""
        for base in cls.__mro__:
            func = self._registry.get(base)
            if func is not None:
                return func
        return None

    def capture(self, obj: Any) -> Optional[StructuredData]:
        """Capture the provenance of ``obj``.

        Returns ``None`` when nothing is registered for ``obj`` and it does not
        define ``__provenance__``. Exceptions raised by the capture function
        propagate unchanged.
        """
        func = self.dispatch(type(obj))
        if func is not None:
            result = func(obj)
        elif isinstance(obj, SupportsProvenance) and not isinstance(obj, type):
            result = obj.__provenance__()
        else:
            return None

        if result is None:
            return None
        if not isinstance(result, Mapping):
            raise InvalidProvenanceDataError(
                f"Provenance capture for {type(obj).__qualname__} returned "
                f"{type(result).__name__}, expected a mapping or None",
                {"type": type(obj).__qualname__},
            )
        return StructuredData.coerce(result)


def provenance(obj: Any, registry: Optional[CaptureRegistry] = None) -> Optional[StructuredData]:
    """Capture the provenance of ``obj`` using ``registry``.

    Without a registry only ``__provenance__`` is consulted.
    """
    if registry is None:
        registry = CaptureRegistry()
    return registry.capture(obj)
