"""Naming conventions linking a union's discriminant to its variant enumerations.

The generator never verifies these names against the target package; the
convention is the whole contract. It is an injectable object so callers and
tests can swap it out.

Default convention (ngapType style):
    present constant for field ``Transport``      -> ``CausePresentTransport``
    label for ``CauseTransportPresentXyz`` on it  -> ``"Transport : Xyz"``
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

DEFAULT_MARKER = "Present"
DEFAULT_DISCRIMINANT_PREFIX = "CausePresent"

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')


def snake_case(name: str) -> str:
    """CamelCase / mixedCase -> snake_case (``RadioNetwork`` -> ``radio_network``)."""
    return _CAMEL_BOUNDARY.sub('_', name).lower()


@runtime_checkable
class NamingConvention(Protocol):
    def present_constant(self, field_name: str) -> str: ...

    def label(self, field_name: str, constant_name: str) -> str | None: ...


@dataclass(frozen=True)
class PresentNamingConvention:
    marker: str = DEFAULT_MARKER
    discriminant_prefix: str = DEFAULT_DISCRIMINANT_PREFIX

    def present_constant(self, field_name: str) -> str:
        return f"{self.discriminant_prefix}{field_name}"

    def label(self, field_name: str, constant_name: str) -> str | None:
        """Return ``"<field> : <suffix>"`` or None when the marker is absent."""
        _, sep, suffix = constant_name.partition(self.marker)
        if not sep:
            return None
        return f"{field_name} : {suffix}"


__all__ = [
    "DEFAULT_MARKER",
    "DEFAULT_DISCRIMINANT_PREFIX",
    "NamingConvention",
    "PresentNamingConvention",
    "snake_case",
]
