"""Shared test fixtures for the aot_collector test suite.

WHY: Almost every test needs a type system to verify against and a
collector wired to it. Centralizing the fake type system here keeps the
verification policy testable without any real class path.

HOW: FakeType and FakeTypeSystem satisfy the Type/TypeSystem protocols
with plain attributes. The ``type_system`` fixture knows a small,
fixed catalogue of types; ``collector`` and ``connector`` build on it.

RULES:
- Names absent from the catalogue resolve to None (allow_absent=True)
- FakeType records the debug flag it was called with
- The connector fixture is a MagicMock constrained to the Connector ABC
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from aot_collector.config import AotOptions
from aot_collector.connectors.base import Connector
from aot_collector.core.collector import ConfigurationCollector


@dataclass
class FakeType:
    """In-memory stand-in for a resolved type."""

    dotted_name: str
    interface: bool = False
    type_ok: bool = True
    members_ok: bool = True
    debug_calls: List[bool] = field(default_factory=list)

    def is_interface(self) -> bool:
        return self.interface

    def verify_type(self, debug: bool) -> bool:
        self.debug_calls.append(debug)
        return self.type_ok

    def verify_members(self, debug: bool) -> bool:
        self.debug_calls.append(debug)
        return self.members_ok


class FakeTypeSystem:
    """Resolves names from a dict and counts lookups."""

    def __init__(self, *types: FakeType) -> None:
        self.types: Dict[str, FakeType] = {t.dotted_name: t for t in types}
        self.lookups: List[str] = []

    def add(self, fake_type: FakeType) -> FakeType:
        self.types[fake_type.dotted_name] = fake_type
        return fake_type

    def resolve_dotted(self, dotted_name: str, allow_absent: bool = True) -> Optional[FakeType]:
        self.lookups.append(dotted_name)
        found = self.types.get(dotted_name)
        if found is None and not allow_absent:
            raise LookupError(dotted_name)
        return found


# ---------------------------------------------------------------------------
# Catalogue used across the suite
# ---------------------------------------------------------------------------

GOOD_CLASS = "com.example.Service"
OTHER_CLASS = "com.example.Repository"
BROKEN_MEMBERS = "com.example.Legacy"          # exists, members fail
BROKEN_TYPE = "com.example.Unloadable"         # exists, type check fails
MISSING = "com.example.DoesNotExist"
IFACE_A = "com.example.api.Greeter"
IFACE_B = "com.example.api.Closeable"


@pytest.fixture
def type_system() -> FakeTypeSystem:
    return FakeTypeSystem(
        FakeType(GOOD_CLASS),
        FakeType(OTHER_CLASS),
        FakeType(BROKEN_MEMBERS, members_ok=False),
        FakeType(BROKEN_TYPE, type_ok=False),
        FakeType(IFACE_A, interface=True),
        FakeType(IFACE_B, interface=True),
    )


@pytest.fixture
def options() -> AotOptions:
    return AotOptions(debug_verify=False)


@pytest.fixture
def connector() -> MagicMock:
    return MagicMock(spec=Connector)


@pytest.fixture
def collector(type_system, options) -> ConfigurationCollector:
    """Collector with the fake type system and no connector."""
    return ConfigurationCollector(options=options, type_system=type_system)


@pytest.fixture
def connected_collector(type_system, options, connector) -> ConfigurationCollector:
    """Collector with the fake type system and a mock connector attached."""
    return ConfigurationCollector(options=options, type_system=type_system, connector=connector)
