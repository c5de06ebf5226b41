"""Abstract build connector — live mirror of accepted registrations.

WHY: Besides writing configuration files at the end of a session, the
collector can feed a running native-image build directly. Whatever sits
on the other side (an HTTP endpoint, an in-process feature, a test
double) must see exactly the registrations the collector accepted.

HOW: Connector is an ABC with one notification method per public
registration operation of ConfigurationCollector. The collector calls
exactly one of them per accepted operation, after its own merge.

RULES:
- Called only for accepted registrations (never for rejected proxies or
  silently dropped class descriptors)
- Arguments are the accepted values: the original ClassDescriptor, the
  filtered ReflectionDescriptor, the full ordered proxy interface list
- register_resource() receives a fresh binary stream over the bytes
- Exceptions propagate to the collector's caller; the in-memory merge
  has already happened and is not rolled back

To add a new connector:
1. Subclass Connector
2. Implement every abstract method
3. Pass an instance to ConfigurationCollector(connector=...) or
   ConfigurationCollector.set_connector()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, List, Sequence

from aot_collector.core.descriptors import (
    ClassDescriptor,
    ReflectionDescriptor,
    ResourcesDescriptor,
)


class Connector(ABC):
    """Receives every accepted registration from the collector."""

    @abstractmethod
    def add_class_descriptor(self, class_descriptor: ClassDescriptor) -> None:
        """A single class descriptor passed type verification."""

    @abstractmethod
    def add_reflection_descriptor(self, reflection_descriptor: ReflectionDescriptor) -> None:
        """A bulk reflection registration, already filtered."""

    @abstractmethod
    def add_proxy(self, interface_names: List[str]) -> None:
        """A proxy over ``interface_names`` (order significant)."""

    @abstractmethod
    def add_resources_descriptor(self, resources_descriptor: ResourcesDescriptor) -> None:
        ...

    @abstractmethod
    def add_resource(self, pattern: str, is_bundle: bool) -> None:
        ...

    @abstractmethod
    def register_resource(self, name: str, stream: BinaryIO) -> None:
        """A generated resource; ``stream`` reads the resource bytes."""

    @abstractmethod
    def initialize_at_build_time(self, names: Sequence[str]) -> None:
        ...

    @abstractmethod
    def initialize_at_run_time(self, names: Sequence[str]) -> None:
        ...

    @abstractmethod
    def initialize_at_build_time_packages(self, names: Sequence[str]) -> None:
        ...

    @abstractmethod
    def initialize_at_run_time_packages(self, names: Sequence[str]) -> None:
        ...
