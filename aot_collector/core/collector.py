"""Centralized collector of all computed native-image configuration.

WHY: Many scanners contribute reflection, proxy, resource, and
initialization hints during one build. Each hint must be checked against
the type system, narrowed or rejected when invalid, merged into one
consistent set of descriptors, and optionally mirrored to a live build
engine. ConfigurationCollector is the single entry point for all of it.

HOW: Each registration method runs verify → merge → forward while
holding one lock, so concurrent scanners cannot interleave halfway
through a registration. TypeVerifier does the checks, DescriptorStore
holds the state, and the optional Connector is notified through a single
_forward() call per operation. The properties formatter renders the
initialization descriptor at the end of the session.

RULES:
- add_class_descriptor: unknown/invalid type → silently dropped;
  members that fail verification → downgraded to a name-only
  descriptor; the connector receives the ORIGINAL descriptor
- add_reflection_descriptor: invalid types dropped, failing members
  downgraded; the connector and the caller receive the filtered result;
  the input is reused untouched when nothing needed filtering
- add_proxy(verify=True): all names must be existing interfaces, or the
  whole registration is rejected (nothing merged, nothing forwarded)
- Resources are never type-checked
- Downgrades strip every flag, not just the constructor flags
- A name in both a build-time and a run-time set is allowed but logged
  as a warning
- Connector errors propagate after the merge; the merge is kept
"""

from __future__ import annotations

import io
import logging
import threading
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Union

from aot_collector.config import AotOptions
from aot_collector.connectors.base import Connector
from aot_collector.core.descriptors import (
    ClassDescriptor,
    InitializationDescriptor,
    ProxiesDescriptor,
    ProxyDescriptor,
    ReflectionDescriptor,
    ResourcesDescriptor,
)
from aot_collector.core.store import DescriptorStore
from aot_collector.core.types import Type, TypeSystem
from aot_collector.core.verifier import TypeVerifier, is_existing_interface
from aot_collector.formatters.native_image import (
    native_image_properties_stream,
    render_native_image_properties,
    write_native_image_properties,
)

logger = logging.getLogger(__name__)

TypeRef = Union[str, Type, Iterable[Union[str, Type]]]
"""A type name, a resolved Type, or a list of either."""


def _dotted_names(items: Iterable[TypeRef]) -> List[str]:
    """Flatten names, Types, and lists of them into dotted names."""
    names: List[str] = []
    for item in items:
        if isinstance(item, str):
            names.append(item)
        elif hasattr(item, "dotted_name"):
            names.append(item.dotted_name)
        else:
            names.extend(_dotted_names(item))
    return names


class ConfigurationCollector:
    """Aggregates, verifies, and mirrors native-image configuration.

    WHY: One owned aggregate per build session keeps the accept/reject
    policy, the accumulated descriptors, and the live mirror consistent
    with each other.

    HOW: Wraps a DescriptorStore and a TypeVerifier. All public
    mutators acquire self._lock (an RLock) for their full verify →
    merge → forward sequence.

    RULES:
    - options default to AotOptions.from_env()
    - The type system and connector may be attached after construction
    - Read accessors return the live descriptors, not copies
    """

    def __init__(
        self,
        options: Optional[AotOptions] = None,
        type_system: Optional[TypeSystem] = None,
        connector: Optional[Connector] = None,
    ) -> None:
        self.options = options or AotOptions.from_env()
        self.store = DescriptorStore()
        self._verifier = TypeVerifier(type_system, self.options)
        self._connector = connector
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def set_type_system(self, type_system: TypeSystem) -> None:
        with self._lock:
            self._verifier.type_system = type_system

    def set_connector(self, connector: Optional[Connector]) -> None:
        with self._lock:
            self._connector = connector

    @property
    def verifier(self) -> TypeVerifier:
        return self._verifier

    def _forward(self, method: str, *args) -> None:
        """Notify the attached connector, if any. The only forwarding point."""
        if self._connector is not None:
            getattr(self._connector, method)(*args)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def reflection_descriptor(self) -> ReflectionDescriptor:
        return self.store.reflection

    @property
    def resources_descriptor(self) -> ResourcesDescriptor:
        return self.store.resources

    @property
    def proxies_descriptor(self) -> ProxiesDescriptor:
        return self.store.proxies

    @property
    def initialization_descriptor(self) -> InitializationDescriptor:
        return self.store.initialization

    def get_resource(self, name: str) -> Optional[bytes]:
        """Bytes registered via register_resource(), or None."""
        with self._lock:
            return self.store.get_resource(name)

    # ------------------------------------------------------------------
    # Reflection
    # ------------------------------------------------------------------

    def _verified(self, class_descriptor: ClassDescriptor) -> Optional[ClassDescriptor]:
        """Apply the verify/downgrade policy to one descriptor.

        Returns None when the type fails verification, a name-only
        descriptor when its members fail, otherwise the descriptor itself.
        """
        if not self._verifier.verify_type(class_descriptor.name):
            return None
        if class_descriptor.members_specified() and not self._verifier.verify_members(class_descriptor):
            logger.debug("Stripped down to a base class descriptor for %s", class_descriptor.name)
            return ClassDescriptor.of(class_descriptor.name)
        return class_descriptor

    def add_class_descriptor(self, class_descriptor: ClassDescriptor) -> Optional[ClassDescriptor]:
        """Verify and merge a single class descriptor.

        WHY: Scanners register types one at a time as they find them.

        HOW: Runs the verify/downgrade policy, merges the survivor into
        the reflection descriptor, then forwards the original descriptor.

        RULES:
        - Unknown or invalid type → returns None, nothing merged or forwarded
        - Failing members → a name-only descriptor is merged
        - The connector always receives the caller's original descriptor

        Returns:
            The descriptor that was merged, or None if it was dropped.
        """
        with self._lock:
            accepted = self._verified(class_descriptor)
            if accepted is None:
                return None
            self.store.reflection.merge(accepted)
            self._forward("add_class_descriptor", class_descriptor)
            return accepted

    def add_reflection_descriptor(self, reflection_descriptor: ReflectionDescriptor) -> ReflectionDescriptor:
        """Verify, filter, and merge a bulk reflection registration.

        WHY: Hint processors hand over whole reflection configurations at
        once; a single bad entry must not poison the rest.

        HOW: Runs the verify/downgrade policy per entry. If any entry was
        dropped or downgraded, a new ReflectionDescriptor is built from
        the survivors; otherwise the input is reused as-is. The result is
        merged, forwarded, and returned.

        RULES:
        - Entries failing type verification are dropped
        - Entries failing member verification are downgraded and kept
        - The input descriptor is never modified
        """
        with self._lock:
            any_failed = False
            verified: List[ClassDescriptor] = []
            for class_descriptor in reflection_descriptor.class_descriptors:
                accepted = self._verified(class_descriptor)
                if accepted is None:
                    any_failed = True
                    continue
                if accepted is not class_descriptor:
                    any_failed = True
                verified.append(accepted)

            filtered = ReflectionDescriptor(verified) if any_failed else reflection_descriptor
            self.store.reflection.merge(filtered)
            self._forward("add_reflection_descriptor", filtered)
            return filtered

    # ------------------------------------------------------------------
    # Proxies
    # ------------------------------------------------------------------

    def add_proxy(self, interface_names: List[str], verify: bool = True) -> bool:
        """Register a dynamic proxy over ``interface_names``.

        RULES:
        - verify=True: every name must resolve to an interface, else the
          whole registration is rejected and False is returned
        - Interface order is preserved
        """
        with self._lock:
            names = list(interface_names)
            if verify and not self._verifier.check_types(names, is_existing_interface):
                return False
            self.store.proxies.add(ProxyDescriptor.of(names))
            self._forward("add_proxy", names)
            return True

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def add_resources_descriptor(self, resources_descriptor: ResourcesDescriptor) -> None:
        with self._lock:
            self.store.resources.merge(resources_descriptor)
            self._forward("add_resources_descriptor", resources_descriptor)

    def add_resource(self, pattern: str, is_bundle: bool = False) -> None:
        with self._lock:
            if is_bundle:
                self.store.resources.add_bundle(pattern)
            else:
                self.store.resources.add(pattern)
            self._forward("add_resource", pattern, is_bundle)

    def register_resource(self, name: str, data: bytes) -> None:
        """Register a generated resource file and keep its contents.

        RULES:
        - ``name`` is added as a plain resource pattern
        - Re-registering a name replaces the stored bytes
        - The connector receives a fresh BytesIO over ``data``
        """
        with self._lock:
            self.store.resources.add(name)
            self.store.resource_files[name] = data
            self._forward("register_resource", name, io.BytesIO(data))

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def _warn_conflicts(self, names: List[str], others: List[str], phase: str) -> None:
        for name in names:
            if name in others:
                logger.warning(
                    "%s is registered for initialization at both build time and run time "
                    "(latest request: %s)",
                    name,
                    phase,
                )

    def initialize_at_build_time(self, *types: TypeRef) -> None:
        """Pin classes to build-time initialization.

        Accepts names, resolved Types, or lists of either.
        """
        names = _dotted_names(types)
        with self._lock:
            self._warn_conflicts(names, self.store.initialization.runtime_classes, "build time")
            for name in names:
                self.store.initialization.add_buildtime_class(name)
            self._forward("initialize_at_build_time", tuple(names))

    def initialize_at_run_time(self, *types: TypeRef) -> None:
        """Defer class initialization to run time. Same arguments as above."""
        names = _dotted_names(types)
        with self._lock:
            self._warn_conflicts(names, self.store.initialization.buildtime_classes, "run time")
            for name in names:
                self.store.initialization.add_runtime_class(name)
            self._forward("initialize_at_run_time", tuple(names))

    def initialize_at_build_time_packages(self, *package_names: str) -> None:
        names = _dotted_names(package_names)
        with self._lock:
            self._warn_conflicts(names, self.store.initialization.runtime_packages, "build time")
            for name in names:
                self.store.initialization.add_buildtime_package(name)
            self._forward("initialize_at_build_time_packages", tuple(names))

    def initialize_at_run_time_packages(self, *package_names: str) -> None:
        names = _dotted_names(package_names)
        with self._lock:
            self._warn_conflicts(names, self.store.initialization.buildtime_packages, "run time")
            for name in names:
                self.store.initialization.add_runtime_package(name)
            self._forward("initialize_at_run_time_packages", tuple(names))

    # ------------------------------------------------------------------
    # native-image.properties
    # ------------------------------------------------------------------

    def get_native_image_properties_content(self) -> str:
        with self._lock:
            return render_native_image_properties(self.store.initialization)

    def get_native_image_properties_stream(self) -> BinaryIO:
        with self._lock:
            return native_image_properties_stream(self.store.initialization)

    def write_native_image_properties(self, path: Union[str, Path]) -> Path:
        """Write native-image.properties to ``path``. OSError propagates."""
        with self._lock:
            return write_native_image_properties(self.store.initialization, path)
