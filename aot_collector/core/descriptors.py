"""Descriptor dataclasses for native-image configuration.

WHY: The native-image builder needs to be told, ahead of time, which
types and members stay reflectively accessible, which proxies to
generate, which resources to bundle, and which classes initialize at
build time versus run time. Scanners produce these facts one at a time;
the descriptors give them a single, well-typed shape that the
collector merges and the formatters and connectors consume.

HOW: One dataclass per descriptor kind:
  ClassDescriptor          — one type plus its methods, fields and flags
  ReflectionDescriptor     — ClassDescriptors keyed by type name
  ResourcesDescriptor      — plain resource patterns and bundle names
  ProxyDescriptor          — one ordered list of proxy interfaces
  ProxiesDescriptor        — ordered collection of ProxyDescriptors
  InitializationDescriptor — build-time/run-time classes and packages

RULES:
- Merging is a union keyed by identity (type name, pattern, name list)
- Entries are only added, never removed, so every merge is idempotent
- Insertion order is preserved everywhere (the properties file depends on it)
- A merged-in ClassDescriptor is copied, so callers' objects are never
  mutated by later merges
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple, Union


class Flag(str, enum.Enum):
    """Capability flags a ClassDescriptor can carry.

    Values are the native-image JSON keys, so they serialize as-is.
    """

    ALL_DECLARED_CONSTRUCTORS = "allDeclaredConstructors"
    ALL_PUBLIC_CONSTRUCTORS = "allPublicConstructors"
    ALL_DECLARED_METHODS = "allDeclaredMethods"
    ALL_PUBLIC_METHODS = "allPublicMethods"
    ALL_DECLARED_FIELDS = "allDeclaredFields"
    ALL_PUBLIC_FIELDS = "allPublicFields"
    ALL_DECLARED_CLASSES = "allDeclaredClasses"
    ALL_PUBLIC_CLASSES = "allPublicClasses"
    QUERY_ALL_DECLARED_METHODS = "queryAllDeclaredMethods"
    QUERY_ALL_PUBLIC_METHODS = "queryAllPublicMethods"
    QUERY_ALL_DECLARED_CONSTRUCTORS = "queryAllDeclaredConstructors"
    QUERY_ALL_PUBLIC_CONSTRUCTORS = "queryAllPublicConstructors"
    UNSAFE_ALLOCATED = "unsafeAllocated"


CONSTRUCTOR_FLAGS = frozenset({
    Flag.ALL_DECLARED_CONSTRUCTORS,
    Flag.ALL_PUBLIC_CONSTRUCTORS,
})
"""Flags that ask for constructors and therefore need member verification."""


@dataclass(frozen=True)
class MethodDescriptor:
    """One method (or constructor, named ``<init>``) kept for reflection."""

    name: str
    parameter_types: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FieldDescriptor:
    """One field kept for reflection."""

    name: str
    allow_write: bool = False
    allow_unsafe_access: bool = False


@dataclass
class ClassDescriptor:
    """Reflection configuration for a single type.

    WHY: Native-image needs each reflectively used type listed by name,
    optionally with the exact methods and fields to keep or with blanket
    flags such as "all declared constructors".

    HOW: Plain dataclass. ``merge()`` unions another descriptor for the
    same type into this one.

    RULES:
    - name: fully-qualified dotted type name, never empty
    - methods / fields: ordered, duplicates are not appended twice
    - flags: a set, duplicates collapse
    - "minimal" means no members and no constructor flag
    """

    name: str
    methods: List[MethodDescriptor] = field(default_factory=list)
    fields: List[FieldDescriptor] = field(default_factory=list)
    flags: Set[Flag] = field(default_factory=set)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ClassDescriptor requires a non-empty type name")

    @classmethod
    def of(cls, name: str, *flags: Flag) -> ClassDescriptor:
        return cls(name=name, flags=set(flags))

    def members_specified(self) -> bool:
        """True when the descriptor asks for members that must be verified."""
        if self.methods or self.fields:
            return True
        return bool(self.flags & CONSTRUCTOR_FLAGS)

    def is_minimal(self) -> bool:
        return not self.members_specified()

    def add_method(self, method: MethodDescriptor) -> None:
        if method not in self.methods:
            self.methods.append(method)

    def add_field(self, field_descriptor: FieldDescriptor) -> None:
        if field_descriptor not in self.fields:
            self.fields.append(field_descriptor)

    def merge(self, other: ClassDescriptor) -> None:
        """Union ``other`` (same type name) into this descriptor."""
        if other.name != self.name:
            raise ValueError(
                "Cannot merge descriptor for {} into {}".format(other.name, self.name)
            )
        self.flags |= other.flags
        for method in other.methods:
            self.add_method(method)
        for field_descriptor in other.fields:
            self.add_field(field_descriptor)

    def copy(self) -> ClassDescriptor:
        return ClassDescriptor(
            name=self.name,
            methods=list(self.methods),
            fields=list(self.fields),
            flags=set(self.flags),
        )


class ReflectionDescriptor:
    """ClassDescriptors keyed by type name, in insertion order.

    WHY: The reflection configuration is one entry per type. Scanners
    may report the same type many times with different members; those
    reports must collapse into one entry.

    HOW: Backed by an insertion-ordered dict. New names are stored as
    copies; known names are merged in place.

    RULES:
    - merge() never removes an entry
    - merge() accepts a single ClassDescriptor or another ReflectionDescriptor
    - Equality compares the descriptors, ignoring insertion order
    """

    def __init__(self, class_descriptors: Optional[Iterable[ClassDescriptor]] = None) -> None:
        self._entries: Dict[str, ClassDescriptor] = {}
        for class_descriptor in class_descriptors or ():
            self.merge(class_descriptor)

    @property
    def class_descriptors(self) -> List[ClassDescriptor]:
        return list(self._entries.values())

    def get(self, name: str) -> Optional[ClassDescriptor]:
        return self._entries.get(name)

    def merge(self, other: Union[ClassDescriptor, ReflectionDescriptor]) -> None:
        if isinstance(other, ReflectionDescriptor):
            for class_descriptor in other.class_descriptors:
                self.merge(class_descriptor)
            return
        existing = self._entries.get(other.name)
        if existing is None:
            self._entries[other.name] = other.copy()
        else:
            existing.merge(other)

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[ClassDescriptor]:
        return iter(self.class_descriptors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReflectionDescriptor):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return "ReflectionDescriptor({!r})".format(self.class_descriptors)


def _add_unique(items: List[str], value: str) -> None:
    if value not in items:
        items.append(value)


@dataclass
class ResourcesDescriptor:
    """Resource patterns and resource bundles to bundle into the image.

    RULES:
    - patterns and bundles are independent insertion-ordered sets
    - No type verification: resources are never checked against the resolver
    """

    patterns: List[str] = field(default_factory=list)
    bundles: List[str] = field(default_factory=list)

    def add(self, pattern: str) -> None:
        _add_unique(self.patterns, pattern)

    def add_bundle(self, bundle: str) -> None:
        _add_unique(self.bundles, bundle)

    def merge(self, other: ResourcesDescriptor) -> None:
        for pattern in other.patterns:
            self.add(pattern)
        for bundle in other.bundles:
            self.add_bundle(bundle)

    def is_empty(self) -> bool:
        return not self.patterns and not self.bundles


@dataclass(frozen=True)
class ProxyDescriptor:
    """One dynamic proxy, identified by its ordered interface list."""

    interfaces: Tuple[str, ...]

    @classmethod
    def of(cls, interface_names: Iterable[str]) -> ProxyDescriptor:
        return cls(interfaces=tuple(interface_names))


@dataclass
class ProxiesDescriptor:
    """Ordered collection of proxy registrations.

    RULES:
    - add() appends unless an identical interface list is already present
    - Interface order inside each proxy is significant: [A, B] != [B, A]
    """

    proxies: List[ProxyDescriptor] = field(default_factory=list)

    def add(self, proxy: ProxyDescriptor) -> None:
        if proxy not in self.proxies:
            self.proxies.append(proxy)

    def merge(self, other: ProxiesDescriptor) -> None:
        for proxy in other.proxies:
            self.add(proxy)

    def is_empty(self) -> bool:
        return not self.proxies

    def __len__(self) -> int:
        return len(self.proxies)


@dataclass
class InitializationDescriptor:
    """Classes and packages whose static initialization time is pinned.

    WHY: Native-image runs static initializers at build time only when
    told to; some classes must instead be deferred to run time. The
    properties formatter turns these four sets into builder arguments.

    RULES:
    - Four insertion-ordered sets; each add is a no-op for a known name
    - No de-duplication across sets: a name may sit in build-time and
      run-time sets at once (the collector warns about it)
    """

    buildtime_classes: List[str] = field(default_factory=list)
    buildtime_packages: List[str] = field(default_factory=list)
    runtime_classes: List[str] = field(default_factory=list)
    runtime_packages: List[str] = field(default_factory=list)

    def add_buildtime_class(self, name: str) -> None:
        _add_unique(self.buildtime_classes, name)

    def add_buildtime_package(self, name: str) -> None:
        _add_unique(self.buildtime_packages, name)

    def add_runtime_class(self, name: str) -> None:
        _add_unique(self.runtime_classes, name)

    def add_runtime_package(self, name: str) -> None:
        _add_unique(self.runtime_packages, name)

    def merge(self, other: InitializationDescriptor) -> None:
        for name in other.buildtime_classes:
            self.add_buildtime_class(name)
        for name in other.buildtime_packages:
            self.add_buildtime_package(name)
        for name in other.runtime_classes:
            self.add_runtime_class(name)
        for name in other.runtime_packages:
            self.add_runtime_package(name)

    def is_empty(self) -> bool:
        return not (
            self.buildtime_classes
            or self.buildtime_packages
            or self.runtime_classes
            or self.runtime_packages
        )
