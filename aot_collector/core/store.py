"""In-memory descriptor store for one collection session.

WHY: The collector, the formatters, and any external serializer all need
the same accumulated state. Keeping it in one small object makes the
lifecycle explicit: created with the session, filled through the
collector, read at the end, discarded with the session.

HOW: DescriptorStore is a dataclass holding the four descriptor
collections and the map of generated resource files. It has no locking
of its own; ConfigurationCollector serializes every mutation.

RULES:
- Only ConfigurationCollector mutates a store
- resource_files: last write wins for a repeated resource name
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from aot_collector.core.descriptors import (
    InitializationDescriptor,
    ProxiesDescriptor,
    ReflectionDescriptor,
    ResourcesDescriptor,
)


@dataclass
class DescriptorStore:
    """Accumulated descriptors plus generated resource contents."""

    reflection: ReflectionDescriptor = field(default_factory=ReflectionDescriptor)
    resources: ResourcesDescriptor = field(default_factory=ResourcesDescriptor)
    proxies: ProxiesDescriptor = field(default_factory=ProxiesDescriptor)
    initialization: InitializationDescriptor = field(default_factory=InitializationDescriptor)
    resource_files: Dict[str, bytes] = field(default_factory=dict)

    def get_resource(self, name: str) -> Optional[bytes]:
        return self.resource_files.get(name)

    def is_empty(self) -> bool:
        return (
            self.reflection.is_empty()
            and self.resources.is_empty()
            and self.proxies.is_empty()
            and self.initialization.is_empty()
            and not self.resource_files
        )
