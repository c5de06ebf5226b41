"""Pydantic request models for the live build engine HTTP API.

WHY: The HTTP connector posts every accepted registration to a running
build engine. Typed request models pin the wire format down in one
place, validate what we send, and give the receiving side a JSON Schema
it can check against.

HOW: One model per endpoint. ``from_descriptor`` classmethods translate
the core dataclasses into wire models; ``model_dump(mode="json")`` gives
the request body.

RULES:
- All models use Field(description=...) so the schema documents itself
- Flag values are the native-image JSON keys (e.g. "allDeclaredConstructors")
- Lists keep the collector's order
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from aot_collector.core.descriptors import (
    ClassDescriptor,
    Flag,
    ReflectionDescriptor,
    ResourcesDescriptor,
)


class InitializationPhase(str, Enum):
    build = "build"
    run = "run"


class InitializationKind(str, Enum):
    cls = "class"
    package = "package"


class MethodPayload(BaseModel):
    name: str = Field(description="Method name; constructors use '<init>'.")
    parameter_types: List[str] = Field(
        default_factory=list,
        description="Dotted parameter type names, in declaration order.",
    )


class FieldPayload(BaseModel):
    name: str = Field(description="Field name.")
    allow_write: bool = Field(default=False, description="Field may be written reflectively.")
    allow_unsafe_access: bool = Field(default=False, description="Field may be accessed via Unsafe.")


class ClassDescriptorPayload(BaseModel):
    """Body of POST /class-descriptors and one entry of ReflectionPayload."""

    name: str = Field(description="Fully-qualified dotted type name.")
    flags: List[Flag] = Field(default_factory=list, description="Capability flags, sorted.")
    methods: List[MethodPayload] = Field(default_factory=list, description="Methods to keep.")
    fields: List[FieldPayload] = Field(default_factory=list, description="Fields to keep.")

    @classmethod
    def from_descriptor(cls, descriptor: ClassDescriptor) -> ClassDescriptorPayload:
        return cls(
            name=descriptor.name,
            flags=sorted(descriptor.flags, key=lambda flag: flag.value),
            methods=[
                MethodPayload(name=m.name, parameter_types=list(m.parameter_types))
                for m in descriptor.methods
            ],
            fields=[
                FieldPayload(
                    name=f.name,
                    allow_write=f.allow_write,
                    allow_unsafe_access=f.allow_unsafe_access,
                )
                for f in descriptor.fields
            ],
        )


class ReflectionPayload(BaseModel):
    """Body of POST /reflection."""

    classes: List[ClassDescriptorPayload] = Field(
        default_factory=list,
        description="Verified class descriptors, in registration order.",
    )

    @classmethod
    def from_descriptor(cls, descriptor: ReflectionDescriptor) -> ReflectionPayload:
        return cls(classes=[
            ClassDescriptorPayload.from_descriptor(cd) for cd in descriptor.class_descriptors
        ])


class ProxyPayload(BaseModel):
    """Body of POST /proxies."""

    interfaces: List[str] = Field(description="Proxy interfaces; order is significant.")


class ResourcesPayload(BaseModel):
    """Body of POST /resources."""

    patterns: List[str] = Field(default_factory=list, description="Resource patterns.")
    bundles: List[str] = Field(default_factory=list, description="Resource bundle names.")

    @classmethod
    def from_descriptor(cls, descriptor: ResourcesDescriptor) -> ResourcesPayload:
        return cls(patterns=list(descriptor.patterns), bundles=list(descriptor.bundles))


class ResourcePatternPayload(BaseModel):
    """Body of POST /resource-patterns."""

    pattern: str = Field(description="Resource pattern or bundle name.")
    bundle: bool = Field(default=False, description="True for a resource bundle.")


class InitializationPayload(BaseModel):
    """Body of POST /initialization."""

    phase: InitializationPhase = Field(description="When the names are initialized.")
    kind: InitializationKind = Field(description="Whether names are classes or packages.")
    names: List[str] = Field(description="Dotted class or package names.")
