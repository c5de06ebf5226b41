"""Boundary contract for the external type-resolution system.

WHY: Whether a named type exists, is an interface, or has the members a
descriptor asks for is known only to the build's type system (a class
path scanner, a bytecode reader, ...). The collector must not depend on
any particular one, and tests must be able to swap in a fake.

HOW: Two typing.Protocol classes describe the calls the verifier makes.
Anything with matching methods satisfies them; nothing here is
implemented by this package.

RULES:
- resolve_dotted() returns None for an unknown name when allow_absent=True
- verify_type()/verify_members() receive the debug-verify flag and may
  emit their own diagnostics; their result is final
"""

from __future__ import annotations

from typing import Optional, Protocol


class Type(Protocol):
    """A resolved type as seen by the verifier."""

    @property
    def dotted_name(self) -> str:
        """Fully-qualified dotted name, e.g. ``com.example.Foo``."""

    def is_interface(self) -> bool:
        ...

    def verify_type(self, debug: bool) -> bool:
        """Type-level validity (loadable, all supertypes resolvable, ...)."""

    def verify_members(self, debug: bool) -> bool:
        """Member-level validity of the type's declared methods and fields."""


class TypeSystem(Protocol):
    """Resolves dotted type names to Type objects."""

    def resolve_dotted(self, dotted_name: str, allow_absent: bool = True) -> Optional[Type]:
        ...
