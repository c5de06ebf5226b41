"""Type and member verification against the external type system.

WHY: Scanners report types by name, and some of those names are wrong,
optional, or point at types whose members cannot be loaded. Handing
such entries to native-image breaks the build, so every reflective
registration is checked first.

HOW: TypeVerifier resolves names through the injected TypeSystem
(absence is a normal answer, not an error) and delegates the actual
structural checks to the resolved Type. When debug_verify is on, each
failed check logs exactly one diagnostic line.

RULES:
- An unresolvable name fails both verify_type and verify_members
- check_types stops at the first failing name
- Verification never raises for bad input; only a missing type system
  (a wiring mistake) raises RuntimeError
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Optional

from aot_collector.config import AotOptions
from aot_collector.core.descriptors import ClassDescriptor
from aot_collector.core.types import Type, TypeSystem

logger = logging.getLogger(__name__)


class TypeVerifier:
    """Checks names and descriptors against a TypeSystem."""

    def __init__(
        self,
        type_system: Optional[TypeSystem] = None,
        options: Optional[AotOptions] = None,
    ) -> None:
        self.type_system = type_system
        self.options = options or AotOptions()

    @property
    def debug(self) -> bool:
        return self.options.debug_verify

    def _resolve(self, name: str) -> Optional[Type]:
        if self.type_system is None:
            raise RuntimeError(
                "No type system configured: call set_type_system() before "
                "registering descriptors that need verification."
            )
        return self.type_system.resolve_dotted(name, True)

    def _diagnose(self, message: str, name: str) -> None:
        if self.debug:
            logger.info("FAILED VERIFICATION (%s) %s", message, name)

    def verify_type(self, name: str) -> bool:
        """Return True if ``name`` resolves and passes its type-level check."""
        resolved = self._resolve(name)
        if resolved is None:
            self._diagnose("type missing", name)
            return False
        if not resolved.verify_type(self.debug):
            self._diagnose("type invalid", name)
            return False
        return True

    def verify_members(self, descriptor: ClassDescriptor) -> bool:
        """Return True if the descriptor's type resolves and its members check out."""
        resolved = self._resolve(descriptor.name)
        if resolved is None:
            self._diagnose("type missing", descriptor.name)
            return False
        if not resolved.verify_members(self.debug):
            self._diagnose("members invalid", descriptor.name)
            return False
        return True

    def check_types(
        self,
        names: Iterable[str],
        predicate: Callable[[Optional[Type]], bool],
    ) -> bool:
        """True only if ``predicate`` holds for every resolved name.

        The predicate receives None for names the type system does not know.
        """
        for name in names:
            if not predicate(self._resolve(name)):
                self._diagnose("predicate rejected", name)
                return False
        return True


def is_existing_interface(resolved: Optional[Type]) -> bool:
    """Predicate for proxy interfaces: the type exists and is an interface."""
    return resolved is not None and resolved.is_interface()
