"""Output formatter registry — pluggable output files.

WHY: Callers need a single lookup to find a formatter by name. A central
dict makes it trivial to add new outputs: create the formatter class,
import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed:
``formatter = FORMATTERS["native_image_properties"]()``.

RULES:
- Keys are snake_case identifiers
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from aot_collector.formatters.native_image import NativeImagePropertiesFormatter

if TYPE_CHECKING:
    from aot_collector.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "native_image_properties": NativeImagePropertiesFormatter,
}
