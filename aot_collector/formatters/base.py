"""Abstract base formatter and output container.

WHY: Every output file is produced from the same DescriptorStore. This
base class enforces a consistent interface so callers can run any
formatter generically and decide themselves where the output goes.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file name with its content (string or bytes) and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list with one item per output file
- Formatters only read the store
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from aot_collector.core.store import DescriptorStore


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        filename: Bare file name, e.g. ``"native-image.properties"``.
        content: The file content as a string or bytes.
        media_type: MIME type for the content, e.g. ``"text/plain"``.
    """

    filename: str
    content: Union[str, bytes]
    media_type: str

    def to_bytes(self) -> bytes:
        if isinstance(self.content, bytes):
            return self.content
        return self.content.encode("utf-8")

    def write_to(self, directory: Union[str, Path]) -> Path:
        """Write the output into ``directory`` in binary mode and return its path."""
        path = Path(directory) / self.filename
        path.write_bytes(self.to_bytes())
        return path


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'native-image properties'."""

    @abstractmethod
    def format(self, store: DescriptorStore) -> list[FormatterOutput]:
        """Render the store into one or more output files."""
