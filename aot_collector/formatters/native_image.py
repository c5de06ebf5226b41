"""native-image.properties formatter for static-initialization hints.

WHY: The native-image builder picks up a ``native-image.properties`` file
and treats its ``Args`` value as extra command-line arguments. That is
where the fixed build options and the --initialize-at-build-time /
--initialize-at-run-time lists collected during the session go.

HOW: render_native_image_properties() builds the text from an
InitializationDescriptor. The fixed option line is always present; a
build-time and a run-time continuation line follow only when the
corresponding sets are non-empty. write_native_image_properties() and
native_image_properties_stream() expose the same UTF-8 bytes as a file
or as an in-memory stream.

RULES:
- First line: "Args = " + NATIVE_IMAGE_REQUIRED_OPTIONS joined by spaces
- Continuation: " \\" + newline, then the option and a comma-separated
  list: all classes first, then all packages, insertion order, no
  trailing comma
- Empty class AND package sets for a phase suppress that whole line
- Output always ends with exactly one newline
- File and stream bytes are identical (binary write, no newline translation)
- Output file name: "native-image.properties", media type "text/plain"
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import List, Union

from aot_collector.config import (
    INITIALIZE_AT_BUILD_TIME_OPTION,
    INITIALIZE_AT_RUN_TIME_OPTION,
    NATIVE_IMAGE_PROPERTIES_FILENAME,
    NATIVE_IMAGE_REQUIRED_OPTIONS,
)
from aot_collector.core.descriptors import InitializationDescriptor
from aot_collector.core.store import DescriptorStore
from aot_collector.formatters.base import BaseFormatter, FormatterOutput

_CONTINUATION = " \\\n"


def _initialization_line(option: str, classes: List[str], packages: List[str]) -> str:
    return option + ",".join(list(classes) + list(packages))


def render_native_image_properties(initialization: InitializationDescriptor) -> str:
    """Render the properties text for ``initialization``.

    Args:
        initialization: The accumulated build-time/run-time sets.

    Returns:
        The complete file content, ending with a newline.
    """
    parts = ["Args = " + " ".join(NATIVE_IMAGE_REQUIRED_OPTIONS)]

    if initialization.buildtime_classes or initialization.buildtime_packages:
        parts.append(_CONTINUATION)
        parts.append(_initialization_line(
            INITIALIZE_AT_BUILD_TIME_OPTION,
            initialization.buildtime_classes,
            initialization.buildtime_packages,
        ))

    if initialization.runtime_classes or initialization.runtime_packages:
        parts.append(_CONTINUATION)
        parts.append(_initialization_line(
            INITIALIZE_AT_RUN_TIME_OPTION,
            initialization.runtime_classes,
            initialization.runtime_packages,
        ))

    parts.append("\n")
    return "".join(parts)


def native_image_properties_stream(initialization: InitializationDescriptor) -> io.BytesIO:
    """Return the rendered properties as a readable byte stream."""
    return io.BytesIO(render_native_image_properties(initialization).encode("utf-8"))


def write_native_image_properties(
    initialization: InitializationDescriptor,
    path: Union[str, Path],
) -> Path:
    """Write the rendered properties to ``path``.

    RULES:
    - A directory ``path`` gets "native-image.properties" appended
    - Parent directories are not created; OSError propagates to the caller
    """
    path = Path(path)
    if path.is_dir():
        path = path / NATIVE_IMAGE_PROPERTIES_FILENAME
    with open(path, "wb") as f:
        f.write(render_native_image_properties(initialization).encode("utf-8"))
    return path


class NativeImagePropertiesFormatter(BaseFormatter):
    """Formatter producing native-image.properties from the store."""

    @property
    def name(self) -> str:
        return "native-image properties"

    def format(self, store: DescriptorStore) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                filename=NATIVE_IMAGE_PROPERTIES_FILENAME,
                content=render_native_image_properties(store.initialization),
                media_type="text/plain",
            )
        ]
