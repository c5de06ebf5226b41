"""HTTP connector mirroring registrations into a live build engine.

WHY: When a native-image build runs as a separate service, the collector
can push every accepted registration to it as it happens, instead of the
build waiting for configuration files at the end of the session.

HOW: Uses httpx.Client (synchronous: the collector forwards while
holding its lock and expects the call to finish). HttpConnector is a
context manager: enter it to get a configured client, exit to close the
connection pool. Alternatively pass an existing httpx.Client (for
example a test client); the connector then never closes it.

RULES:
- Always use the context manager (with HttpConnector(url) as c: ...)
  unless an httpx.Client is injected
- base_url defaults to load_connector_url() from config
- JSON bodies are the pydantic models from connectors/models.py
- Resource files are posted as raw bytes (application/octet-stream)
- Any non-2xx response raises ConnectorError; transport failures raise
  ConnectorError with status_code 0
"""

from __future__ import annotations

import logging
from typing import BinaryIO, List, Optional, Sequence

import httpx
from pydantic import BaseModel

from aot_collector.config import AOT_CONNECTOR_TIMEOUT_S, load_connector_url
from aot_collector.connectors.base import Connector
from aot_collector.connectors.models import (
    ClassDescriptorPayload,
    InitializationKind,
    InitializationPayload,
    InitializationPhase,
    ProxyPayload,
    ReflectionPayload,
    ResourcePatternPayload,
    ResourcesPayload,
)
from aot_collector.core.descriptors import (
    ClassDescriptor,
    ReflectionDescriptor,
    ResourcesDescriptor,
)

logger = logging.getLogger(__name__)


class ConnectorError(Exception):
    """Raised when the build engine rejects or cannot receive a registration.

    WHY: Callers need a typed exception to tell connector failures apart
    from their own bugs.

    RULES:
    - Always include status_code and message
    - status_code is 0 when no HTTP response was received
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Build connector error {status_code}: {message}")


class HttpConnector(Connector):
    """Connector that posts registrations to a build engine over HTTP.

    RULES:
    - Use as: with HttpConnector() as connector: ...
    - Or: HttpConnector(client=existing_httpx_client)
    - timeout defaults to AOT_CONNECTOR_TIMEOUT_S from config
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._base_url = None if client is not None else (base_url or load_connector_url()).rstrip("/")
        self._timeout = timeout if timeout is not None else AOT_CONNECTOR_TIMEOUT_S

    def __enter__(self) -> HttpConnector:
        if self._owns_client:
            self._client = httpx.Client(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> httpx.Client:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "HttpConnector must be used as a context manager: "
                "with HttpConnector() as connector: ..."
            )
        return self._client

    def _post(self, path: str, **kwargs) -> None:
        client = self._ensure_client()
        logger.debug("POST %s", path)
        try:
            resp = client.post(path, **kwargs)
        except httpx.HTTPError as e:
            raise ConnectorError(0, str(e)) from e
        if resp.status_code not in (200, 201, 202, 204):
            raise ConnectorError(resp.status_code, resp.text)

    def _post_model(self, path: str, payload: BaseModel) -> None:
        self._post(path, json=payload.model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Connector API
    # ------------------------------------------------------------------

    def add_class_descriptor(self, class_descriptor: ClassDescriptor) -> None:
        self._post_model("/class-descriptors", ClassDescriptorPayload.from_descriptor(class_descriptor))

    def add_reflection_descriptor(self, reflection_descriptor: ReflectionDescriptor) -> None:
        self._post_model("/reflection", ReflectionPayload.from_descriptor(reflection_descriptor))

    def add_proxy(self, interface_names: List[str]) -> None:
        self._post_model("/proxies", ProxyPayload(interfaces=list(interface_names)))

    def add_resources_descriptor(self, resources_descriptor: ResourcesDescriptor) -> None:
        self._post_model("/resources", ResourcesPayload.from_descriptor(resources_descriptor))

    def add_resource(self, pattern: str, is_bundle: bool) -> None:
        self._post_model("/resource-patterns", ResourcePatternPayload(pattern=pattern, bundle=is_bundle))

    def register_resource(self, name: str, stream: BinaryIO) -> None:
        self._post(
            "/resource-files",
            params={"name": name},
            content=stream.read(),
            headers={"Content-Type": "application/octet-stream"},
        )

    def _initialize(self, phase: InitializationPhase, kind: InitializationKind, names: Sequence[str]) -> None:
        self._post_model("/initialization", InitializationPayload(phase=phase, kind=kind, names=list(names)))

    def initialize_at_build_time(self, names: Sequence[str]) -> None:
        self._initialize(InitializationPhase.build, InitializationKind.cls, names)

    def initialize_at_run_time(self, names: Sequence[str]) -> None:
        self._initialize(InitializationPhase.run, InitializationKind.cls, names)

    def initialize_at_build_time_packages(self, names: Sequence[str]) -> None:
        self._initialize(InitializationPhase.build, InitializationKind.package, names)

    def initialize_at_run_time_packages(self, names: Sequence[str]) -> None:
        self._initialize(InitializationPhase.run, InitializationKind.package, names)
