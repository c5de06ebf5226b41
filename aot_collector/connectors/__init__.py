"""Build connector package — live mirror of accepted registrations.

WHY: A running native-image build can consume configuration as it is
discovered. This package holds the connector contract and the HTTP
implementation that talks to such a build engine.

HOW: base.py defines the Connector ABC the collector calls; http.py
implements it over httpx with the request models from models.py.

RULES:
- The collector depends only on Connector, never on HttpConnector
- All HTTP calls go through HttpConnector (no direct httpx usage elsewhere)
"""

from aot_collector.connectors.base import Connector
from aot_collector.connectors.http import ConnectorError, HttpConnector

__all__ = ["Connector", "ConnectorError", "HttpConnector"]
