"""AOT Config Collector — native-image configuration aggregation hub.

WHY: Ahead-of-time compilation into a closed-world native binary drops
every type, member, proxy, and resource that is only reached dynamically.
Scanners discover what must be kept, but their findings arrive piecemeal,
may name types that do not exist, and must end up in one consistent set
of descriptors plus a native-image.properties argument file.

HOW: Four-stage flow — verify (type resolver boundary), merge (descriptor
store behind the collector), mirror (optional live build connector), and
emit (pluggable formatters). Each stage is independently testable.

RULES:
- All registrations go through ConfigurationCollector
- Descriptors only ever grow; merges are idempotent
- The connector mirrors accepted registrations, never rejected ones
- Formatters read the store; they never mutate it
"""

__version__ = "0.1.0"
