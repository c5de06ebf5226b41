"""Core descriptor model, verification, and merge engine.

WHY: The core package contains the stable heart of the collector —
the descriptor dataclasses, the type-system boundary, the verifier,
and the merge engine that applies accept/reject/downgrade policy.
Formatters and connectors consume what the core produces.

HOW: descriptors.py defines the data structures, types.py the resolver
contract, verifier.py the checks, store.py the session state, and
collector.py the public registration API.

RULES:
- Descriptor dataclasses are the contract — change with care
- Nothing in core performs I/O except through an attached connector
"""
