"""OpenTelemetry Collector provisioner (Python-first, step-driven).

Core design goals:
- Linear, fail-fast step sequence
- Idempotent steps (directories, service unit)
- Validation before activation
- Injected configuration instead of embedded constants
- Centralized logging
"""

__all__ = []
