from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def confirm(question: str, *, default: bool = True) -> bool:
    """Ask a yes/no question on the terminal.

    Empty input, or no terminal at all, takes the default.
    """

    suffix = "[Y/n]" if default else "[y/N]"
    try:
        reply = input(f"{question} {suffix} ").strip().lower()
    except EOFError:
        logger.info("No input available; using default (%s)", "yes" if default else "no")
        return default

    if not reply:
        return default
    if default:
        return not reply.startswith("n")
    return reply.startswith("y")
