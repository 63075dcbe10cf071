from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping

logger = logging.getLogger(__name__)

PLACEHOLDER_ENDPOINT = "PLACEHOLDER_ENDPOINT"
PLACEHOLDER_HOSTNAME = "PLACEHOLDER_HOSTNAME"


@dataclass(frozen=True)
class Substitution:
    text: str
    counts: Dict[str, int]

    @property
    def missing(self) -> List[str]:
        return [token for token, n in self.counts.items() if n == 0]


def substitute(text: str, values: Mapping[str, str]) -> Substitution:
    """Replace every occurrence of each placeholder token with its value."""

    counts: Dict[str, int] = {}
    for token, value in values.items():
        counts[token] = text.count(token)
        text = text.replace(token, value)
    return Substitution(text=text, counts=counts)


def unresolved(text: str, tokens: List[str]) -> List[str]:
    return [t for t in tokens if t in text]
