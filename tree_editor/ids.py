"""
ids.py

Monotonic id minting for one editing session.

The counter is plain state owned by the session (never a module global).
Ids are "<prefix><n>", e.g. "n0", "n1", ... and are never reused, even after
the node they named has been deleted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

ID_PREFIX = "n"

# Any non-numeric prefix followed by a numeric tail, e.g. "n12" -> "12".
_NUMERIC_TAIL = re.compile(r"^\D*(\d+)$")


def numeric_part(node_id: str) -> Optional[int]:
    """
    Strip the non-numeric prefix of an id and return the number.

    Returns None for ids that do not end in a plain number ("root", "n1x").
    """
    m = _NUMERIC_TAIL.match(node_id or "")
    if not m:
        return None
    return int(m.group(1))


@dataclass
class IdCounter:
    """
    next_value:
      - the number the next call to mint() will hand out
    prefix:
      - string prepended by format_id()
    """

    next_value: int = 1
    prefix: str = ID_PREFIX

    def mint(self) -> int:
        value = self.next_value
        self.next_value += 1
        return value

    def format_id(self, value: int) -> str:
        return f"{self.prefix}{value}"

    @classmethod
    def seeded_from(cls, ids: Iterable[str], prefix: str = ID_PREFIX) -> "IdCounter":
        """
        Build a counter that cannot collide with any of the given ids.

        next_value = max numeric id + 1 (at least 1).
        """
        highest = 0
        for node_id in ids:
            n = numeric_part(node_id)
            if n is not None:
                highest = max(highest, n)
        return cls(next_value=highest + 1, prefix=prefix)
