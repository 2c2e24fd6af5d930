from __future__ import annotations

import functools
import math
import re
import unicodedata
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple, Union

NO_HEADSIGN = "none"

_ROUTE_ID_RE = re.compile(r"^([0-9]+)(.*)$", re.DOTALL)


@dataclass(frozen=True)
class RouteKey:
    """Sort key for a route identifier such as ``"12"``, ``"12A"`` or ``"EXPRESS"``.

    Identifiers without leading digits get an infinite numeric prefix so
    they sort after every digit-led identifier.
    """

    numeric_prefix: Union[int, float]
    alpha_suffix: str

    @classmethod
    def parse(cls, route_id: Optional[str]) -> "RouteKey":
        text = str(route_id if route_id is not None else "").strip()
        match = _ROUTE_ID_RE.match(text)
        if match is None:
            return cls(math.inf, text.upper())
        return cls(int(match.group(1)), match.group(2).strip().upper())


def collation_key(text: str) -> Tuple[str, str]:
    """Accent- and case-insensitive key, raw text as the tie-break.

    Does not depend on the process locale, so "Õismäe" sorts next to
    "Oismae" and "airport" before "Bay".
    """
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, text


def _collate(a: str, b: str) -> int:
    ka, kb = collation_key(a), collation_key(b)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def _sign(a: Union[int, float], b: Union[int, float]) -> int:
    return (a > b) - (a < b)


def compare_route_ids(a: Optional[str], b: Optional[str]) -> int:
    """Compare two route identifiers, returning -1, 0 or 1."""
    ka, kb = RouteKey.parse(a), RouteKey.parse(b)
    if ka.numeric_prefix != kb.numeric_prefix:
        return _sign(ka.numeric_prefix, kb.numeric_prefix)
    return _collate(ka.alpha_suffix, kb.alpha_suffix)


def normalize_headsign(headsign: Optional[str]) -> str:
    text = (headsign or "").strip()
    return text or NO_HEADSIGN


def compare_routes(a: Mapping[str, Optional[str]], b: Mapping[str, Optional[str]]) -> int:
    """Order route listings by route identifier, then by headsign.

    A missing headsign compares as the literal ``"none"``.
    """
    result = compare_route_ids(a.get("route_short_name"), b.get("route_short_name"))
    if result:
        return result
    return _collate(
        normalize_headsign(a.get("trip_headsign")),
        normalize_headsign(b.get("trip_headsign")),
    )


def sort_routes(listings: Iterable[Mapping[str, Optional[str]]]) -> List:
    return sorted(listings, key=functools.cmp_to_key(compare_routes))
