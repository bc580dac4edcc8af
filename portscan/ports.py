from __future__ import annotations

import re
from typing import List

from .errors import InvalidPortNumber, InvalidRangeFormat


_DECIMAL = re.compile(r"[+-]?[0-9]+")


def _to_int(s: str) -> int:
    # plain ASCII decimal only; int() alone would also take "8_0" and non-ASCII digits
    if not _DECIMAL.fullmatch(s):
        raise InvalidPortNumber(s)
    return int(s)


def parse_ports(spec: str) -> List[int]:
    """
    Parses a port specification string into a list of ports.
    Supports:
    - Single ports: "80"
    - Ranges: "1-1024"
    - Comma-separated: "22,80,443"
    - Mixed: "1-1024,8080,9000-9005"

    Tokens are expanded literally and in order; duplicates are kept.
    A reversed range such as "90-80" expands to nothing.
    Numbers are not checked against 0-65535, the connect call rejects those.
    """
    ports: List[int] = []
    for part in spec.split(","):
        part = part.strip()
        if "-" in part:
            pieces = part.split("-")
            if len(pieces) != 2:
                raise InvalidRangeFormat(part)
            start = _to_int(pieces[0].strip())
            end = _to_int(pieces[1].strip())
            ports.extend(range(start, end + 1))
        else:
            ports.append(_to_int(part))

    return ports
