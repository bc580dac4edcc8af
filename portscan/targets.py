from __future__ import annotations

import ipaddress
import logging
import socket

from .errors import UnresolvableTarget

logger = logging.getLogger(__name__)


def resolve_target(target: str) -> str:
    """
    Supports:
      - IPv4 literal: "172.20.0.10"
      - IPv6 literal: "::1"
      - Hostname: "webapp" (resolves to the first TCP address)
    """
    target = target.strip()
    if not target:
        raise UnresolvableTarget(target, "empty target")

    try:
        return str(ipaddress.ip_address(target))
    except ValueError:
        pass

    try:
        infos = socket.getaddrinfo(target, None, proto=socket.IPPROTO_TCP)
    except (socket.gaierror, UnicodeError) as e:
        raise UnresolvableTarget(target, str(e)) from e
    if not infos:
        raise UnresolvableTarget(target, "no addresses returned")

    address = infos[0][4][0]
    logger.debug("Resolved %s -> %s", target, address)
    return address
