from __future__ import annotations

import logging
import socket
import threading
import time
from typing import Optional

from .models import PortState, ProbeOutcome

logger = logging.getLogger(__name__)


def _family_for(host: str) -> int:
    return socket.AF_INET6 if ":" in host else socket.AF_INET


def probe_port(
    host: str,
    port: int,
    timeout_s: float,
    cancel: Optional[threading.Event] = None,
) -> ProbeOutcome:
    """
    One bounded TCP connect against an already resolved address.

    Refusals, timeouts, unreachable networks and ports the socket layer
    rejects (e.g. 70000) all come back as CLOSED. ERRORED only means the
    cancel token was set before the attempt started.
    """
    if cancel is not None and cancel.is_set():
        return ProbeOutcome(port=port, state=PortState.ERRORED, cause="cancelled")

    start = time.perf_counter()
    sock: Optional[socket.socket] = None
    try:
        sock = socket.socket(_family_for(host), socket.SOCK_STREAM)
        sock.settimeout(timeout_s)
        sock.connect((host, port))
        return ProbeOutcome(
            port=port,
            state=PortState.OPEN,
            elapsed_s=round(time.perf_counter() - start, 4),
        )
    except (OSError, OverflowError) as e:
        # OSError covers refused, unreachable and socket.timeout
        logger.debug("Port %s closed: %s", port, e)
        return ProbeOutcome(
            port=port,
            state=PortState.CLOSED,
            cause=str(e) or e.__class__.__name__,
            elapsed_s=round(time.perf_counter() - start, 4),
        )
    finally:
        if sock:
            sock.close()
