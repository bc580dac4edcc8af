from __future__ import annotations

import logging
import queue
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Set

from .models import PortState, ProbeOutcome, ScanRequest, ScanResult
from .prober import probe_port

logger = logging.getLogger(__name__)

ProbeFn = Callable[[str, int, float, Optional[threading.Event]], ProbeOutcome]
PortCallback = Callable[[int], None]

# pushed by the engine once every task has finished; ends the collector
_CLOSED = object()


def _collect(results: "queue.Queue", open_ports: List[int], on_open: Optional[PortCallback]) -> None:
    while True:
        item = results.get()
        if item is _CLOSED:
            return
        open_ports.append(item)
        if on_open is not None:
            try:
                on_open(item)
            except Exception:
                logger.exception("on_open callback failed for port %s", item)


def _run_probe(
    probe: ProbeFn,
    request: ScanRequest,
    port: int,
    cancel: threading.Event,
    gate: threading.BoundedSemaphore,
    results: "queue.Queue",
    on_closed: Optional[PortCallback],
) -> None:
    try:
        try:
            outcome = probe(request.target, port, request.timeout_s, cancel)
        except Exception as e:
            logger.warning("Probe for port %s raised %r; treating as closed", port, e)
            outcome = ProbeOutcome(port=port, state=PortState.CLOSED, cause=repr(e))

        if outcome.state is PortState.OPEN:
            results.put(port)
        elif outcome.state is PortState.CLOSED and on_closed is not None:
            try:
                on_closed(port)
            except Exception:
                logger.exception("on_closed callback failed for port %s", port)
    finally:
        gate.release()


def scan(
    request: ScanRequest,
    *,
    cancel: Optional[threading.Event] = None,
    probe: ProbeFn = probe_port,
    on_open: Optional[PortCallback] = None,
    on_closed: Optional[PortCallback] = None,
) -> ScanResult:
    """
    Bounded-concurrency scanner.

    The dispatcher takes a gate slot before submitting each port, so no more
    than request.capacity probes are ever in flight. Open ports travel through
    a queue to a single collector thread; the result list is only read after
    that thread has been joined. Setting `cancel` stops dispatching and makes
    tasks that have not yet probed return without touching the network.
    """
    if cancel is None:
        cancel = threading.Event()

    gate = threading.BoundedSemaphore(request.capacity)
    results: "queue.Queue" = queue.Queue()
    open_ports: List[int] = []
    pending: Set[Future] = set()

    collector = threading.Thread(
        target=_collect,
        args=(results, open_ports, on_open),
        name="portscan-collector",
        daemon=True,
    )
    collector.start()

    logger.info(
        "Scanning %s: %d ports, capacity %d, timeout %.2fs",
        request.target, len(request.ports), request.capacity, request.timeout_s,
    )
    start_all = time.perf_counter()

    try:
        with ThreadPoolExecutor(max_workers=request.capacity, thread_name_prefix="portscan") as pool:
            try:
                for port in request.ports:
                    gate.acquire()
                    if cancel.is_set():
                        gate.release()
                        logger.info("Cancelled after dispatching %d/%d ports", len(pending), len(request.ports))
                        break
                    pending.add(pool.submit(_run_probe, probe, request, port, cancel, gate, results, on_closed))
                wait(pending)
            except KeyboardInterrupt:
                # in-flight connects still run to their own timeout
                logger.warning("Interrupted; waiting for %d in-flight probes", sum(not f.done() for f in pending))
                cancel.set()
                wait(pending)
    finally:
        results.put(_CLOSED)
        collector.join()

    result = ScanResult(
        target=request.target,
        open_ports=open_ports,
        requested=len(request.ports),
        dispatched=len(pending),
        cancelled=cancel.is_set(),
        elapsed_s=round(time.perf_counter() - start_all, 4),
    )
    logger.info(
        "Scan of %s finished in %.2fs: %d open of %d probed",
        result.target, result.elapsed_s, len(result.open_ports), result.dispatched,
    )
    return result


class Scanner:
    """
    Holds the collaborators for repeated scans and exposes cancel() so another
    thread (a signal handler, a deadline timer) can stop the running scan.
    """

    def __init__(
        self,
        probe: ProbeFn = probe_port,
        on_open: Optional[PortCallback] = None,
        on_closed: Optional[PortCallback] = None,
    ):
        self.probe = probe
        self.on_open = on_open
        self.on_closed = on_closed
        self._cancel = threading.Event()

    def cancel(self) -> None:
        """Stop the running scan, or the next one if none is running yet."""
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def run(self, request: ScanRequest) -> ScanResult:
        try:
            return scan(
                request,
                cancel=self._cancel,
                probe=self.probe,
                on_open=self.on_open,
                on_closed=self.on_closed,
            )
        finally:
            # swap the token only once the run is over, so an early cancel() is kept
            self._cancel = threading.Event()
