from __future__ import annotations

import threading

from .models import ScanResult

RULE = "-" * 24


def print_header(target: str, address: str, port_count: int, capacity: int) -> None:
    print(f"[*] Target: {target} ({address})")
    print(f"[*] Ports: {port_count}")
    print(f"[*] Threads: {capacity}")
    print(RULE)


class Reporter:
    """Progress lines printed while the scan runs; called from worker threads."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._lock = threading.Lock()

    def port_open(self, port: int) -> None:
        with self._lock:
            print(f"[+] Port {port} open", flush=True)

    def port_closed(self, port: int) -> None:
        if not self.verbose:
            return
        with self._lock:
            print(f"[.] Port {port} closed", flush=True)


def format_summary(result: ScanResult) -> str:
    lines = [RULE, f"Found {len(result.open_ports)} open ports"]
    if result.open_ports:
        lines.append("Open: " + ", ".join(str(p) for p in result.sorted_ports()))
    if result.cancelled:
        lines.append(f"Scan cancelled after {result.dispatched}/{result.requested} ports")
    lines.append(f"Elapsed: {result.elapsed_s:.2f}s")
    return "\n".join(lines)


def print_summary(result: ScanResult) -> None:
    print(format_summary(result))
