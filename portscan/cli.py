from __future__ import annotations

import argparse
import logging
import sys

from .errors import PortScanError
from .models import DEFAULT_PORTS, DEFAULT_THREADS, DEFAULT_TIMEOUT, ScanRequest
from .output import Reporter, print_header, print_summary
from .ports import parse_ports
from .scanner import Scanner
from .targets import resolve_target

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="portscan", description="Bounded-concurrency TCP connect scanner")
    p.add_argument("-t", "--target", required=True, help="Hostname or IP address")
    p.add_argument("-p", "--ports", default=DEFAULT_PORTS, help=f"Port spec: 80,443 or 1-1000 (default: {DEFAULT_PORTS})")
    p.add_argument("-n", "--threads", type=int, default=DEFAULT_THREADS, help=f"Concurrent probes (default: {DEFAULT_THREADS})")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help=f"Connect timeout seconds (default: {DEFAULT_TIMEOUT})")
    p.add_argument("-v", "--verbose", action="store_true", help="Show closed ports and debug logging")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    # everything that can fail is checked before the engine starts
    try:
        address = resolve_target(args.target)
        ports = parse_ports(args.ports)
        request = ScanRequest(target=address, ports=ports, capacity=args.threads, timeout_s=args.timeout)
    except PortScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_header(args.target, address, len(request.ports), request.capacity)

    reporter = Reporter(verbose=args.verbose)
    scanner = Scanner(on_open=reporter.port_open, on_closed=reporter.port_closed)
    result = scanner.run(request)

    print_summary(result)
    return 130 if result.cancelled else 0
