import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .errors import InvalidScanRequest

DEFAULT_PORTS = "1-1024"
DEFAULT_THREADS = 100
DEFAULT_TIMEOUT = 1.0


@dataclass(frozen=True)
class ScanRequest:
    target: str
    ports: Tuple[int, ...]
    capacity: int = DEFAULT_THREADS
    timeout_s: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        # accept any iterable of ports but store a tuple so the request stays hashable
        object.__setattr__(self, "ports", tuple(self.ports))
        if self.capacity < 1:
            raise InvalidScanRequest(f"capacity must be >= 1, got {self.capacity}")
        # zero makes the socket non-blocking; nan and inf are refused by settimeout
        if not math.isfinite(self.timeout_s) or self.timeout_s <= 0:
            raise InvalidScanRequest(f"timeout must be a finite number > 0, got {self.timeout_s}")


class PortState(Enum):
    OPEN = "open"
    CLOSED = "closed"
    ERRORED = "errored"


@dataclass(frozen=True)
class ProbeOutcome:
    port: int
    state: PortState
    cause: Optional[str] = None
    elapsed_s: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.state is PortState.OPEN


@dataclass
class ScanResult:
    target: str
    open_ports: List[int] = field(default_factory=list)
    requested: int = 0
    dispatched: int = 0
    cancelled: bool = False
    elapsed_s: float = 0.0

    def sorted_ports(self) -> List[int]:
        return sorted(self.open_ports)
