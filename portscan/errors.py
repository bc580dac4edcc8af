from __future__ import annotations


class PortScanError(Exception):
    """Base class for every error raised before a scan starts."""


class InvalidPortSpec(PortScanError, ValueError):
    def __init__(self, token: str, reason: str):
        self.token = token
        super().__init__(f"{reason}: {token!r}")


class InvalidRangeFormat(InvalidPortSpec):
    def __init__(self, token: str):
        super().__init__(token, "Invalid port range")


class InvalidPortNumber(InvalidPortSpec):
    def __init__(self, token: str):
        super().__init__(token, "Invalid port number")


class UnresolvableTarget(PortScanError, ValueError):
    def __init__(self, target: str, reason: str = "could not resolve"):
        self.target = target
        super().__init__(f"Could not resolve target {target!r}: {reason}")


class InvalidScanRequest(PortScanError, ValueError):
    pass
