"""Exception types raised by the testkit."""


class HarnessError(Exception):
    """Base class for errors raised by the harness."""


class ContractViolation(HarnessError, ValueError):
    """A caller broke a documented precondition (bad sizes, rates, seeds)."""


class SnapshotError(HarnessError, ValueError):
    """A serialized vector snapshot could not be decoded."""
