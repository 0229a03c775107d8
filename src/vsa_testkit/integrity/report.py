"""Integrity report accumulated over one validation session."""

from dataclasses import asdict, dataclass, field
from typing import Dict, List


@dataclass
class IntegrityReport:
    """
    Results from integrity validation.

    A report belongs to one validation session. Checks are additive: nothing
    is raised, the caller inspects :meth:`is_ok` or :meth:`pass_rate` once
    the session is over.
    """
    checks_total: int = 0
    checks_passed: int = 0
    # Single-bit byte errors
    bitflips_detected: int = 0
    # Multi-bit corruption and structural damage
    corruption_events: int = 0
    # Algebraic law violations (engine logic defects)
    invariant_violations: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def checks_failed(self) -> int:
        return self.checks_total - self.checks_passed

    def is_ok(self) -> bool:
        """True when every check passed and no failure was recorded."""
        return self.checks_passed == self.checks_total and not self.failures

    def pass_rate(self) -> float:
        """Pass rate as a percentage; an empty session counts as fully healthy."""
        if self.checks_total == 0:
            return 100.0
        return self.checks_passed / self.checks_total * 100.0

    def record_pass(self) -> None:
        self.checks_total += 1
        self.checks_passed += 1

    def record_failure(self, msg: str) -> None:
        self.checks_total += 1
        self.failures.append(msg)

    def record_bitflip(self) -> None:
        self.bitflips_detected += 1

    def record_corruption(self) -> None:
        self.corruption_events += 1

    def record_invariant_violation(self, msg: str) -> None:
        """Record a failed algebraic check; counted apart from corruption."""
        self.checks_total += 1
        self.invariant_violations += 1
        self.failures.append(f"INVARIANT: {msg}")

    def merge(self, other: "IntegrityReport") -> "IntegrityReport":
        """Combine two reports into a new one; neither input is modified."""
        return IntegrityReport(
            checks_total=self.checks_total + other.checks_total,
            checks_passed=self.checks_passed + other.checks_passed,
            bitflips_detected=self.bitflips_detected + other.bitflips_detected,
            corruption_events=self.corruption_events + other.corruption_events,
            invariant_violations=self.invariant_violations + other.invariant_violations,
            failures=self.failures + other.failures,
        )

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["checks_failed"] = self.checks_failed
        data["pass_rate"] = self.pass_rate()
        data["ok"] = self.is_ok()
        return data

    def summary(self) -> str:
        """Human-readable summary."""
        return (
            "Integrity Report:\n"
            f"- Total checks: {self.checks_total}\n"
            f"- Passed: {self.checks_passed}\n"
            f"- Failed: {self.checks_failed}\n"
            f"- Pass rate: {self.pass_rate():.1f}%\n"
            f"- Bitflips: {self.bitflips_detected}\n"
            f"- Corruption events: {self.corruption_events}\n"
            f"- Invariant violations: {self.invariant_violations}"
        )
