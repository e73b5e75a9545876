"""
Core data structures for level validation.

- Severity: how much an issue matters (INFO, WARN, FAIL)
- ValidationIssue: one finding, tied to a room and/or a map position
- ValidationResult: every finding for one level, with pass/fail status
- ValidationError: raised when fail-fast validation finds a FAIL
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Summary data, never affects pass/fail
    - WARN: Suspicious but playable
    - FAIL: The level breaks a structural guarantee
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


@dataclass
class ValidationIssue:
    """A single validation finding.

    Attributes:
        severity: Issue severity
        code: Rule code (e.g., "LVL-001")
        message: Human-readable description
        remediation: Suggested fix, if the rule has one
        room_id: Room the issue is about, if any
        position: Map-space (x, z) the issue is about, if any
    """
    severity: Severity
    code: str
    message: str
    remediation: Optional[str] = None
    room_id: Optional[int] = None
    position: Optional[Tuple[float, float]] = None

    @property
    def where(self) -> str:
        parts = []
        if self.room_id is not None:
            parts.append(f"room={self.room_id}")
        if self.position is not None:
            parts.append(f"at=({self.position[0]:g}, {self.position[1]:g})")
        return ' '.join(parts) or '-'

    def format(self) -> str:
        """[SEVERITY] CODE where :: message :: fix=FIX"""
        fix = self.remediation or 'N/A'
        return f"[{self.severity}] {self.code} {self.where} :: {self.message} :: fix={fix}"

    def __str__(self) -> str:
        return self.format()

    def to_dict(self) -> Dict:
        return {
            'severity': str(self.severity),
            'code': self.code,
            'message': self.message,
            'remediation': self.remediation,
            'room_id': self.room_id,
            'position': list(self.position) if self.position is not None else None,
        }


@dataclass
class ValidationResult:
    """All findings for one level.

    A result passes when it holds no FAIL issue; INFO and WARN never fail it.
    """
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    def _with_severity(self, severity: Severity) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == severity]

    @property
    def errors(self) -> List[ValidationIssue]:
        return self._with_severity(Severity.FAIL)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self._with_severity(Severity.WARN)

    @property
    def infos(self) -> List[ValidationIssue]:
        return self._with_severity(Severity.INFO)

    def codes(self) -> List[str]:
        """Codes of all issues, in the order they were found."""
        return [i.code for i in self.issues]

    def by_code(self) -> Dict[str, List[ValidationIssue]]:
        grouped: Dict[str, List[ValidationIssue]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.code, []).append(issue)
        return grouped

    def for_room(self, room_id: int) -> List[ValidationIssue]:
        return [i for i in self.issues if i.room_id == room_id]

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def extend(self, issues: List[ValidationIssue]) -> 'ValidationResult':
        self.issues.extend(issues)
        return self

    def report(self) -> str:
        """Multi-line report, FAIL issues first."""
        if not self.issues:
            return "Validation passed: No issues found"

        status = "PASSED" if self.passed else "FAILED"
        lines = [f"Validation {status}: {len(self.issues)} issue(s)", "-" * 60]
        for severity in (Severity.FAIL, Severity.WARN, Severity.INFO):
            group = self._with_severity(severity)
            if group:
                lines.append(f"\n{severity.name} ({len(group)}):")
                lines.extend(issue.format() for issue in group)
        return "\n".join(lines)

    def to_dict(self) -> Dict:
        return {
            'passed': self.passed,
            'issue_count': len(self.issues),
            'fail_count': len(self.errors),
            'warn_count': len(self.warnings),
            'info_count': len(self.infos),
            'issues': [issue.to_dict() for issue in self.issues],
        }


class ValidationError(Exception):
    """Raised by fail-fast validation when a level has FAIL issues.

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())
