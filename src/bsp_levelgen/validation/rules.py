"""
Validation rule definitions.

Each rule has:
- Code: Unique identifier (e.g., "LVL-001")
- Severity: FAIL, WARN, or INFO
- Message template: Human-readable description
- Remediation: Suggested fix

All rules belong to the LVL category: structural guarantees of a generated
level (containment, disjoint rooms, reachability, wall culling, spawns).
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule.

    Attributes:
        code: Unique rule code (e.g., "LVL-001")
        severity: Default severity for this rule
        message_template: Template for error message (use {placeholders})
        remediation_template: Template for suggested fix
        description: Full description of the rule
    """
    code: str
    severity: Severity
    message_template: str
    remediation_template: Optional[str] = None
    description: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        if self.remediation_template:
            return self.remediation_template.format(**kwargs)
        return None

    def issue(self, position: Optional[Tuple[float, float]] = None, **kwargs) -> ValidationIssue:
        """Build an issue for this rule from template values.

        A ``room_id`` template value also becomes the issue's room.
        """
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            remediation=self.format_remediation(**kwargs),
            room_id=kwargs.get('room_id'),
            position=position,
        )


LVL_001 = ValidationRule(
    code="LVL-001",
    severity=Severity.FAIL,
    message_template="Room {room_id} ({x}, {z}, {width}x{depth}) extends outside the map",
    remediation_template="Keep rooms inside [-{half_w}, {half_w}] x [-{half_d}, {half_d}]",
    description="Every room lies fully within the map bounds"
)

LVL_002 = ValidationRule(
    code="LVL-002",
    severity=Severity.FAIL,
    message_template="Rooms {a} and {b} overlap",
    remediation_template="Check room padding and centring against leaf bounds",
    description="BSP leaves are disjoint, so their rooms must be too"
)

LVL_003 = ValidationRule(
    code="LVL-003",
    severity=Severity.FAIL,
    message_template="Room {room_id} is {width}x{depth} but has pillars",
    remediation_template="Only rooms larger than {limit} on both axes may have pillars",
    description="Pillars are never placed in small rooms"
)

LVL_004 = ValidationRule(
    code="LVL-004",
    severity=Severity.FAIL,
    message_template="Wall segment at ({x}, {z}) does not border any carved cell",
    remediation_template="Cull walls whose four neighbours are all solid",
    description="Every emitted wall has at least one EMPTY 4-neighbour"
)

LVL_005 = ValidationRule(
    code="LVL-005",
    severity=Severity.FAIL,
    message_template="Room {room_id} is not reachable from room {start_id}",
    remediation_template="Check corridor routing between BSP siblings",
    description="Every room is reachable from every other through carved cells"
)

LVL_006 = ValidationRule(
    code="LVL-006",
    severity=Severity.FAIL,
    message_template="{corridors} corridors for {rooms} rooms; a spanning tree needs {expected}",
    remediation_template="Emit exactly one corridor per BSP split",
    description="The corridor graph is the BSP tree: one edge per internal node"
)

LVL_007 = ValidationRule(
    code="LVL-007",
    severity=Severity.FAIL,
    message_template="Centre of room {room_id} at ({x}, {z}) is solid",
    remediation_template="Keep the pillar-free zone at the room centre",
    description="Spawn points land on room centres, which must be carved"
)

LVL_008 = ValidationRule(
    code="LVL-008",
    severity=Severity.FAIL,
    message_template="{count} visible wall cell(s) missing from the wall list, first at ({x}, {z})",
    remediation_template="Emit a wall for every solid cell that borders carved space",
    description="The wall list contains every wall a player can see or touch"
)

LVL_010 = ValidationRule(
    code="LVL-010",
    severity=Severity.INFO,
    message_template="{rooms} rooms, {corridors} corridors, {walls} walls, {carved} carved cells",
    description="Summary of the validated level"
)
