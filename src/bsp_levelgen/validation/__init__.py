"""
Validation package for generated levels.

Checks the structural guarantees of a LevelData and reports them as
ValidationIssues with pass/fail status.
"""

from .core import Severity, ValidationError, ValidationIssue, ValidationResult
from .level_checks import LevelValidator, validate_level

__all__ = [
    'LevelValidator',
    'Severity',
    'ValidationError',
    'ValidationIssue',
    'ValidationResult',
    'validate_level',
]
