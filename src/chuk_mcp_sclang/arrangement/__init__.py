"""
Arrangement management.

This module provides:
- ArrangementManager: Lifecycle management and YAML persistence
- ArrangementValidator: Advisory content checks
"""

from chuk_mcp_sclang.arrangement.manager import ArrangementManager, ArrangementMetadata
from chuk_mcp_sclang.arrangement.validator import (
    ArrangementValidator,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    validate_arrangement,
)

__all__ = [
    "ArrangementManager",
    "ArrangementMetadata",
    "ArrangementValidator",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "validate_arrangement",
]
