"""Rule lifecycle module.

This module provides rule naming, idempotent rule creation for an
application, and name-based discovery, grouping and removal of rules
previously created by appblock.
"""

from appblock.rules.grouping import UNKNOWN_APPLICATION, RuleGrouper
from appblock.rules.manager import RuleManager
from appblock.rules.naming import SEPARATOR, RuleNamer

__all__ = [
    "SEPARATOR",
    "UNKNOWN_APPLICATION",
    "RuleGrouper",
    "RuleManager",
    "RuleNamer",
]
