"""Firewall rule stores.

This module provides the abstract RuleStore interface and the netsh
backend for the Windows Defender Firewall.
"""

from appblock.stores.base import RuleStore, StoreError, is_pattern, matches
from appblock.stores.netsh import NetshRuleStore, parse_show_rule_output

__all__ = [
    "NetshRuleStore",
    "RuleStore",
    "StoreError",
    "is_pattern",
    "matches",
    "parse_show_rule_output",
]
