"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest

from fakes import InMemoryRuleStore

from appblock.core.theme import reset_theme_cache
from appblock.rules.naming import RuleNamer


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and state directories at a temporary location."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    reset_theme_cache()
    return tmp_path


@pytest.fixture
def store() -> InMemoryRuleStore:
    """Empty in-memory rule store."""
    return InMemoryRuleStore()


@pytest.fixture
def namer() -> RuleNamer:
    """Namer using the default prefix."""
    return RuleNamer("AppBlocker Rule - ")


@pytest.fixture
def app_tree(tmp_path: Path) -> Path:
    """Application directory with executables, libraries and a subfolder.

    Layout:
        MyApp/game.exe
        MyApp/launcher.exe
        MyApp/readme.txt
        MyApp/bin/engine.dll
        MyApp/bin/CrashReporter.exe
    """
    root = tmp_path / "MyApp"
    (root / "bin").mkdir(parents=True)
    files = ("game.exe", "launcher.exe", "readme.txt", "bin/engine.dll", "bin/CrashReporter.exe")
    for rel in files:
        (root / rel).write_text("x")
    return root


@pytest.fixture
def sample_show_rule_output() -> str:
    """Sample ``netsh advfirewall firewall show rule name=all verbose`` output."""
    return """
Rule Name:                            AppBlocker Rule - MyApp - game.exe (Inbound)
----------------------------------------------------------------------
Description:
Enabled:                              Yes
Direction:                            In
Profiles:                             Domain,Private,Public
Grouping:
LocalIP:                              Any
RemoteIP:                             Any
Protocol:                             Any
Edge traversal:                       No
Program:                              C:\\Games\\MyApp\\game.exe
InterfaceTypes:                       Any
Security:                             NotRequired
Rule source:                          Local Setting
Action:                               Block

Rule Name:                            AppBlocker Rule - MyApp - game.exe (Outbound)
----------------------------------------------------------------------
Enabled:                              Yes
Direction:                            Out
Profiles:                             Domain,Private,Public
Program:                              C:\\Games\\MyApp\\game.exe
Action:                               Block

Rule Name:                            Core Networking - DNS (UDP-Out)
----------------------------------------------------------------------
Enabled:                              Yes
Direction:                            Out
Profiles:                             Domain,Private,Public
Program:                              %SystemRoot%\\system32\\svchost.exe
Action:                               Allow
Ok.
"""


@pytest.fixture
def dry_run_store() -> InMemoryRuleStore:
    """Empty in-memory rule store in dry-run mode."""
    return InMemoryRuleStore(dry_run=True)
