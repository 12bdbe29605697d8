"""appblock - Per-application network blocking via host firewall rules."""

__version__ = "0.1.0"
