"""Bundled data files for appblock."""
