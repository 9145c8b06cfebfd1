"""Packaged configuration files (default TOML settings and vocabularies)."""
