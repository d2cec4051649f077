"""TOML definition loading."""
