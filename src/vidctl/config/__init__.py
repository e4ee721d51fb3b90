"""Configuration — TOML discovery, unified settings, logging setup."""
