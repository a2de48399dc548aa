"""Configuration — TOML discovery, pydantic settings, structlog setup."""
