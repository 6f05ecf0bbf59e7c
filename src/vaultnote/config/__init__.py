"""Configuration: TOML models, settings resolution, logging setup."""
