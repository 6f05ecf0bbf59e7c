"""vaultnote: interactive note generation for category-structured vaults."""

__version__ = "0.1.0"
