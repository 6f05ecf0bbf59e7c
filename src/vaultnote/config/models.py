"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, vaultnote.toml only contains
overrides. A fresh vault needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from vaultnote.domain.symbols import DEFAULT_SYMBOL


class LayoutConfig(BaseModel):
    """[layout] section: vault-relative directory names."""

    model_config = {"frozen": True}

    top_level_dir: str = "01 - Primary Categories"
    mid_level_dir: str = "02 - Secondary Categories"
    leaf_dir: str = "03 - Notes"
    inbox_dir: str = "00 - Inbox"
    template_dir: str = "99 - Templates"
    top_level_templates: str = "Primary Category"
    mid_level_templates: str = "Secondary Category"
    classification_templates: str = "Content Types"
    basic_classification: str = "Basic"

    @property
    def classification_root(self) -> str:
        return f"{self.template_dir}/{self.classification_templates}"


class PromptsConfig(BaseModel):
    """[prompts] section."""

    model_config = {"frozen": True}

    max_attempts: int = 3

    @field_validator("max_attempts")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        if value < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)
        return value


class SymbolsConfig(BaseModel):
    """[symbols] section."""

    model_config = {"frozen": True}

    default: str = DEFAULT_SYMBOL
    placeholder: str = "📄"


class AssemblyConfig(BaseModel):
    """[assembly] section."""

    model_config = {"frozen": True}

    timestamp_format: str = "%Y-%m-%d %H:%M"


class VaultNoteConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    prompts: PromptsConfig = Field(default_factory=PromptsConfig)
    symbols: SymbolsConfig = Field(default_factory=SymbolsConfig)
    assembly: AssemblyConfig = Field(default_factory=AssemblyConfig)
