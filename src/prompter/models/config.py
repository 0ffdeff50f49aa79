"""Configuration models for Prompter."""

from pydantic import BaseModel, Field, ValidationError, field_validator
from pathlib import Path
from typing import Literal
import yaml

from prompt_outline.mutations import (
    DEFAULT_CHILD_CONTENT,
    DEFAULT_CHILD_TITLE,
    DEFAULT_ROOT_CONTENT,
    DEFAULT_ROOT_TITLE,
)


EXPORT_SUFFIXES = (".md", ".txt")


class SectionDefaults(BaseModel):
    """Titles and content given to sections added by hand."""

    root_title: str = Field(
        default=DEFAULT_ROOT_TITLE,
        description="Title of a new top-level section"
    )

    root_content: str = Field(
        default=DEFAULT_ROOT_CONTENT,
        description="Content of a new top-level section"
    )

    child_title: str = Field(
        default=DEFAULT_CHILD_TITLE,
        description="Title of a new subsection"
    )

    child_content: str = Field(
        default=DEFAULT_CHILD_CONTENT,
        description="Placeholder content of a new subsection"
    )

    model_config = {"frozen": True}


class ExportConfig(BaseModel):
    """Configuration for exporting the rebuilt prompt."""

    filename: str = Field(
        default="organized-prompt.md",
        description="Suggested download filename (.md or .txt)"
    )

    media_type: str = Field(
        default="text/markdown",
        description="Content type handed to the download collaborator"
    )

    @field_validator('filename')
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Validate the filename is bare and has a text suffix."""
        path = Path(v)
        if path.name != v or not path.stem:
            raise ValueError(f"Export filename must be a bare file name: {v!r}")
        if path.suffix.lower() not in EXPORT_SUFFIXES:
            raise ValueError(
                f"Export filename must end in {' or '.join(EXPORT_SUFFIXES)}: {v!r}"
            )
        return v

    model_config = {"frozen": True}


class IdConfig(BaseModel):
    """Configuration for section id generation."""

    strategy: Literal["uuid", "counter"] = Field(
        default="uuid",
        description="'uuid' for random ids, 'counter' for s1, s2, ..."
    )

    prefix: str = Field(
        default="s",
        min_length=1,
        description="Prefix for counter ids"
    )

    model_config = {"frozen": True}


class PrompterConfig(BaseModel):
    """Root configuration for Prompter."""

    sections: SectionDefaults = Field(default_factory=SectionDefaults, description="New section defaults")
    export: ExportConfig = Field(default_factory=ExportConfig, description="Export settings")
    ids: IdConfig = Field(default_factory=IdConfig, description="Section id settings")

    @classmethod
    def load(cls, path: Path) -> "PrompterConfig":
        """
        Load configuration from YAML file.

        Every key is optional; an empty file yields the defaults.

        Args:
            path: Path to config.yaml file

        Returns:
            Validated PrompterConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If YAML is invalid or validation fails
        """
        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found at {path}\n\n"
                f"Example format:\n\n"
                f"sections:\n"
                f"  root_title: New Section\n"
                f"  child_title: New Subsection\n\n"
                f"export:\n"
                f"  filename: organized-prompt.md\n\n"
                f"ids:\n"
                f"  strategy: uuid\n"
            )

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {path} must be a mapping, got {type(data).__name__}")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

    model_config = {"frozen": True}
