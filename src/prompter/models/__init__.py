"""Pydantic data models for Prompter."""

from prompter.models.config import ExportConfig, IdConfig, PrompterConfig, SectionDefaults
from prompter.models.export import ExportPayload
