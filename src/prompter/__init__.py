"""Prompter - organise long prompts as editable outlines."""

from prompter.session import PromptSession

__version__ = "0.1.0"

__all__ = ["PromptSession"]
