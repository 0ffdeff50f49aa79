"""Shared test fixtures for all test modules."""

from textwrap import dedent

import pytest

from prompt_outline import CounterIdFactory


@pytest.fixture
def ids():
    """Deterministic section ids: s1, s2, ..."""
    return CounterIdFactory()


@pytest.fixture
def sample_prompt():
    """A prompt mixing headings, a tag block and a code fence."""
    return dedent(
        """\
        Preamble that has no section to live in.

        # Role Play

        You are a careful assistant.

        ## Tone Guide
        Be brief.

        ### Examples Given
        ```
        # a comment, not a heading
        ```

        <rules>
        Never guess.
        ## still just text
        </rules>

        # Output Format
        Plain text only.
        """
    )


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config and log lookups away from the real home directory."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("PROMPTER_LOG_LEVEL", raising=False)
    return tmp_path / "home"
