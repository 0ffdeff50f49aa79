"""Prompt parser for heading- and tag-structured documents.

This module turns a pasted prompt into an ordered forest of sections.
Three conventions are recognised:

- Markdown headings ``#``, ``##`` and ``###``
- Fenced code blocks (```), whose contents are never interpreted
- Single-level XML-style blocks (``<name>`` ... ``</name>``), whose
  contents become the leaf content of one section

Text before the first heading or tag has no section to belong to and is
dropped. Unterminated fences and tag blocks are closed at end of input.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from prompt_outline.classifier import INITIAL_STATE, LineKind, classify_line
from prompt_outline.ids import IdFactory, resolve_id_factory
from prompt_outline.mutations import count_sections, find_section, iter_sections
from prompt_outline.renderer import render_sections
from prompt_outline.section import Section


class SectionTreeBuilder:
    """Line-fed builder that assembles sections as lines arrive.

    Keeps one cursor per heading level pointing at the most recently
    opened section of that level. Buffered text is flushed into the
    deepest open cursor whenever a new boundary line is seen.

    Example:
        >>> builder = SectionTreeBuilder()
        >>> for line in "# Title\\nBody".split("\\n"):
        ...     builder.feed(line)
        >>> builder.finish()[0].content
        'Body'
    """

    def __init__(self, id_factory: Optional[IdFactory] = None):
        self._new_id = resolve_id_factory(id_factory)
        self._state = INITIAL_STATE
        self._h1: Optional[Section] = None
        self._h2: Optional[Section] = None
        self._h3: Optional[Section] = None
        self._buffer: list[str] = []
        self._roots: list[Section] = []

    def feed(self, line: str) -> None:
        """Consume one line (without its trailing newline)."""
        classified, self._state = classify_line(line, self._state)
        kind = classified.kind

        if kind in (LineKind.FENCE, LineKind.VERBATIM):
            self._buffer.append(line)

        elif kind is LineKind.XML_OPEN:
            self._flush()
            # Tag blocks hang off the open h1 only, never off an h2/h3
            section = self._create(2, classified.text)
            self._attach(section, self._h1)
            self._h2 = section
            self._h3 = None

        elif kind is LineKind.XML_CLOSE:
            # Cursors stay put: the tag section is still the deepest open one
            self._flush()

        elif kind is LineKind.H1:
            self._flush()
            section = self._create(1, classified.text)
            self._roots.append(section)
            self._h1 = section
            self._h2 = None
            self._h3 = None

        elif kind is LineKind.H2:
            self._flush()
            section = self._create(2, classified.text)
            self._attach(section, self._h1)
            self._h2 = section
            self._h3 = None

        elif kind is LineKind.H3:
            self._flush()
            section = self._create(3, classified.text)
            self._attach(section, self._h2 if self._h2 is not None else self._h1)
            self._h3 = section

    def finish(self) -> list[Section]:
        """Flush pending text and return the root sections.

        An XML block still open at this point is treated as closed.
        """
        self._flush()
        return self._roots

    def _deepest_open(self) -> Optional[Section]:
        for cursor in (self._h3, self._h2, self._h1):
            if cursor is not None:
                return cursor
        return None

    def _create(self, level: int, title: str) -> Section:
        return Section.create(level, title, id_factory=self._new_id)

    def _attach(self, section: Section, parent: Optional[Section]) -> None:
        if parent is None:
            self._roots.append(section)
        else:
            parent.children.append(section)

    def _flush(self) -> None:
        """Move buffered text into the deepest open section."""
        text = "\n".join(self._buffer).strip()
        self._buffer = []

        target = self._deepest_open()
        if target is None or not text:
            # Nowhere to put it, or nothing worth putting
            return

        # Text after a closing tag still lands here and replaces the block
        target.content = text


def parse_sections(text: str, id_factory: Optional[IdFactory] = None) -> list[Section]:
    """Parse a prompt into a forest of sections.

    Never raises: every input, including the empty string, yields a
    (possibly empty) forest.

    Args:
        text: Raw prompt text
        id_factory: Id source for new sections (defaults to random UUIDs)

    Returns:
        Root sections in document order
    """
    builder = SectionTreeBuilder(id_factory=id_factory)
    for line in text.split("\n"):
        builder.feed(line)
    return builder.finish()


@dataclass
class PromptOutline:
    """Parsed representation of a prompt.

    Attributes:
        sections: Root sections in document order
        source_text: Original prompt text, for debugging
    """

    sections: list[Section]
    source_text: str = ""

    @classmethod
    def parse(cls, text: str, id_factory: Optional[IdFactory] = None) -> "PromptOutline":
        """Parse prompt text into an outline.

        Args:
            text: Raw prompt text
            id_factory: Id source for new sections

        Returns:
            Parsed PromptOutline
        """
        return cls(sections=parse_sections(text, id_factory=id_factory), source_text=text)

    def render(self) -> str:
        """Rebuild prompt text from the visible sections."""
        return render_sections(self.sections)

    def find_section(self, section_id: str) -> Optional[Section]:
        return find_section(self.sections, section_id)

    def iter_sections(self) -> Iterator[Section]:
        return iter_sections(self.sections)

    def count_sections(self) -> int:
        return count_sections(self.sections)

    def visible_root_count(self) -> int:
        """Number of visible top-level sections."""
        return sum(1 for section in self.sections if section.visible)
