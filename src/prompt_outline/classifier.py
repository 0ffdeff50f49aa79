"""Line classification for prompt outlines.

A prompt is scanned line by line. Each line is classified against the
current scan state, which is one of:

- NORMAL: headings and opening tags are recognised
- CODE_BLOCK: inside a ``` fence, everything is verbatim
- XML_BLOCK: inside ``<name>`` ... ``</name>``, only the matching close tag
  (and fences) are recognised

Rules are applied in strict precedence order: fence, code block body,
opening tag, closing tag, XML block body, headings, plain text.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


FENCE_MARKER = "```"

TAG_NAME_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"

_TAG_NAME_RE = re.compile(TAG_NAME_PATTERN)
_XML_OPEN_RE = re.compile(rf"<({TAG_NAME_PATTERN})>")
_XML_CLOSE_RE = re.compile(rf"</({TAG_NAME_PATTERN})>")

# Checked deepest first so "### x" is never read as a shallower heading
_HEADING_RES = (
    (3, re.compile(r"^###\s+[^#]"), re.compile(r"^###\s+")),
    (2, re.compile(r"^##\s+[^#]"), re.compile(r"^##\s+")),
    (1, re.compile(r"^#\s+[^#]"), re.compile(r"^#\s+")),
)


class ScanMode(Enum):
    """Scanner mode carried from one line to the next."""

    NORMAL = "normal"
    CODE_BLOCK = "code_block"
    XML_BLOCK = "xml_block"


class LineKind(Enum):
    """Classification of a single input line."""

    FENCE = "fence"
    VERBATIM = "verbatim"
    XML_OPEN = "xml_open"
    XML_CLOSE = "xml_close"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"

    @property
    def heading_level(self) -> Optional[int]:
        return _HEADING_LEVELS.get(self)


_HEADING_LEVELS = {LineKind.H1: 1, LineKind.H2: 2, LineKind.H3: 3}
_HEADING_KINDS = {level: kind for kind, level in _HEADING_LEVELS.items()}


@dataclass(frozen=True)
class ScanState:
    """Scanner state between lines.

    Attributes:
        mode: Current scan mode
        xml_tag: Name of the open XML block, or None. Kept while a fence is
                 open inside the block so that closing the fence resumes
                 the block.
    """

    mode: ScanMode = ScanMode.NORMAL
    xml_tag: Optional[str] = None

    @property
    def in_code_block(self) -> bool:
        return self.mode is ScanMode.CODE_BLOCK

    @property
    def in_xml_block(self) -> bool:
        return self.xml_tag is not None


INITIAL_STATE = ScanState()


@dataclass(frozen=True)
class ClassifiedLine:
    """A line together with its classification.

    Attributes:
        kind: Line classification
        text: Tag name for XML lines, trimmed title for headings,
              the raw line otherwise
        line: Raw input line
    """

    kind: LineKind
    text: str
    line: str


def is_tag_name(text: str) -> bool:
    """Check whether text is a bare identifier usable as an XML tag name.

    Examples:
        >>> is_tag_name("system")
        True
        >>> is_tag_name("New Section")
        False
    """
    return _TAG_NAME_RE.fullmatch(text) is not None


def classify_line(line: str, state: ScanState) -> tuple[ClassifiedLine, ScanState]:
    """Classify one line and compute the state for the next line.

    Args:
        line: Raw line, without its trailing newline
        state: Scanner state after the previous line

    Returns:
        Tuple of (classified line, next state)
    """
    # Fences toggle everywhere, including inside XML blocks
    if line.strip().startswith(FENCE_MARKER):
        if state.in_code_block:
            mode = ScanMode.XML_BLOCK if state.in_xml_block else ScanMode.NORMAL
        else:
            mode = ScanMode.CODE_BLOCK
        return ClassifiedLine(LineKind.FENCE, line, line), ScanState(mode, state.xml_tag)

    if state.in_code_block:
        return ClassifiedLine(LineKind.VERBATIM, line, line), state

    if not state.in_xml_block:
        match = _XML_OPEN_RE.fullmatch(line)
        if match:
            name = match.group(1)
            return (
                ClassifiedLine(LineKind.XML_OPEN, name, line),
                ScanState(ScanMode.XML_BLOCK, name),
            )
    else:
        match = _XML_CLOSE_RE.fullmatch(line)
        if match and match.group(1) == state.xml_tag:
            return ClassifiedLine(LineKind.XML_CLOSE, state.xml_tag, line), INITIAL_STATE

        # Nothing else is interpreted inside an XML block
        return ClassifiedLine(LineKind.VERBATIM, line, line), state

    for level, pattern, marker in _HEADING_RES:
        if pattern.match(line):
            title = marker.sub("", line, count=1).strip()
            return ClassifiedLine(_HEADING_KINDS[level], title, line), state

    return ClassifiedLine(LineKind.VERBATIM, line, line), state


def classify_lines(lines: list[str]) -> list[ClassifiedLine]:
    """Classify a whole sequence of lines starting from the initial state."""
    state = INITIAL_STATE
    classified = []
    for line in lines:
        result, state = classify_line(line, state)
        classified.append(result)
    return classified
