"""Unit tests for line classification."""

import pytest

from prompt_outline.classifier import (
    INITIAL_STATE,
    LineKind,
    ScanMode,
    ScanState,
    classify_line,
    classify_lines,
    is_tag_name,
)


XML_STATE = ScanState(ScanMode.XML_BLOCK, "system")


class TestHeadings:
    """Tests for heading recognition in normal mode."""

    @pytest.mark.parametrize(
        "line,kind,title",
        [
            ("# Title", LineKind.H1, "Title"),
            ("## Sub title", LineKind.H2, "Sub title"),
            ("### Deep  ", LineKind.H3, "Deep"),
            ("#\tTabbed", LineKind.H1, "Tabbed"),
        ],
    )
    def test_heading_levels(self, line, kind, title):
        """Test each heading marker maps to its level and trimmed title."""
        classified, state = classify_line(line, INITIAL_STATE)

        assert classified.kind is kind
        assert classified.text == title
        assert state == INITIAL_STATE

    @pytest.mark.parametrize(
        "line",
        [
            "#### Too deep",
            "#NoSpace",
            "# #hash",
            "#",
            "# ",
            "  # indented",
            "plain text",
        ],
    )
    def test_non_headings_are_verbatim(self, line):
        """Test lines that only look like headings stay plain text."""
        classified, _ = classify_line(line, INITIAL_STATE)

        assert classified.kind is LineKind.VERBATIM
        assert classified.text == line

    def test_heading_level_property(self):
        """Test heading_level is set only for heading kinds."""
        assert LineKind.H1.heading_level == 1
        assert LineKind.H3.heading_level == 3
        assert LineKind.VERBATIM.heading_level is None


class TestFences:
    """Tests for code fence handling."""

    def test_fence_opens_code_block(self):
        """Test an opening fence switches to code block mode."""
        classified, state = classify_line("```python", INITIAL_STATE)

        assert classified.kind is LineKind.FENCE
        assert state.mode is ScanMode.CODE_BLOCK

    def test_indented_fence_is_recognised(self):
        """Test the fence test trims the line first."""
        classified, state = classify_line("   ```", INITIAL_STATE)

        assert classified.kind is LineKind.FENCE
        assert state.in_code_block

    def test_everything_inside_fence_is_verbatim(self):
        """Test headings and tags inside a fence are not interpreted."""
        state = ScanState(ScanMode.CODE_BLOCK)
        for line in ["# Heading", "<tag>", "</tag>", "### x"]:
            classified, state = classify_line(line, state)
            assert classified.kind is LineKind.VERBATIM
        assert state.in_code_block

    def test_closing_fence_returns_to_normal(self):
        """Test a second fence closes the code block."""
        classified, state = classify_line("```", ScanState(ScanMode.CODE_BLOCK))

        assert classified.kind is LineKind.FENCE
        assert state == INITIAL_STATE

    def test_fence_inside_xml_block_resumes_block(self):
        """Test closing a fence opened inside a tag block returns to the block."""
        _, state = classify_line("```", XML_STATE)
        assert state.mode is ScanMode.CODE_BLOCK
        assert state.xml_tag == "system"

        classified, state = classify_line("</system>", state)
        assert classified.kind is LineKind.VERBATIM

        _, state = classify_line("```", state)
        assert state == XML_STATE


class TestXmlBlocks:
    """Tests for XML-style tag blocks."""

    def test_open_tag(self):
        """Test a bare opening tag enters an XML block."""
        classified, state = classify_line("<system>", INITIAL_STATE)

        assert classified.kind is LineKind.XML_OPEN
        assert classified.text == "system"
        assert state == XML_STATE
        assert state.in_xml_block

    @pytest.mark.parametrize(
        "line",
        ["<system> ", " <system>", "<system attr='1'>", "<1abc>", "<a-b>", "<>", "<a><b>"],
    )
    def test_open_tag_must_be_whole_line(self, line):
        """Test anything beyond a bare tag on the line is plain text."""
        classified, state = classify_line(line, INITIAL_STATE)

        assert classified.kind is LineKind.VERBATIM
        assert state == INITIAL_STATE

    def test_matching_close_tag(self):
        """Test the matching close tag leaves the block."""
        classified, state = classify_line("</system>", XML_STATE)

        assert classified.kind is LineKind.XML_CLOSE
        assert classified.text == "system"
        assert state == INITIAL_STATE

    def test_mismatched_close_tag_is_verbatim(self):
        """Test a close tag for another name stays inside the block."""
        classified, state = classify_line("</other>", XML_STATE)

        assert classified.kind is LineKind.VERBATIM
        assert state == XML_STATE

    @pytest.mark.parametrize("line", ["# Heading", "## Sub", "<nested>", "plain"])
    def test_block_contents_are_not_interpreted(self, line):
        """Test headings and nested tags inside a block are plain text."""
        classified, state = classify_line(line, XML_STATE)

        assert classified.kind is LineKind.VERBATIM
        assert state == XML_STATE

    def test_close_tag_outside_block_is_verbatim(self):
        """Test a stray close tag in normal mode is plain text."""
        classified, _ = classify_line("</system>", INITIAL_STATE)

        assert classified.kind is LineKind.VERBATIM


class TestIsTagName:
    """Tests for the bare identifier check."""

    @pytest.mark.parametrize("text", ["system", "_private", "rules_v2", "A"])
    def test_identifiers(self, text):
        """Test valid identifiers."""
        assert is_tag_name(text)

    @pytest.mark.parametrize("text", ["", "2fast", "New Section", "a-b", "system\n"])
    def test_non_identifiers(self, text):
        """Test invalid identifiers."""
        assert not is_tag_name(text)


def test_classify_lines_threads_state():
    """Test classify_lines carries state across a whole document."""
    kinds = [c.kind for c in classify_lines(["# A", "```", "# B", "```", "<x>", "# C", "</x>"])]

    assert kinds == [
        LineKind.H1,
        LineKind.FENCE,
        LineKind.VERBATIM,
        LineKind.FENCE,
        LineKind.XML_OPEN,
        LineKind.VERBATIM,
        LineKind.XML_CLOSE,
    ]
