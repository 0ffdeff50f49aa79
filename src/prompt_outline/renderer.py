"""Prompt renderer: rebuild text from a forest of sections.

Hidden sections are skipped together with their subtree. Heading depth
comes from the position in the tree, not from the stored ``level``, so a
section moved or inserted under a new parent renders at its new depth.
"""

from prompt_outline.classifier import is_tag_name
from prompt_outline.section import Section


def render_sections(sections: list[Section]) -> str:
    """Render a forest back to prompt text.

    Sections whose title is a bare identifier (``system``, ``rules_v2``)
    render as tag blocks; every other section renders as a heading.

    Args:
        sections: Root sections

    Returns:
        Rendered prompt text

    Examples:
        >>> render_sections([Section(id="a", level=1, title="Role Play", content="Be kind")])
        '# Role Play\\n\\nBe kind\\n'
    """
    lines: list[str] = []
    for section in sections:
        _render_section(section, 1, lines)
    return "\n".join(lines)


def _render_section(section: Section, depth: int, lines: list[str]) -> None:
    if not section.visible:
        return

    children = section.children or []

    if is_tag_name(section.title):
        lines.append(f"<{section.title}>")
        if section.content:
            lines.append(section.content)
        for child in children:
            _render_section(child, depth + 1, lines)
        lines.append(f"</{section.title}>")
        lines.append("")
        return

    lines.append(f"{'#' * depth} {section.title}")
    if section.content:
        lines.extend(["", section.content, ""])
    for child in children:
        _render_section(child, depth + 1, lines)
