"""Prompt outline parser - Split long prompts into editable section trees.

This package turns a pasted prompt into an ordered forest of sections and
rebuilds equivalent text from that forest.

Key features:
- Recognises ``#``/``##``/``###`` headings, ``` fences and ``<tag>`` blocks
- Fence and tag block contents are kept verbatim, never re-parsed
- Copy-producing edits (hide, delete, move, rename, insert) with structural sharing
- Forest dumps to plain nested records / JSON for storage

Example:
    >>> from prompt_outline import PromptOutline
    >>> outline = PromptOutline.parse("# Role\\nYou help.\\n<rules>\\nBe brief.\\n</rules>")
    >>> outline.sections[0].children[0].title
    'rules'
    >>> text = outline.render()
"""

from prompt_outline.classifier import (
    ClassifiedLine,
    LineKind,
    ScanMode,
    ScanState,
    classify_line,
    classify_lines,
    is_tag_name,
)
from prompt_outline.ids import CounterIdFactory, IdFactory, generate_random_id
from prompt_outline.mutations import (
    DuplicateSectionIdError,
    count_sections,
    delete_section,
    find_section,
    insert_child,
    insert_root,
    iter_sections,
    move_section,
    rename_section,
    set_content,
    toggle_visibility,
)
from prompt_outline.parser import PromptOutline, SectionTreeBuilder, parse_sections
from prompt_outline.renderer import render_sections
from prompt_outline.section import (
    Section,
    dump_sections,
    load_sections,
    sections_from_json,
    sections_to_json,
)

__version__ = "0.1.0"

__all__ = [
    "ClassifiedLine",
    "LineKind",
    "ScanMode",
    "ScanState",
    "classify_line",
    "classify_lines",
    "is_tag_name",
    "CounterIdFactory",
    "IdFactory",
    "generate_random_id",
    "DuplicateSectionIdError",
    "count_sections",
    "delete_section",
    "find_section",
    "insert_child",
    "insert_root",
    "iter_sections",
    "move_section",
    "rename_section",
    "set_content",
    "toggle_visibility",
    "PromptOutline",
    "SectionTreeBuilder",
    "parse_sections",
    "render_sections",
    "Section",
    "dump_sections",
    "load_sections",
    "sections_from_json",
    "sections_to_json",
]
