"""Structural edits over a forest of sections.

Every operation takes the current forest and returns the updated one.
Inputs are never modified: the sections on the path from the root to the
target are copied and everything else is shared with the input.

An unknown id is not an error. The operation does nothing and returns the
input list itself, so ``new is forest`` tells the caller nothing changed.
"""

from typing import Callable, Iterator, Literal, Optional

from prompt_outline.ids import IdFactory, resolve_id_factory
from prompt_outline.section import Section


Direction = Literal["up", "down"]

DEFAULT_ROOT_TITLE = "New Section"
DEFAULT_ROOT_CONTENT = ""
DEFAULT_CHILD_TITLE = "New Subsection"
DEFAULT_CHILD_CONTENT = "Add your content here..."

# Draws allowed beyond the number of ids already in use
MAX_EXTRA_ID_ATTEMPTS = 100

# Receives a sibling list and the index of the target; returns the new list
SiblingEdit = Callable[[list[Section], int], list[Section]]


class DuplicateSectionIdError(ValueError):
    """Raised when an inserted section reuses an id already in the forest.

    Attributes:
        section_ids: The colliding ids
    """

    def __init__(self, section_ids: set[str]):
        self.section_ids = section_ids
        super().__init__(f"Section ids already in use: {', '.join(sorted(section_ids))}")


def iter_sections(sections: list[Section]) -> Iterator[Section]:
    """Yield every section in the forest, depth-first in document order."""
    for section in sections:
        yield from section.walk()


def find_section(sections: list[Section], section_id: str) -> Optional[Section]:
    """Find a section anywhere in the forest by id."""
    for section in iter_sections(sections):
        if section.id == section_id:
            return section
    return None


def count_sections(sections: list[Section]) -> int:
    """Total number of sections in the forest."""
    return sum(1 for _ in iter_sections(sections))


def _edit_siblings(sections: list[Section], section_id: str, edit: SiblingEdit) -> list[Section]:
    """Apply ``edit`` to the sibling list holding ``section_id``.

    Rebuilds only the ancestors of the edited list. Returns ``sections``
    unchanged (same object) when the id is not found.
    """
    for index, section in enumerate(sections):
        if section.id == section_id:
            return edit(sections, index)

    for index, section in enumerate(sections):
        children = section.children or []
        new_children = _edit_siblings(children, section_id, edit)
        if new_children is not children:
            updated = section.model_copy(update={"children": new_children})
            return [*sections[:index], updated, *sections[index + 1:]]

    return sections


def _update_section(sections: list[Section], section_id: str, **changes) -> list[Section]:
    def edit(siblings: list[Section], index: int) -> list[Section]:
        updated = siblings[index].model_copy(update=changes)
        return [*siblings[:index], updated, *siblings[index + 1:]]

    return _edit_siblings(sections, section_id, edit)


def toggle_visibility(sections: list[Section], section_id: str) -> list[Section]:
    """Flip the visible flag of one section. Nothing else changes."""
    target = find_section(sections, section_id)
    if target is None:
        return sections
    return _update_section(sections, section_id, visible=not target.visible)


def delete_section(sections: list[Section], section_id: str) -> list[Section]:
    """Remove a section together with its whole subtree."""

    def edit(siblings: list[Section], index: int) -> list[Section]:
        return [*siblings[:index], *siblings[index + 1:]]

    return _edit_siblings(sections, section_id, edit)


def move_section(sections: list[Section], section_id: str, direction: Direction) -> list[Section]:
    """Swap a section with its previous ("up") or next ("down") sibling.

    Moving the first sibling up or the last sibling down does nothing.

    Raises:
        ValueError: If direction is not "up" or "down"
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Invalid move direction: {direction!r} (expected 'up' or 'down')")
    offset = -1 if direction == "up" else 1

    def edit(siblings: list[Section], index: int) -> list[Section]:
        other = index + offset
        if other < 0 or other >= len(siblings):
            return siblings
        moved = list(siblings)
        moved[index], moved[other] = moved[other], moved[index]
        return moved

    return _edit_siblings(sections, section_id, edit)


def rename_section(sections: list[Section], section_id: str, title: str) -> list[Section]:
    """Replace the title of one section."""
    return _update_section(sections, section_id, title=title)


def set_content(sections: list[Section], section_id: str, content: str) -> list[Section]:
    """Replace the content of one section."""
    return _update_section(sections, section_id, content=content)


def _fresh_id(sections: list[Section], id_factory: Optional[IdFactory]) -> str:
    """Draw ids until one is not already used in the forest.

    Raises:
        DuplicateSectionIdError: If the factory yields only ids in use
    """
    new_id = resolve_id_factory(id_factory)
    existing = {s.id for s in iter_sections(sections)}
    # Each taken id can be drawn once by a factory that never repeats
    for _ in range(len(existing) + MAX_EXTRA_ID_ATTEMPTS):
        section_id = new_id()
        if section_id not in existing:
            return section_id
    raise DuplicateSectionIdError({section_id})


def _check_new_ids(sections: list[Section], section: Section) -> None:
    existing = {s.id for s in iter_sections(sections)}
    incoming = [s.id for s in section.walk()]
    collisions = existing.intersection(incoming)
    # Ids repeated inside the new subtree collide too
    collisions.update(i for i in incoming if incoming.count(i) > 1)
    if collisions:
        raise DuplicateSectionIdError(collisions)


def insert_child(
    sections: list[Section],
    parent_id: str,
    section: Optional[Section] = None,
    *,
    id_factory: Optional[IdFactory] = None,
    title: str = DEFAULT_CHILD_TITLE,
    content: str = DEFAULT_CHILD_CONTENT,
) -> tuple[list[Section], Optional[str]]:
    """Append a section to the end of a parent's children.

    Args:
        sections: Current forest
        parent_id: Id of the parent section
        section: Section to insert (None = build a level-2 default from
                 title/content with a fresh id)
        id_factory: Id source for the default section
        title: Title for the default section
        content: Content for the default section

    Returns:
        Tuple of (new forest, id of the inserted section). The id is None and
        the forest is returned as-is when the parent does not exist.

    Raises:
        DuplicateSectionIdError: If a supplied section reuses an existing id,
            or id_factory only yields ids already in use
    """
    if find_section(sections, parent_id) is None:
        return sections, None

    if section is None:
        section = Section(
            id=_fresh_id(sections, id_factory),
            level=2,
            title=title,
            content=content,
        )
    else:
        _check_new_ids(sections, section)

    def edit(siblings: list[Section], index: int) -> list[Section]:
        parent = siblings[index]
        updated = parent.model_copy(update={"children": [*(parent.children or []), section]})
        return [*siblings[:index], updated, *siblings[index + 1:]]

    return _edit_siblings(sections, parent_id, edit), section.id


def insert_root(
    sections: list[Section],
    section: Optional[Section] = None,
    *,
    id_factory: Optional[IdFactory] = None,
    title: str = DEFAULT_ROOT_TITLE,
    content: str = DEFAULT_ROOT_CONTENT,
) -> tuple[list[Section], str]:
    """Append a section to the end of the root list.

    Args:
        sections: Current forest
        section: Section to insert (None = build a level-1 default)
        id_factory: Id source for the default section
        title: Title for the default section
        content: Content for the default section

    Returns:
        Tuple of (new forest, id of the inserted section)

    Raises:
        DuplicateSectionIdError: If a supplied section reuses an existing id,
            or id_factory only yields ids already in use
    """
    if section is None:
        section = Section(
            id=_fresh_id(sections, id_factory),
            level=1,
            title=title,
            content=content,
        )
    else:
        _check_new_ids(sections, section)

    return [*sections, section], section.id
