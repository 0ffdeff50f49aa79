"""Editing session for a single prompt document.

Holds the section forest as application state, together with the
selection and expansion state an outline view needs, and routes every
edit through the copy-producing operations in ``prompt_outline``.

Each document gets its own session; sessions share nothing.
"""

from typing import Optional

from prompt_outline import mutations
from prompt_outline.ids import IdFactory
from prompt_outline.mutations import Direction
from prompt_outline.parser import parse_sections
from prompt_outline.renderer import render_sections
from prompt_outline.section import Section, sections_from_json, sections_to_json
from prompter.config import build_id_factory
from prompter.models.config import PrompterConfig
from prompter.models.export import ExportPayload
from prompter.utils.logging import get_logger


logger = get_logger(__name__)


class PromptSession:
    """
    State for one prompt being edited.

    Attributes:
        sections: Current forest (replaced, never mutated, on every edit)
        selected_id: Id of the selected section, or None
        expanded_ids: Ids of sections whose content is expanded in the view

    Example:
        >>> session = PromptSession()
        >>> _ = session.load_text("# Role\\nYou help.")
        >>> session.rename_section(session.selected_id, "Persona Notes")
        True
        >>> session.render()
        '# Persona Notes\\n\\nYou help.\\n'
    """

    def __init__(
        self,
        config: Optional[PrompterConfig] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        self.config = config or PrompterConfig()
        self._new_id = id_factory or build_id_factory(self.config)
        self.sections: list[Section] = []
        self.selected_id: Optional[str] = None
        self.expanded_ids: set[str] = set()
        self.source_text = ""

    def load_text(self, text: str) -> list[Section]:
        """
        Parse prompt text and make it the session's document.

        Selects the first root section and expands every direct child of
        every root.

        Args:
            text: Raw prompt text

        Returns:
            Parsed root sections
        """
        self.sections = parse_sections(text, id_factory=self._new_id)
        self.source_text = text
        self.selected_id = self.sections[0].id if self.sections else None
        self.expanded_ids = {
            child.id
            for section in self.sections
            for child in section.children
        }

        logger.info(
            "prompt_parsed",
            chars=len(text),
            roots=len(self.sections),
            sections=mutations.count_sections(self.sections),
        )
        return self.sections

    def reset(self) -> None:
        """Drop the document and all view state."""
        self.sections = []
        self.selected_id = None
        self.expanded_ids = set()
        self.source_text = ""
        logger.info("session_reset")

    def find_section(self, section_id: str) -> Optional[Section]:
        return mutations.find_section(self.sections, section_id)

    def selected_section(self) -> Optional[Section]:
        """The selected section, or None if nothing (or a removed id) is selected."""
        if self.selected_id is None:
            return None
        return self.find_section(self.selected_id)

    def select(self, section_id: str) -> bool:
        """Select a section. Returns False if the id is unknown."""
        if self.find_section(section_id) is None:
            logger.debug("section_not_found", action="select", section_id=section_id)
            return False
        self.selected_id = section_id
        return True

    def toggle_expanded(self, section_id: str) -> bool:
        """Flip expansion of a section in the view. Returns the new state."""
        if section_id in self.expanded_ids:
            self.expanded_ids.discard(section_id)
            return False
        self.expanded_ids.add(section_id)
        return True

    def _apply(self, action: str, section_id: str, new_sections: list[Section], **details) -> bool:
        if new_sections is self.sections:
            found = self.find_section(section_id) is not None
            event = "section_unchanged" if found else "section_not_found"
            logger.debug(event, action=action, section_id=section_id, **details)
            return False
        self.sections = new_sections
        logger.info(action, section_id=section_id, **details)
        return True

    def toggle_visibility(self, section_id: str) -> bool:
        """Show or hide a section (and, when rendering, its subtree)."""
        return self._apply(
            "section_visibility_toggled",
            section_id,
            mutations.toggle_visibility(self.sections, section_id),
        )

    def delete_section(self, section_id: str) -> bool:
        """Delete a section and its subtree.

        If the selection was inside the removed subtree, the first remaining
        root becomes selected.
        """
        changed = self._apply(
            "section_deleted",
            section_id,
            mutations.delete_section(self.sections, section_id),
        )
        if changed:
            self.expanded_ids = {
                i for i in self.expanded_ids if self.find_section(i) is not None
            }
            if self.selected_section() is None:
                self.selected_id = self.sections[0].id if self.sections else None
        return changed

    def move_section(self, section_id: str, direction: Direction) -> bool:
        """Swap a section with its neighbouring sibling.

        Raises:
            ValueError: If direction is not "up" or "down"
        """
        return self._apply(
            "section_moved",
            section_id,
            mutations.move_section(self.sections, section_id, direction),
            direction=direction,
        )

    def rename_section(self, section_id: str, title: str) -> bool:
        return self._apply(
            "section_renamed",
            section_id,
            mutations.rename_section(self.sections, section_id, title),
        )

    def set_content(self, section_id: str, content: str) -> bool:
        return self._apply(
            "section_content_updated",
            section_id,
            mutations.set_content(self.sections, section_id, content),
            chars=len(content),
        )

    def add_section(self, section: Optional[Section] = None) -> str:
        """
        Append a top-level section and select it.

        Args:
            section: Section to add (None = configured default)

        Returns:
            Id of the new section
        """
        defaults = self.config.sections
        self.sections, new_id = mutations.insert_root(
            self.sections,
            section,
            id_factory=self._new_id,
            title=defaults.root_title,
            content=defaults.root_content,
        )
        self.selected_id = new_id
        logger.info("section_added", section_id=new_id)
        return new_id

    def add_subsection(self, parent_id: str, section: Optional[Section] = None) -> Optional[str]:
        """
        Append a child to a section, select the parent and expand the child.

        Args:
            parent_id: Id of the parent section
            section: Section to add (None = configured default)

        Returns:
            Id of the new section, or None if the parent doesn't exist
        """
        defaults = self.config.sections
        new_sections, new_id = mutations.insert_child(
            self.sections,
            parent_id,
            section,
            id_factory=self._new_id,
            title=defaults.child_title,
            content=defaults.child_content,
        )
        if new_id is None:
            logger.debug("section_not_found", action="subsection_added", section_id=parent_id)
            return None

        self.sections = new_sections
        self.selected_id = parent_id
        self.expanded_ids.add(new_id)
        logger.info("subsection_added", section_id=new_id, parent_id=parent_id)
        return new_id

    def render(self) -> str:
        """Rebuild prompt text from the visible sections."""
        return render_sections(self.sections)

    def visible_root_count(self) -> int:
        """Number of visible top-level sections."""
        return sum(1 for section in self.sections if section.visible)

    def export(self) -> ExportPayload:
        """Package the rebuilt prompt for a download collaborator."""
        payload = ExportPayload(
            filename=self.config.export.filename,
            text=self.render(),
            media_type=self.config.export.media_type,
        )
        logger.info("prompt_exported", filename=payload.filename, chars=len(payload.text))
        return payload

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize the forest for a storage collaborator."""
        return sections_to_json(self.sections, indent=indent)

    @classmethod
    def from_json(
        cls,
        data: str | bytes,
        config: Optional[PrompterConfig] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> "PromptSession":
        """
        Restore a session from a stored forest.

        The first root is selected; view state is otherwise empty.

        Raises:
            pydantic.ValidationError: If the stored data is not a valid forest
        """
        session = cls(config=config, id_factory=id_factory)
        session.sections = sections_from_json(data)
        session.selected_id = session.sections[0].id if session.sections else None
        logger.info("session_restored", roots=len(session.sections))
        return session
