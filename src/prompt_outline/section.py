"""Section model: one node of a prompt outline."""

from typing import Any, Iterator, Optional

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from prompt_outline.ids import IdFactory, resolve_id_factory


class Section(BaseModel):
    """Single heading or tag block in an outline, with its children.

    Children are kept in document order. Records carry no parent
    references, so a forest dumps to plain nested dicts and back.
    """

    id: str = Field(
        ...,
        description="Opaque id, unique across the whole forest"
    )

    level: int = Field(
        ...,
        ge=1,
        le=3,
        description="Nesting depth implied at creation (1 = top heading, 2 = sub-heading or tag block)"
    )

    title: str = Field(
        ...,
        description="Heading text or tag name"
    )

    content: str = Field(
        default="",
        description="Text owned by this section, excluding its children"
    )

    visible: bool = Field(
        default=True,
        description="Hidden sections are skipped, with their subtree, when rendering"
    )

    children: list["Section"] = Field(
        default_factory=list,
        description="Child sections in document order"
    )

    model_config = {"frozen": False}  # The parser fills sections in as it goes

    @field_validator("children", mode="before")
    @classmethod
    def none_children_as_empty(cls, v: Any) -> Any:
        """Treat a null children field as an empty list."""
        return [] if v is None else v

    @classmethod
    def create(
        cls,
        level: int,
        title: str,
        content: str = "",
        id_factory: Optional[IdFactory] = None,
    ) -> "Section":
        """Create a fresh section with trimmed title and content.

        Args:
            level: Nesting level (1-3)
            title: Section title (trimmed)
            content: Section content (trimmed)
            id_factory: Id source (defaults to random UUIDs)

        Returns:
            New childless, visible section
        """
        return cls(
            id=resolve_id_factory(id_factory)(),
            level=level,
            title=title.strip(),
            content=content.strip(),
        )

    def walk(self) -> Iterator["Section"]:
        """Yield this section and all descendants, depth-first in document order."""
        yield self
        for child in self.children or []:
            yield from child.walk()

    def subtree_size(self) -> int:
        """Number of sections in this subtree, including this one."""
        return sum(1 for _ in self.walk())


Section.model_rebuild()


_FOREST_ADAPTER = TypeAdapter(list[Section])


def dump_sections(sections: list[Section]) -> list[dict]:
    """Convert a forest to plain nested records.

    Returns:
        List of dicts with id, level, title, content, visible, children
    """
    return _FOREST_ADAPTER.dump_python(sections, mode="json")


def load_sections(records: list[dict]) -> list[Section]:
    """Build a forest from plain nested records.

    Raises:
        pydantic.ValidationError: If a record is missing a required field
    """
    return _FOREST_ADAPTER.validate_python(records)


def sections_to_json(sections: list[Section], indent: Optional[int] = None) -> str:
    """Serialize a forest to JSON text."""
    return _FOREST_ADAPTER.dump_json(sections, indent=indent).decode("utf-8")


def sections_from_json(data: str | bytes) -> list[Section]:
    """Load a forest from JSON text."""
    return _FOREST_ADAPTER.validate_json(data)
