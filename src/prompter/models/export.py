"""ExportPayload model for handing the rebuilt prompt to a download collaborator."""

from pydantic import BaseModel, Field


class ExportPayload(BaseModel):
    """Rebuilt prompt text plus download metadata."""

    filename: str = Field(
        ...,
        description="Suggested file name (e.g. organized-prompt.md)"
    )

    text: str = Field(
        ...,
        description="Rebuilt prompt text (hidden sections omitted)"
    )

    media_type: str = Field(
        default="text/markdown",
        description="Content type for the download"
    )

    model_config = {"frozen": True}
