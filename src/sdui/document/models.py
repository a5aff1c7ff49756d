"""Screen Document Models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ComponentType(str, Enum):
    """Closed set of component kinds understood by the interpreter."""

    TEXT = "text"
    BUTTON = "button"
    IMAGE = "image"
    VSTACK = "vstack"
    HSTACK = "hstack"
    LIST = "list"
    CONDITIONAL = "conditional"
    SPACER = "spacer"
    DIVIDER = "divider"
    SCROLL = "scroll"


CONTAINER_TYPES = frozenset(
    {ComponentType.VSTACK, ComponentType.HSTACK, ComponentType.SCROLL, ComponentType.CONDITIONAL}
)


class DocumentModel(BaseModel):
    """Base for wire models: camelCase on the wire, immutable once built."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Component(DocumentModel):
    """One node of the declarative UI tree."""

    id: str | None = Field(default=None, description="Stable node identity")
    type: ComponentType = Field(..., description="Component kind")
    text: str | None = Field(default=None, description="Literal text, may hold {{tokens}}")
    key: str | None = Field(default=None, description="Binding path into the scoped item")
    action_id: str | None = Field(default=None)
    children: tuple["Component", ...] | None = Field(default=None)
    item_view: "Component | None" = Field(default=None, description="Row template for lists")
    condition_key: str | None = Field(default=None)
    font: str | None = Field(default=None)
    foreground_color: str | None = Field(default=None)
    background_color: str | None = Field(default=None)
    corner_radius: float | None = Field(default=None, ge=0)
    padding: float | None = Field(default=None, ge=0)
    spacing: float | None = Field(default=None, ge=0)
    image_name: str | None = Field(default=None)
    label: str | None = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_color(cls, data: Any) -> Any:
        """Older composers send `color`; treat it as the foreground color."""
        if isinstance(data, dict) and "color" in data:
            data = dict(data)
            legacy = data.pop("color")
            if data.get("foregroundColor") is None and data.get("foreground_color") is None:
                data["foregroundColor"] = legacy
        return data

    @property
    def is_interactive(self) -> bool:
        return bool(self.action_id)

    def child_nodes(self) -> tuple["Component", ...]:
        """Direct children, or an empty tuple."""
        return self.children or ()

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire names, absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Screen(DocumentModel):
    """Versioned root document sent to the client."""

    version: int
    component: Component

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


Component.model_rebuild()
