"""Schema tree data models."""

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from core import get_logger
from .kinds import AnimationKind, ComponentKind, get_kind, is_container_kind


logger = get_logger(__name__)


# ============================================================================
# Actions
# ============================================================================

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]


class BaseAction(BaseModel):
    """Declarative runtime side effect triggered by an interaction."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @property
    def is_executable(self) -> bool:
        """False when a required field is missing; such actions are inert."""
        return True


class ToggleAction(BaseAction):
    """Flip the boolean interpretation of a variable."""

    type: Literal["toggle"] = "toggle"
    target: str | None = None

    @property
    def is_executable(self) -> bool:
        return bool(self.target)


class SetAction(BaseAction):
    """Overwrite a variable with a literal value."""

    type: Literal["set"] = "set"
    target: str | None = None
    value: Any = None

    @property
    def is_executable(self) -> bool:
        return bool(self.target) and self.value is not None


class AlertAction(BaseAction):
    """Surface a message through the notification side channel."""

    type: Literal["alert"] = "alert"
    message: str | None = Field(default=None, validation_alias=AliasChoices("message", "value"))

    @property
    def is_executable(self) -> bool:
        return bool(self.message)


class ApiRequestAction(BaseAction):
    """Call a URL and optionally store the response body in a variable."""

    type: Literal["apiRequest"] = "apiRequest"
    url: str | None = None
    method: HttpMethod = "GET"
    target: str | None = None

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v: Any) -> Any:
        if v is None:
            return "GET"
        return v.upper() if isinstance(v, str) else v

    @property
    def is_executable(self) -> bool:
        return bool(self.url)


Action = Annotated[
    Union[ToggleAction, SetAction, AlertAction, ApiRequestAction],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter[Action] = TypeAdapter(Action)


def parse_action(value: Any) -> BaseAction | None:
    """
    Coerce a raw mapping (or an Action) into an Action.

    Unparseable payloads (unknown type, wrong field types) become None.
    """
    if value is None or isinstance(value, BaseAction):
        return value
    try:
        return _action_adapter.validate_python(value)
    except ValidationError as e:
        logger.warning("action_dropped", error_count=e.error_count())
        return None


# ============================================================================
# Nodes
# ============================================================================

ROOT_ID = "root-container"
"""Reserved id of the document root; never deletable."""

BEHAVIOR_FIELDS = frozenset(
    {"bind", "visible_if", "animation_kind", "tooltip", "on_click", "on_hover", "on_blur"}
)
ACTION_FIELDS = frozenset({"on_click", "on_hover", "on_blur"})


class Node(BaseModel):
    """One component in the schema tree.

    Leaf kinds have ``children=None``; container kinds always carry a list.
    Instances are immutable: tree operations build new nodes and share
    untouched subtrees.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    id: str = Field(..., min_length=1, description="Unique identifier")
    kind: str = Field(..., alias="type", description="Component kind")
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["Node"] | None = Field(default=None)

    # Visuals
    tooltip: str | None = Field(default=None)
    animation_kind: AnimationKind | None = Field(default=None, alias="animation")

    # Logic
    bind: str | None = Field(default=None, description="Variable for two-way binding")
    visible_if: str | None = Field(default=None, description="Variable gating visibility")

    # Events
    on_click: Action | None = Field(default=None)
    on_hover: Action | None = Field(default=None)
    on_blur: Action | None = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def normalize_children(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        kind = data.get("type", data.get("kind"))
        if not isinstance(kind, str) or get_kind(kind) is None:
            return data
        if is_container_kind(kind):
            return data if data.get("children") is not None else {**data, "children": []}
        if data.get("children"):
            logger.warning("leaf_children_dropped", node_id=data.get("id"), kind=kind)
        return {**data, "children": None}

    @field_validator("on_click", "on_hover", "on_blur", mode="wrap")
    @classmethod
    def tolerate_malformed_action(cls, value: Any, handler: Any) -> Any:
        try:
            return handler(value)
        except ValidationError:
            logger.warning("action_dropped", payload_type=type(value).__name__)
            return None

    @property
    def component_kind(self) -> ComponentKind | None:
        """Enum kind, None when the kind string is not recognized."""
        return get_kind(self.kind)

    @property
    def accepts_children(self) -> bool:
        """Only container kinds with a children list can receive inserts."""
        return self.children is not None and is_container_kind(self.kind)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_wire(cls, data: Any) -> "Node":
        return cls.model_validate(data)


Node.model_rebuild()


class DataListItem(BaseModel):
    """Row of a DataList component."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    subtitle: str | None = None
    value: str | None = None
    badge: str | None = None

    @field_validator("id", "value", mode="before")
    @classmethod
    def coerce_scalar(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class SavedProject(BaseModel):
    """A named snapshot of a tree."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str
    name: str
    tree: Node = Field(validation_alias=AliasChoices("tree", "schema"))
    saved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
