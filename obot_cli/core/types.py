"""
Core types for Obot platform API resources.

Resources are flattened on the wire: a Project's JSON object merges the shared
Metadata fields, the manifest fields and the project-specific fields into one
object. Each layer owns its own keys and is split back apart on decode.

These dataclasses provide type safety and IDE support for API responses.
"""

import json
import logging
from collections.abc import Iterator
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from obot_cli.core.errors import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Decoding helpers
# =============================================================================


def _require_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected JSON object for {what}, got {type(data).__name__}")
    return data


def _get_str(data: dict[str, Any], key: str, default: str | None = "") -> str | None:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise DecodeError(f"Expected string for '{key}', got {type(value).__name__}", key=key)
    return value


def _get_bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"Expected boolean for '{key}', got {type(value).__name__}", key=key)
    return value


def _get_str_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DecodeError(f"Expected list of strings for '{key}'", key=key)
    return list(value)


def _get_mapping(data: dict[str, Any], key: str, str_values: bool = False) -> dict[str, Any] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise DecodeError(f"Expected object for '{key}', got {type(value).__name__}", key=key)
    if str_values and not all(isinstance(v, str) for v in value.values()):
        raise DecodeError(f"Expected string values in '{key}'", key=key)
    return dict(value)


def _loads(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON: {e}")


def _dumps(data: Any, indent: int | None = None) -> str:
    if indent is None:
        return json.dumps(data, separators=(",", ":"))
    return json.dumps(data, indent=indent)


# =============================================================================
# Shared Types
# =============================================================================


@dataclass
class Metadata:
    """Identity and audit fields shared by every resource."""

    KEYS: ClassVar[frozenset[str]] = frozenset({"id", "created", "deleted", "links", "metadata"})

    id: str = ""
    created: str | None = None
    deleted: str | None = None
    links: dict[str, str] = field(default_factory=dict)
    metadata: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.created = self.created or None
        self.deleted = self.deleted or None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Metadata":
        """Create from API response dict."""
        return cls(
            id=_get_str(data, "id") or "",
            created=_get_str(data, "created", None),
            deleted=_get_str(data, "deleted", None),
            links=_get_mapping(data, "links", str_values=True) or {},
            metadata=_get_mapping(data, "metadata", str_values=True) or {},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        result: dict[str, Any] = {}
        if self.id:
            result["id"] = self.id
        if self.created:
            result["created"] = self.created
        if self.deleted:
            result["deleted"] = self.deleted
        if self.links:
            result["links"] = dict(self.links)
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result


@dataclass
class ResourceList(Generic[T]):
    """Ordered list of resources, in the order the server returned them."""

    items: list[T] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]

    def append(self, item: T) -> None:
        self.items.append(item)


# =============================================================================
# Thread Types
# =============================================================================


@dataclass
class ThreadManifest:
    """Conversation settings for a thread."""

    KEYS: ClassVar[frozenset[str]] = frozenset({"name", "description", "prompt", "tools", "icons"})

    name: str = ""
    description: str = ""
    prompt: str = ""
    tools: list[str] = field(default_factory=list)
    icons: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ThreadManifest":
        """Create from API response dict."""
        return cls(
            name=_get_str(data, "name") or "",
            description=_get_str(data, "description") or "",
            prompt=_get_str(data, "prompt") or "",
            tools=_get_str_list(data, "tools"),
            icons=_get_mapping(data, "icons"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        result: dict[str, Any] = {}
        if self.name:
            result["name"] = self.name
        if self.description:
            result["description"] = self.description
        if self.prompt:
            result["prompt"] = self.prompt
        if self.tools:
            result["tools"] = list(self.tools)
        if self.icons is not None:
            result["icons"] = dict(self.icons)
        return result


# =============================================================================
# Project Types
# =============================================================================


@dataclass
class ProjectManifest:
    """User-editable settings of a project."""

    KEYS: ClassVar[frozenset[str]] = ThreadManifest.KEYS

    thread: ThreadManifest = field(default_factory=ThreadManifest)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectManifest":
        """Create from API response dict."""
        return cls(thread=ThreadManifest.from_dict(data))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return self.thread.to_dict()


@dataclass
class Project:
    """
    An Obot project.

    On the wire the Metadata and manifest fields sit next to the
    project fields in one flat object. ``assistant_id`` and ``parent_id``
    are omitted from the encoded form when unset; ``editor`` is always
    written.
    """

    KEYS: ClassVar[frozenset[str]] = frozenset({"assistantID", "editor", "parentID"})

    metadata: Metadata = field(default_factory=Metadata)
    manifest: ProjectManifest = field(default_factory=ProjectManifest)
    assistant_id: str | None = None
    editor: bool = False
    parent_id: str | None = None

    def __post_init__(self) -> None:
        # "" and None are the same value on the wire
        self.assistant_id = self.assistant_id or None
        self.parent_id = self.parent_id or None

    @property
    def id(self) -> str:
        return self.metadata.id

    @property
    def name(self) -> str:
        return self.manifest.thread.name

    @property
    def description(self) -> str:
        return self.manifest.thread.description

    @property
    def created(self) -> str | None:
        return self.metadata.created

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """Create from API response dict."""
        data = _require_object(data, "project")

        unknown = data.keys() - Metadata.KEYS - ProjectManifest.KEYS - cls.KEYS
        if unknown:
            logger.debug("Ignoring unknown project keys: %s", ", ".join(sorted(unknown)))

        return cls(
            metadata=Metadata.from_dict(data),
            manifest=ProjectManifest.from_dict(data),
            assistant_id=_get_str(data, "assistantID", None),
            editor=_get_bool(data, "editor"),
            parent_id=_get_str(data, "parentID", None),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> "Project":
        """Create from a JSON document."""
        return cls.from_dict(_loads(text))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        result = self.metadata.to_dict()
        result.update(self.manifest.to_dict())
        if self.assistant_id:
            result["assistantID"] = self.assistant_id
        result["editor"] = self.editor
        if self.parent_id:
            result["parentID"] = self.parent_id
        return result

    def to_json(self, indent: int | None = None) -> str:
        """Encode as a JSON document."""
        return _dumps(self.to_dict(), indent)

    def copy(self) -> "Project":
        """Return an independent copy sharing no mutable state."""
        return deepcopy(self)


@dataclass
class ProjectList(ResourceList[Project]):
    """Projects as returned by a list call."""

    @staticmethod
    def is_envelope(data: Any) -> bool:
        """Check for the ``{"items": [...]}`` list envelope, which carries no other keys."""
        return isinstance(data, dict) and data.keys() == {"items"}

    @classmethod
    def from_list(cls, data: list[Any] | dict[str, Any]) -> "ProjectList":
        """
        Create from an API response.

        Accepts a bare JSON array or the ``{"items": [...]}`` list envelope.
        """
        if isinstance(data, dict):
            if not cls.is_envelope(data):
                raise DecodeError("Expected JSON array or list envelope for project list", key="items")
            data = data["items"]
            if data is None:
                data = []
        if not isinstance(data, list):
            raise DecodeError(f"Expected JSON array for project list, got {type(data).__name__}")
        return cls(items=[Project.from_dict(item) for item in data])

    @classmethod
    def from_json(cls, text: str | bytes) -> "ProjectList":
        """Create from a JSON document."""
        return cls.from_list(_loads(text))

    def to_list(self) -> list[dict[str, Any]]:
        """Convert to a list of dicts for API request."""
        return [p.to_dict() for p in self.items]

    def to_json(self, indent: int | None = None) -> str:
        """Encode as a JSON array."""
        return _dumps(self.to_list(), indent)

    # =========================================================================
    # Parent/child navigation
    # =========================================================================

    def get(self, project_id: str) -> Project | None:
        """Find a project by ID."""
        for project in self.items:
            if project.id == project_id:
                return project
        return None

    def children(self, parent_id: str) -> list[Project]:
        """Projects whose parent is ``parent_id``, in list order."""
        return [p for p in self.items if p.parent_id == parent_id]

    def roots(self) -> list[Project]:
        """Projects with no parent, or whose parent is not in this list."""
        ids = {p.id for p in self.items if p.id}
        return [p for p in self.items if p.parent_id is None or p.parent_id not in ids]
