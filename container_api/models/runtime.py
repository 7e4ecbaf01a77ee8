"""Runtime-side data models.

These models describe what is sent to and read back from the container
runtime. None of them are persisted; the runtime is the source of truth.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

# Docker Engine reports container names with a leading slash
RUNTIME_NAME_PREFIX = "/"

TAG_DELIMITER = ":"


def normalize_image_reference(reference: str, default_tag: str = "latest") -> str:
    """Append the default tag to a reference that has no tag delimiter."""
    if TAG_DELIMITER in reference:
        return reference
    return f"{reference}{TAG_DELIMITER}{default_tag}"


def flatten_environment(env: Optional[Mapping[str, str]]) -> List[str]:
    """Turn an environment mapping into ``KEY=VALUE`` entries.

    Order follows the mapping's iteration order. ``None`` is treated as an
    empty mapping.
    """
    if not env:
        return []
    return [f"{key}={value}" for key, value in env.items()]


@dataclass
class ContainerSpec:
    """Desired configuration for a new container."""

    image: str
    name: str
    environment: List[str] = field(default_factory=list)
    auto_remove: bool = False


@dataclass
class CreatedContainer:
    """Handle returned once a container has been created and started."""

    id: str
    name: str


@dataclass
class ManagedContainer:
    """The runtime's record of a container, as reported by a listing."""

    id: str
    names: List[str] = field(default_factory=list)
    image: str = ""
    state: str = ""
    status: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ManagedContainer":
        """Build from a Docker ``/containers/json`` entry."""
        return cls(
            id=data.get("Id", ""),
            names=list(data.get("Names") or []),
            image=data.get("Image", ""),
            state=data.get("State", ""),
            status=data.get("Status", ""),
        )

    def matches(self, name_or_id: str) -> bool:
        """True when addressed by exact id or by name without the leading slash."""
        if self.id == name_or_id:
            return True
        runtime_name = f"{RUNTIME_NAME_PREFIX}{name_or_id}"
        return any(name == runtime_name for name in self.names)

    def has_name_prefix(self, prefix: str) -> bool:
        """True when any runtime name starts with ``/<prefix>``."""
        runtime_prefix = f"{RUNTIME_NAME_PREFIX}{prefix}"
        return any(name.startswith(runtime_prefix) for name in self.names)
