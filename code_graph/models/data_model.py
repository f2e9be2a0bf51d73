import json
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config import Config


@dataclass
class FileNode:
    """A file in the dependency graph, keyed by its workspace-relative path."""
    id: str
    label: str
    path: str
    is_changed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "path": self.path,
            "isChanged": self.is_changed,
        }


@dataclass
class Edge:
    """Directed import relationship: `source` imports `target`."""
    source: str
    target: str
    kind: str = "import"

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target, "kind": self.kind}


@dataclass
class DependencyGraph:
    nodes: List[FileNode] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]


class Dialect(str, Enum):
    JS_LIKE = "js_like"
    RUST = "rust"
    GRAPHQL = "graphql"

    @classmethod
    def for_path(cls, file_path: str) -> Optional["Dialect"]:
        """Map a file path to its dialect, or None for unsupported extensions."""
        ext = os.path.splitext(file_path)[1]
        if ext not in Config.SUPPORTED_EXTENSIONS:
            return None
        if ext == Config.RUST_EXTENSION:
            return cls.RUST
        if ext == Config.GRAPHQL_EXTENSION:
            return cls.GRAPHQL
        return cls.JS_LIKE


class RustImportKind(str, Enum):
    MOD = "mod"
    CRATE = "crate"
    SUPER = "super"
    SELF = "self"


@dataclass
class RustImport:
    module_name: str
    kind: RustImportKind
    full_path: Optional[str] = None


class GraphStageStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class GraphBuildError(RuntimeError):
    """Raised when a build cannot start at all (e.g. the workspace root is missing)."""

    def __init__(self, message: str, *, workspace_root: Optional[str] = None):
        super().__init__(message)
        self.workspace_root = workspace_root
