"""
Stage 2: Dependency Graph
Walks the import graph outward from the seed files and collects file nodes and import edges.
"""

import logging
import os
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from tqdm import tqdm

from ..config import Config
from ..dependency_resolver.run import DependencyResolver
from ..models.data_model import DependencyGraph, Dialect, Edge, FileNode, GraphBuildError
from .core.base import PipelineStage, StageResult

logger = logging.getLogger(__name__)

# (importer id, remaining resolved targets)
Frame = Tuple[str, Iterator[str]]


class GraphBuilder:
    """
    Builds a DependencyGraph from seed files.

    Traversal is depth-first over an explicit stack of frames, one per file being
    expanded, so edges come out in the same order a recursive walk would emit them
    without growing the Python call stack. Every file is expanded at most once;
    that is what makes import cycles terminate.
    """

    def __init__(self, workspace_root: str, show_progress: Optional[bool] = None):
        self.workspace_root = os.path.abspath(workspace_root)
        self.show_progress = Config.SHOW_PROGRESS if show_progress is None else show_progress
        self.resolver = DependencyResolver(self.workspace_root)

        self._nodes: Dict[str, FileNode] = {}
        self._edges: List[Edge] = []
        self._processed: Set[str] = set()
        self._seeds: Set[str] = set()
        self._bar = None

    def build(self, seed_paths: List[str]) -> DependencyGraph:
        if not os.path.isdir(self.workspace_root):
            raise GraphBuildError(
                f"Workspace root does not exist or is not a directory: {self.workspace_root}",
                workspace_root=self.workspace_root,
            )

        self._nodes = {}
        self._edges = []
        self._processed = set()

        seeds = [self._normalize(p) for p in seed_paths]
        # Registered up front: a seed reached first as someone's dependency stays changed
        self._seeds = set(seeds)

        logger.info("Analyzing dependencies for %s changed files", len(seeds))

        self._bar = tqdm(desc="Resolving imports", unit="file", disable=not self.show_progress)
        try:
            for seed in seeds:
                self._traverse(seed)
        finally:
            self._bar.close()
            self._bar = None

        logger.info("Created %s nodes and %s edges", len(self._nodes), len(self._edges))
        return DependencyGraph(nodes=list(self._nodes.values()), edges=list(self._edges))

    def get_file_id(self, file_path: str) -> str:
        return os.path.relpath(file_path, self.workspace_root)

    def _normalize(self, path: str) -> str:
        return os.path.normpath(os.path.join(self.workspace_root, path))

    def _traverse(self, seed: str) -> None:
        frame = self._visit(seed, True)
        if frame is None:
            return

        stack: List[Frame] = [frame]
        while stack:
            file_id, targets = stack[-1]
            target = next(targets, None)
            if target is None:
                stack.pop()
                continue

            self._edges.append(Edge(source=file_id, target=self.get_file_id(target)))

            # Dependencies are never changed unless they are seeds themselves
            child = self._visit(target, target in self._seeds)
            if child is not None:
                stack.append(child)

    def _visit(self, file_path: str, is_changed: bool) -> Optional[Frame]:
        """Create the node for `file_path` and return its frame, or None if there is nothing to expand."""
        if file_path in self._processed:
            return None
        self._processed.add(file_path)

        if not os.path.isfile(file_path):
            logger.info("File does not exist: %s", file_path)
            return None

        dialect = Dialect.for_path(file_path)
        if dialect is None:
            logger.info("Unsupported extension for file: %s", file_path)
            return None

        file_id = self.get_file_id(file_path)
        logger.debug("Processing %s file: %s (is_changed: %s)", dialect.value, file_path, is_changed)
        if file_id not in self._nodes:
            self._nodes[file_id] = FileNode(
                id=file_id,
                label=os.path.basename(file_path),
                path=file_path,
                is_changed=is_changed,
            )
        self._bar.update(1)

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read file %s: %s", file_path, e)
            return None

        try:
            resolved = self.resolver.resolve_dependencies(content, file_path, dialect)
        except Exception:
            logger.exception("Error processing file %s", file_path)
            return None

        targets = [t for t in resolved if self._is_graph_file(t)]
        logger.debug("  Found %s resolvable imports in %s", len(targets), os.path.basename(file_path))
        return file_id, iter(targets)

    @staticmethod
    def _is_graph_file(path: str) -> bool:
        if Dialect.for_path(path) is None:
            logger.debug("  Skipping import of unsupported file: %s", path)
            return False
        return os.path.isfile(path)


def build_dependency_graph(seed_paths: List[str], workspace_root: str) -> DependencyGraph:
    return GraphBuilder(workspace_root).build(seed_paths)


class DependencyGraphStage(PipelineStage):
    """Stage wrapping GraphBuilder; expects `workspace_root` and `seed_paths` in its input."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__("Dependency Graph", config)

    async def execute(self, input_data: Dict[str, Any]) -> StageResult:
        workspace_root = input_data["workspace_root"]
        seed_paths = input_data.get("seed_paths", [])

        builder = GraphBuilder(workspace_root, show_progress=self.config.get("show_progress"))
        graph = builder.build(seed_paths)

        return StageResult(
            success=True,
            data={**input_data, "graph": graph},
            metadata={
                "stage": self.name,
                "num_nodes": len(graph.nodes),
                "num_edges": len(graph.edges),
            },
        )
