import logging
import os
from typing import Any, List, Optional

from .path_resolver import PathResolver

logger = logging.getLogger(__name__)


class BaseDependencyAnalyzer:
    """
    Per-dialect import extraction + module resolution.

    Flow for one file:
      1) extract raw references from the text (no filesystem access)
      2) resolve each reference against the importing file's location
      3) drop (and log) references that do not map to a file

    Subclasses implement `extract_imports` and `resolve_import`; the builder only
    ever calls `resolve_all`.
    """

    def __init__(self, workspace_root: str, path_resolver: Optional[PathResolver] = None):
        self.workspace_root = workspace_root
        self.paths = path_resolver or PathResolver()

    # --- required by subclasses ---
    def get_language_id(self) -> str:
        raise NotImplementedError

    def extract_imports(self, content: str, file_path: str) -> List[Any]:
        raise NotImplementedError

    def resolve_import(self, raw_import: Any, file_path: str) -> Optional[str]:
        raise NotImplementedError

    # --- overridable knobs ---
    def describe_import(self, raw_import: Any) -> str:
        return str(raw_import)

    # --- shared ---
    def resolve_all(self, content: str, file_path: str) -> List[str]:
        """Return the absolute paths of every resolvable reference, in extraction order."""
        raw_imports = self.extract_imports(content, file_path)
        logger.debug(
            "%s analyzer found %s imports in %s",
            self.get_language_id(), len(raw_imports), file_path,
        )

        resolved_paths: List[str] = []
        for raw_import in raw_imports:
            resolved = self.resolve_import(raw_import, file_path)
            if resolved:
                logger.debug("  %s -> %s", self.describe_import(raw_import), resolved)
                resolved_paths.append(resolved)
            else:
                logger.info(
                    "Failed to resolve import %s in %s",
                    self.describe_import(raw_import), file_path,
                )
        return resolved_paths

    @staticmethod
    def _importer_dir(file_path: str) -> str:
        return os.path.dirname(os.path.abspath(file_path))
