import logging
import os
import re
from typing import Dict, List, Optional

from ...config import Config
from ...models.data_model import RustImport, RustImportKind
from ..core.base_analyser import BaseDependencyAnalyzer

logger = logging.getLogger(__name__)

# Line-anchored; optional `pub`, `pub(crate)`, `pub(super)`, `pub(in path)`.
# Occurrences inside comments or string literals are not filtered out.
_VISIBILITY = r"(?:pub(?:\s*\([^)]*\))?\s+)?"

MOD_PATTERN = re.compile(rf"^\s*{_VISIBILITY}mod\s+(\w+)\s*;", re.MULTILINE)
USE_PATTERNS = (
    (RustImportKind.CRATE, re.compile(rf"^\s*{_VISIBILITY}use\s+crate::([\w:]+)", re.MULTILINE)),
    (RustImportKind.SUPER, re.compile(rf"^\s*{_VISIBILITY}use\s+super::([\w:]+)", re.MULTILINE)),
    (RustImportKind.SELF, re.compile(rf"^\s*{_VISIBILITY}use\s+self::([\w:]+)", re.MULTILINE)),
)


class RustAnalyzer(BaseDependencyAnalyzer):
    """
    `mod` / `use crate::` / `use super::` / `use self::` references, resolved to files.

    Only the first segment of a `use` path is mapped to a file; items deeper in
    the path live inside that module and are not traversed.
    """

    def __init__(self, workspace_root: str, path_resolver=None):
        super().__init__(workspace_root, path_resolver)
        # importer directory -> crate root (or None)
        self._crate_roots: Dict[str, Optional[str]] = {}

    def get_language_id(self) -> str:
        return "rust"

    def describe_import(self, raw_import: RustImport) -> str:
        return f"{raw_import.kind.value}::{raw_import.module_name}"

    # ---------- extraction ----------
    def extract_imports(self, content: str, file_path: str) -> List[RustImport]:
        imports: List[RustImport] = [
            RustImport(module_name=m.group(1), kind=RustImportKind.MOD)
            for m in MOD_PATTERN.finditer(content)
        ]

        for kind, pattern in USE_PATTERNS:
            for match in pattern.finditer(content):
                module_path = match.group(1)
                first_module = module_path.split("::")[0]
                if not first_module:
                    continue
                imports.append(
                    RustImport(module_name=first_module, kind=kind, full_path=module_path)
                )

        return imports

    # ---------- resolution ----------
    def resolve_import(self, raw_import: RustImport, file_path: str) -> Optional[str]:
        from_dir = self._importer_dir(file_path)
        name = raw_import.module_name

        if raw_import.kind == RustImportKind.MOD:
            return self.paths.module_file(from_dir, name)

        if raw_import.kind == RustImportKind.CRATE:
            crate_root = self.find_crate_root(file_path)
            if crate_root is None:
                return None
            return self.paths.module_file(crate_root, name)

        if raw_import.kind == RustImportKind.SUPER:
            return self.paths.module_file(os.path.dirname(from_dir), name)

        if raw_import.kind == RustImportKind.SELF:
            stem = os.path.splitext(os.path.basename(file_path))[0]
            if stem == Config.RUST_MOD_FILE_STEM:
                return self.paths.module_file(from_dir, name)
            # foo.rs (and lib.rs, main.rs) owns the foo/ directory
            return self.paths.module_file(os.path.join(from_dir, stem), name)

        return None

    def find_crate_root(self, file_path: str) -> Optional[str]:
        """
        Walk upward from the file's directory to the nearest Cargo.toml.

        The crate root is that directory's `src/` when present, else the manifest
        directory itself. Without any manifest, `<workspace>/src` is used if it exists.
        """
        start = self._importer_dir(file_path)
        if start in self._crate_roots:
            return self._crate_roots[start]

        crate_root = None
        current = start
        while current != os.path.dirname(current):
            if os.path.exists(os.path.join(current, Config.RUST_MANIFEST)):
                src_dir = os.path.join(current, Config.RUST_SOURCE_DIR)
                crate_root = src_dir if os.path.isdir(src_dir) else current
                break
            current = os.path.dirname(current)
        else:
            fallback = os.path.join(self.workspace_root, Config.RUST_SOURCE_DIR)
            if os.path.isdir(fallback):
                logger.debug("No %s above %s, using %s", Config.RUST_MANIFEST, file_path, fallback)
                crate_root = fallback

        self._crate_roots[start] = crate_root
        return crate_root
