import logging
import os
from typing import Any, Dict, List, Optional

from tree_sitter_languages import get_parser

from ...config import Config
from ..core.base_analyser import BaseDependencyAnalyzer

logger = logging.getLogger(__name__)


def is_relative_specifier(specifier: str) -> bool:
    """Only relative (`./`, `../`) and absolute (`/`) specifiers belong to the workspace graph."""
    return specifier.startswith(".") or specifier.startswith("/")


class JSAnalyzer(BaseDependencyAnalyzer):
    """JS / TS / JSX imports via tree-sitter, resolved with Node-style probing."""

    def __init__(self, workspace_root: str, path_resolver=None):
        super().__init__(workspace_root, path_resolver)
        # Parser cache: grammar name -> parser
        self._parsers: Dict[str, Any] = {}

    def get_language_id(self) -> str:
        return "javascript"

    def _get_parser(self, grammar: str):
        parser = self._parsers.get(grammar)
        if parser is None:
            parser = get_parser(grammar)
            self._parsers[grammar] = parser
        return parser

    # ---------- extraction ----------
    def extract_imports(self, content: str, file_path: str) -> List[str]:
        grammar = Config.JS_GRAMMARS.get(os.path.splitext(file_path)[1], "tsx")
        source = content.encode("utf-8")

        try:
            tree = self._get_parser(grammar).parse(source)
        except Exception as e:
            logger.warning("Failed to parse %s: %s", file_path, e)
            return []

        if tree.root_node.has_error:
            logger.warning("Syntax error in %s, skipping its imports", file_path)
            return []

        imports: List[str] = []

        # Pre-order walk so specifiers come out in document order
        stack = [tree.root_node]
        while stack:
            node = stack.pop()

            specifier = None
            if node.type == "import_statement":
                specifier = self._string_value(node.child_by_field_name("source"), source)
            elif node.type == "call_expression":
                specifier = self._dynamic_import_value(node, source)

            if specifier is not None and is_relative_specifier(specifier):
                imports.append(specifier)

            stack.extend(reversed(node.children))

        return imports

    def _dynamic_import_value(self, node, source: bytes) -> Optional[str]:
        """`import("./x")` with a single string-literal argument; computed imports are ignored."""
        function = node.child_by_field_name("function")
        if function is None or function.type != "import":
            return None

        arguments = node.child_by_field_name("arguments")
        if arguments is None:
            return None
        args = [c for c in arguments.children if c.is_named and c.type != "comment"]
        if len(args) != 1:
            return None
        return self._string_value(args[0], source)

    @staticmethod
    def _string_value(node, source: bytes) -> Optional[str]:
        if node is None or node.type != "string":
            return None
        text = source[node.start_byte:node.end_byte].decode("utf-8")
        return text[1:-1]

    # ---------- resolution ----------
    def resolve_import(self, raw_import: str, file_path: str) -> Optional[str]:
        resolved = os.path.abspath(os.path.join(self._importer_dir(file_path), raw_import))

        # 1) literal path, 2) path + ext, 3) path/index + ext
        return (
            self.paths.first_existing(resolved)
            or self.paths.first_existing(resolved, Config.JS_PROBE_EXTENSIONS)
            or self.paths.first_existing(
                os.path.join(resolved, "index"), Config.JS_PROBE_EXTENSIONS
            )
        )
