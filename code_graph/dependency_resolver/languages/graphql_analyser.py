import os
import re
from typing import List, Optional

from ...config import Config
from ..core.base_analyser import BaseDependencyAnalyzer

FRAGMENT_SPREAD = re.compile(r"\.\.\.\s*(\w+)")
IMPORT_COMMENT = re.compile(r"#\s*import\s+[\"']([^\"']+)[\"']")

# `... on Type` is an inline fragment, not a spread of a fragment named "on"
INLINE_FRAGMENT_KEYWORD = "on"


class GraphQLAnalyzer(BaseDependencyAnalyzer):
    """
    Regex-driven: fragment spreads and `# import "..."` comments.

    A spread `...UserFields` is looked up as `./UserFields` or `./UserFields.graphql`
    next to the importing document. That one-fragment-per-same-named-file layout
    is a project convention, so spreads defined elsewhere simply stay unresolved.
    """

    def get_language_id(self) -> str:
        return "graphql"

    def extract_imports(self, content: str, file_path: str) -> List[str]:
        imports = [
            m.group(1) for m in FRAGMENT_SPREAD.finditer(content)
            if m.group(1) != INLINE_FRAGMENT_KEYWORD
        ]
        imports.extend(m.group(1) for m in IMPORT_COMMENT.finditer(content))
        return imports

    def resolve_import(self, raw_import: str, file_path: str) -> Optional[str]:
        resolved = os.path.abspath(os.path.join(self._importer_dir(file_path), raw_import))
        return self.paths.first_existing(resolved, ("", Config.GRAPHQL_EXTENSION))
