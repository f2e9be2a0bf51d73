import logging
from typing import Dict, Optional

from ..models.data_model import Dialect
from .core.base_analyser import BaseDependencyAnalyzer
from .core.path_resolver import PathResolver
from .languages.graphql_analyser import GraphQLAnalyzer
from .languages.js_analyser import JSAnalyzer
from .languages.rust_analyser import RustAnalyzer

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Dialect dispatch: one analyzer instance per dialect for the lifetime of a build."""

    ANALYZERS = {
        Dialect.JS_LIKE: JSAnalyzer,
        Dialect.RUST: RustAnalyzer,
        Dialect.GRAPHQL: GraphQLAnalyzer,
    }

    def __init__(self, workspace_root: str, path_resolver: Optional[PathResolver] = None):
        self.workspace_root = workspace_root
        self.path_resolver = path_resolver or PathResolver()
        self._analyzers: Dict[Dialect, BaseDependencyAnalyzer] = {}

    def get_analyzer(self, dialect: Dialect) -> BaseDependencyAnalyzer:
        analyzer = self._analyzers.get(dialect)
        if analyzer is None:
            analyzer = self.ANALYZERS[dialect](self.workspace_root, self.path_resolver)
            self._analyzers[dialect] = analyzer
        return analyzer

    def resolve_dependencies(self, content: str, file_path: str, dialect: Dialect):
        """Absolute paths of the files `file_path` imports, in extraction order."""
        return self.get_analyzer(dialect).resolve_all(content, file_path)
