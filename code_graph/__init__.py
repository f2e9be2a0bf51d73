from .graph_pipeline import GraphBuilder, build_dependency_graph, start_graph_pipeline
from .models.data_model import DependencyGraph, Dialect, Edge, FileNode, GraphBuildError

__all__ = [
    "DependencyGraph",
    "Dialect",
    "Edge",
    "FileNode",
    "GraphBuildError",
    "GraphBuilder",
    "build_dependency_graph",
    "start_graph_pipeline",
]
