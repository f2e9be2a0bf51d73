import logging
from typing import Optional
from uuid import uuid4

from ..config import Config
from .changed_files import ChangedFilesStage
from .core.pipeline import Pipeline, PipelineConfig, PipelineResult
from .create_dependency_graph import DependencyGraphStage, GraphBuilder, build_dependency_graph
from .export_graph import GraphExportStage

logger = logging.getLogger(__name__)


def create_graph_pipeline(
    commit_ref: Optional[str] = None,
    output_path: Optional[str] = None,
    pipeline_id: Optional[str] = None,
) -> Pipeline:
    pipeline = Pipeline(PipelineConfig(pipeline_id=pipeline_id or str(uuid4())))
    return pipeline.add_stages([
        ChangedFilesStage({"commit_ref": commit_ref}),
        DependencyGraphStage({"show_progress": Config.SHOW_PROGRESS}),
        GraphExportStage({"output_path": output_path if output_path is not None else Config.OUTPUT_PATH}),
    ])


async def start_graph_pipeline(
    workspace_root: str,
    commit_ref: Optional[str] = None,
    output_path: Optional[str] = None,
    pipeline_id: Optional[str] = None,
) -> PipelineResult:
    """Changed files -> dependency graph -> optional JSON export."""
    pipeline = create_graph_pipeline(commit_ref, output_path, pipeline_id)
    if not pipeline.validate():
        raise ValueError("Invalid graph pipeline configuration")

    result = await pipeline.execute({"workspace_root": workspace_root})
    if not result.success:
        logger.error("Graph pipeline %s failed: %s", result.pipeline_id, result.error)
    return result


__all__ = [
    "GraphBuilder",
    "build_dependency_graph",
    "create_graph_pipeline",
    "start_graph_pipeline",
]
