"""
Stage contract for the graph pipeline.

Stages pass a single dict down the line: `ChangedFilesStage` adds `seed_paths`
to the incoming `workspace_root`, `DependencyGraphStage` adds the built `graph`,
and `GraphExportStage` adds the `output_path` it wrote to.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from dataclasses import dataclass, field
import time
from loguru import logger


@dataclass
class StageResult:
    """Outcome of one stage; `data` becomes the next stage's input."""
    success: bool
    data: Any
    # num_changed, num_nodes, num_edges, written; error_type on failure
    metadata: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    execution_time: Optional[float] = None


class PipelineStage(ABC):
    """One step from workspace to graph; `config` holds stage-specific options such as `output_path`."""

    def __init__(self, name: str, config: Optional[Dict[str, Any]] = None):
        self.name = name
        self.config = config or {}

    @abstractmethod
    async def execute(self, input_data: Any) -> StageResult:
        """
        Do the stage's work on the shared graph dict.

        Args:
            input_data: dict with `workspace_root`, plus whatever earlier stages added

        Returns:
            StageResult carrying the same dict, extended with this stage's output
        """

    async def run(self, input_data: Any) -> StageResult:
        """Time `execute`; a raised GraphBuildError, GitError or anything else becomes a failed result."""
        logger.info(f"Graph stage {self.name} starting")
        start_time = time.time()

        try:
            result = await self.execute(input_data)
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(f"Graph stage {self.name} failed after {execution_time:.2f}s: {e}")
            return StageResult(
                success=False,
                data=None,
                metadata={"stage": self.name, "error_type": type(e).__name__},
                error=str(e),
                execution_time=execution_time,
            )

        result.execution_time = time.time() - start_time
        logger.info(f"Graph stage {self.name} finished in {result.execution_time:.2f}s")
        return result

    def validate_config(self) -> bool:
        """Checked by `Pipeline.validate` before `start_graph_pipeline` runs anything."""
        return True
