"""
Stage 3: Export
Writes the graph as JSON for a rendering surface. A no-op when no output path is configured.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .core.base import PipelineStage, StageResult

logger = logging.getLogger(__name__)


class GraphExportStage(PipelineStage):

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__("Graph Export", config)
        self.output_path = self.config.get("output_path") or ""
        self.indent = self.config.get("indent", 2)

    def validate_config(self) -> bool:
        if self.output_path and Path(self.output_path).is_dir():
            logger.error("Graph output path is a directory: %s", self.output_path)
            return False
        return True

    async def execute(self, input_data: Dict[str, Any]) -> StageResult:
        graph = input_data["graph"]

        if not self.output_path:
            return StageResult(success=True, data=input_data, metadata={"stage": self.name, "written": False})

        output = Path(self.output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(graph.to_json(indent=self.indent), encoding="utf-8")
        logger.info("Wrote graph with %s nodes to %s", len(graph.nodes), output)

        return StageResult(
            success=True,
            data={**input_data, "output_path": str(output)},
            metadata={"stage": self.name, "written": True},
        )
