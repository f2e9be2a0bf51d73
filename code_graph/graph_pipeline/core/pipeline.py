"""
Pipeline orchestrator that runs graph stages in order.
"""

from typing import List, Any, Dict, Optional
from dataclasses import dataclass, field
import asyncio
import time
from loguru import logger

from .base import PipelineStage, StageResult
from ...models.data_model import GraphStageStatus


@dataclass
class PipelineConfig:
    """Configuration for the entire pipeline."""
    pipeline_id: str
    continue_on_failure: bool = False
    max_retries: int = 0
    retry_delay: float = 1.0


@dataclass
class PipelineResult:
    """Result from the entire pipeline execution."""
    success: bool
    pipeline_id: str
    stage_results: List[StageResult]
    total_execution_time: float
    stage_status: Dict[str, GraphStageStatus] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def data(self) -> Any:
        """Output of the last stage that ran."""
        return self.stage_results[-1].data if self.stage_results else None


class Pipeline:
    """Executes stages sequentially, feeding each stage's data to the next."""

    def __init__(self, config: PipelineConfig):
        self.config = config
        self.stages: List[PipelineStage] = []
        self.stage_status: Dict[str, GraphStageStatus] = {}

    def add_stage(self, stage: PipelineStage) -> "Pipeline":
        self.stages.append(stage)
        self.stage_status[stage.name] = GraphStageStatus.PENDING
        return self

    def add_stages(self, stages: List[PipelineStage]) -> "Pipeline":
        for stage in stages:
            self.add_stage(stage)
        return self

    async def execute(self, initial_data: Any) -> PipelineResult:
        """
        Execute all stages in the pipeline sequentially.

        Args:
            initial_data: Input for the first stage

        Returns:
            PipelineResult containing results from all stages that ran
        """
        logger.info(f"Starting pipeline: {self.config.pipeline_id}")
        start_time = time.monotonic()

        stage_results: List[StageResult] = []
        current_data = initial_data

        for i, stage in enumerate(self.stages):
            logger.info(f"Executing stage {i + 1}/{len(self.stages)}: {stage.name}")
            self.stage_status[stage.name] = GraphStageStatus.RUNNING

            result = await self._execute_stage_with_retry(stage, current_data)
            stage_results.append(result)

            if not result.success:
                self.stage_status[stage.name] = GraphStageStatus.FAILED
                if self.config.continue_on_failure:
                    logger.warning(f"Stage {stage.name} failed, but continuing pipeline")
                    continue

                logger.error(f"Stage {stage.name} failed, stopping pipeline")
                for remaining in self.stages[i + 1:]:
                    self.stage_status[remaining.name] = GraphStageStatus.SKIPPED
                return PipelineResult(
                    success=False,
                    pipeline_id=self.config.pipeline_id,
                    stage_results=stage_results,
                    total_execution_time=time.monotonic() - start_time,
                    stage_status=dict(self.stage_status),
                    error=f"Pipeline failed at stage: {stage.name}: {result.error}",
                )

            self.stage_status[stage.name] = GraphStageStatus.COMPLETED
            current_data = result.data

        total_time = time.monotonic() - start_time
        logger.info(f"Pipeline {self.config.pipeline_id} completed in {total_time:.2f}s")

        return PipelineResult(
            success=True,
            pipeline_id=self.config.pipeline_id,
            stage_results=stage_results,
            total_execution_time=total_time,
            stage_status=dict(self.stage_status),
        )

    async def _execute_stage_with_retry(self, stage: PipelineStage, data: Any) -> StageResult:
        for attempt in range(self.config.max_retries + 1):
            if attempt > 0:
                logger.info(f"Retrying stage {stage.name}, attempt {attempt + 1}")
                await asyncio.sleep(self.config.retry_delay)

            result = await stage.run(data)
            if result.success:
                return result

            if attempt < self.config.max_retries:
                logger.warning(f"Stage {stage.name} failed, retrying...")
            else:
                logger.error(f"Stage {stage.name} failed after {self.config.max_retries + 1} attempts")

        return result

    def validate(self) -> bool:
        """Validate the entire pipeline configuration."""
        if not self.stages:
            logger.error("Pipeline has no stages")
            return False

        for stage in self.stages:
            if not stage.validate_config():
                logger.error(f"Stage {stage.name} has invalid configuration")
                return False

        return True
