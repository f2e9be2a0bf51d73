"""
Stage 1: Changed Files
Collects seed files from git: working-tree changes, or the files touched by one commit.
"""

import logging
from typing import Any, Dict, Optional

from ..vcs.git_utils import get_changed_files, get_files_changed_in_commit
from .core.base import PipelineStage, StageResult

logger = logging.getLogger(__name__)


class ChangedFilesStage(PipelineStage):

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__("Changed Files", config)
        self.commit_ref = self.config.get("commit_ref")

    async def execute(self, input_data: Dict[str, Any]) -> StageResult:
        workspace_root = input_data["workspace_root"]

        if self.commit_ref:
            changed = await get_files_changed_in_commit(workspace_root, self.commit_ref)
        else:
            changed = await get_changed_files(workspace_root)

        if not changed:
            logger.info("No changed files found in %s", workspace_root)

        return StageResult(
            success=True,
            data={
                **input_data,
                "changed_files": changed,
                "seed_paths": [f.path for f in changed],
            },
            metadata={"stage": self.name, "num_changed": len(changed), "commit_ref": self.commit_ref},
        )
