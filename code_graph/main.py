import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .config import Config
from .graph_pipeline import build_dependency_graph, start_graph_pipeline
from .models.data_model import GraphBuildError

logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Code Graph API", version="0.1.0")


class GraphRequest(BaseModel):
    workspace_root: str
    seed_paths: List[str]


class ChangesGraphRequest(BaseModel):
    workspace_root: str
    commit_ref: Optional[str] = None


class ErrorResponse(BaseModel):
    detail: str


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/graph", responses={400: {"model": ErrorResponse}})
def build_graph(req: GraphRequest) -> Dict[str, Any]:
    try:
        graph = build_dependency_graph(req.seed_paths, req.workspace_root)
    except GraphBuildError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return graph.to_dict()


@app.post("/graph/changes", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def build_changes_graph(req: ChangesGraphRequest) -> Dict[str, Any]:
    try:
        # Output is returned to the caller, never written to disk from the API
        result = await start_graph_pipeline(req.workspace_root, commit_ref=req.commit_ref, output_path="")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not result.success:
        failed = result.stage_results[-1]
        client_errors = {"GraphBuildError", "GitError"}
        status = 400 if failed.metadata.get("error_type") in client_errors else 500
        raise HTTPException(status_code=status, detail=result.error)

    data = result.data
    return {
        **data["graph"].to_dict(),
        "changedFiles": [{"path": f.path, "status": f.status} for f in data["changed_files"]],
    }
