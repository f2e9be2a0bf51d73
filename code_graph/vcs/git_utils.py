import asyncio
import logging
import os
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)


@dataclass
class ChangedFile:
    path: str    # absolute path inside the workspace
    status: str  # M (modified), A (added), R (renamed), ?? (untracked), ...


class GitError(RuntimeError):
    """A git command exited non-zero or could not be started."""

    def __init__(self, message: str, *, command: List[str], returncode: int = -1, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


async def run_git(workspace_root: str, *args: str) -> str:
    command = ["git", *args]
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=workspace_root,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise GitError(f"Failed to start {' '.join(command)}: {e}", command=command) from e

    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        err = stderr.decode(errors="ignore").strip()
        raise GitError(
            f"{' '.join(command)} exited with {process.returncode}: {err}",
            command=command,
            returncode=process.returncode,
            stderr=err,
        )
    return stdout.decode("utf-8", errors="ignore")


def _unquote(path: str) -> str:
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        return path[1:-1]
    return path


def parse_porcelain_status(output: str, workspace_root: str) -> List[ChangedFile]:
    """`git status --porcelain` lines -> changed files, deletions excluded."""
    files: List[ChangedFile] = []
    for line in output.splitlines():
        if len(line) < 4:
            continue
        status = line[:2].strip()
        file_path = line[3:]
        if not status or "D" in status:
            continue
        if " -> " in file_path:
            file_path = file_path.split(" -> ", 1)[1]
        files.append(ChangedFile(path=os.path.join(workspace_root, _unquote(file_path)), status=status))
    return files


def parse_name_status(output: str, workspace_root: str) -> List[ChangedFile]:
    """`git diff-tree --name-status` lines -> changed files, deletions excluded."""
    files: List[ChangedFile] = []
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) < 2:
            continue
        status = parts[0].strip()
        if not status or status.startswith("D"):
            continue
        # Renames and copies list old and new path; the new one is what exists now
        files.append(ChangedFile(path=os.path.join(workspace_root, _unquote(parts[-1])), status=status[0]))
    return files


async def get_changed_files(workspace_root: str) -> List[ChangedFile]:
    """Staged, unstaged and untracked changes in the working tree."""
    output = await run_git(workspace_root, "status", "--porcelain")
    files = parse_porcelain_status(output, workspace_root)
    logger.info("Found %s changed files in %s", len(files), workspace_root)
    return files


async def get_files_changed_in_commit(workspace_root: str, commit_ref: str) -> List[ChangedFile]:
    output = await run_git(
        workspace_root, "diff-tree", "--no-commit-id", "--name-status", "-r", "--root", commit_ref
    )
    files = parse_name_status(output, workspace_root)
    logger.info("Found %s files changed in %s", len(files), commit_ref)
    return files


async def get_all_tracked_files(workspace_root: str) -> List[str]:
    output = await run_git(workspace_root, "ls-files")
    return [os.path.join(workspace_root, line) for line in output.splitlines() if line]
