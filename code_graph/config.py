import os
from pathlib import Path

if Path(".env.local").exists():
    # Optional local-only overrides; production should rely on env vars.
    from dotenv import load_dotenv

    load_dotenv(".env.local")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    LOG_LEVEL: str = os.getenv("CODE_GRAPH_LOG_LEVEL", "INFO")
    SHOW_PROGRESS: bool = _env_flag("CODE_GRAPH_SHOW_PROGRESS")
    OUTPUT_PATH: str = os.getenv("CODE_GRAPH_OUTPUT_PATH", "")

    # Closed, case-sensitive set. Anything else never becomes a node.
    SUPPORTED_EXTENSIONS: tuple = (
        ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".rs", ".graphql",
    )

    # Suffixes probed (in order) when a relative JS/TS specifier has no extension
    JS_PROBE_EXTENSIONS: tuple = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")

    JS_GRAMMARS: dict = {
        ".ts": "typescript",
        ".tsx": "tsx",
        ".js": "tsx",
        ".jsx": "tsx",
        ".mjs": "tsx",
        ".cjs": "tsx",
    }

    RUST_EXTENSION: str = ".rs"
    RUST_MANIFEST: str = "Cargo.toml"
    RUST_SOURCE_DIR: str = "src"
    # Only mod.rs resolves `self::` next to itself; lib.rs and main.rs own lib/ and main/
    RUST_MOD_FILE_STEM: str = "mod"

    GRAPHQL_EXTENSION: str = ".graphql"
