import os
from typing import Callable, Iterable, Optional


def is_regular_file(path: str) -> bool:
    return os.path.isfile(path)


class PathResolver:
    """
    Probe a candidate path and a list of suffixed variants against the filesystem.

    The predicate is injectable so resolvers can be exercised without touching disk.
    """

    def __init__(self, is_file: Callable[[str], bool] = is_regular_file):
        self.is_file = is_file

    def first_existing(self, candidate: str, suffixes: Iterable[str] = ("",)) -> Optional[str]:
        """Return `candidate + suffix` for the first suffix that names a file, else None."""
        for suffix in suffixes:
            probe = candidate + suffix
            if self.is_file(probe):
                return probe
        return None

    def first_of(self, candidates: Iterable[str]) -> Optional[str]:
        for candidate in candidates:
            if self.is_file(candidate):
                return candidate
        return None

    def module_file(self, directory: str, module_name: str) -> Optional[str]:
        """Rust-style lookup: `<dir>/<name>.rs`, then `<dir>/<name>/mod.rs`."""
        return self.first_of((
            os.path.join(directory, f"{module_name}.rs"),
            os.path.join(directory, module_name, "mod.rs"),
        ))
