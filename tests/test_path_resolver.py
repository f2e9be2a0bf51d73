import os

from code_graph.dependency_resolver.core.path_resolver import PathResolver


def test_first_existing_prefers_literal_candidate(make_tree, workspace):
    make_tree({"a.ts": "", "a.ts.js": ""})
    resolver = PathResolver()

    found = resolver.first_existing(str(workspace / "a.ts"), ("", ".js"))

    assert found == str(workspace / "a.ts")


def test_first_existing_respects_suffix_order(make_tree, workspace):
    make_tree({"b.js": "", "b.tsx": ""})
    resolver = PathResolver()

    found = resolver.first_existing(str(workspace / "b"), (".ts", ".tsx", ".js"))

    assert found == str(workspace / "b.tsx")


def test_directories_do_not_count_as_files(workspace):
    (workspace / "pkg").mkdir()
    resolver = PathResolver()

    assert resolver.first_existing(str(workspace / "pkg")) is None


def test_injected_predicate_is_used():
    seen = []

    def fake_is_file(path):
        seen.append(path)
        return path.endswith(".jsx")

    resolver = PathResolver(is_file=fake_is_file)

    assert resolver.first_existing("/x/comp", (".ts", ".jsx")) == "/x/comp.jsx"
    assert seen == ["/x/comp.ts", "/x/comp.jsx"]


def test_module_file_falls_back_to_mod_rs(make_tree, workspace):
    make_tree({"net/mod.rs": ""})
    resolver = PathResolver()

    assert resolver.module_file(str(workspace), "net") == os.path.join(str(workspace), "net", "mod.rs")
    assert resolver.module_file(str(workspace), "missing") is None
