import os

import pytest

from code_graph.dependency_resolver.languages.js_analyser import JSAnalyzer, is_relative_specifier


@pytest.fixture
def analyzer(workspace):
    return JSAnalyzer(str(workspace))


class TestExtraction:

    def test_static_imports_in_document_order(self, analyzer):
        code = (
            'import { a } from "./a";\n'
            "import b from '../lib/b';\n"
            'import "./side-effect";\n'
        )

        assert analyzer.extract_imports(code, "/w/src/index.ts") == [
            "./a", "../lib/b", "./side-effect",
        ]

    def test_bare_specifiers_are_dropped(self, analyzer):
        code = 'import React from "react";\nimport x from "some-lib";\nimport y from "./y";\n'

        assert analyzer.extract_imports(code, "/w/app.tsx") == ["./y"]

    def test_absolute_specifier_is_kept(self, analyzer):
        code = 'import cfg from "/etc/app/config";\n'

        assert analyzer.extract_imports(code, "/w/app.js") == ["/etc/app/config"]

    def test_dynamic_import_with_string_literal(self, analyzer):
        code = (
            "export async function load(name) {\n"
            '  const lazy = await import("./lazy");\n'
            "  const computed = await import(name);\n"
            '  const pkg = await import("lodash");\n'
            "  return [lazy, computed, pkg];\n"
            "}\n"
        )

        assert analyzer.extract_imports(code, "/w/loader.js") == ["./lazy"]

    def test_jsx_and_typescript_syntax_are_tolerated(self, analyzer):
        code = (
            'import { Button } from "./Button";\n'
            "interface Props { label: string }\n"
            "export const App = (props: Props) => <Button label={props.label} />;\n"
        )

        assert analyzer.extract_imports(code, "/w/App.tsx") == ["./Button"]

    def test_decorators_and_class_properties(self, analyzer):
        code = (
            'import { Component } from "./decorators";\n'
            "@Component({ selector: 'x' })\n"
            "class Widget {\n"
            "  count: number = 0;\n"
            "}\n"
        )

        assert analyzer.extract_imports(code, "/w/widget.ts") == ["./decorators"]

    def test_syntax_error_yields_no_imports(self, analyzer):
        code = 'import { a from "./a";\nconst = ;\n'

        assert analyzer.extract_imports(code, "/w/broken.ts") == []


class TestResolution:

    def test_literal_path(self, make_tree, workspace, analyzer):
        make_tree({"src/a.ts": "", "src/util.js": ""})

        resolved = analyzer.resolve_import("./util.js", str(workspace / "src" / "a.ts"))

        assert resolved == str(workspace / "src" / "util.js")

    def test_extension_probing_order(self, make_tree, workspace, analyzer):
        make_tree({"a.ts": "", "b.tsx": "", "b.js": ""})

        resolved = analyzer.resolve_import("./b", str(workspace / "a.ts"))

        assert resolved == str(workspace / "b.tsx")

    def test_index_probing(self, make_tree, workspace, analyzer):
        make_tree({"a.ts": "", "components/index.jsx": ""})

        resolved = analyzer.resolve_import("./components", str(workspace / "a.ts"))

        assert resolved == os.path.join(str(workspace), "components", "index.jsx")

    def test_parent_directory_reference(self, make_tree, workspace, analyzer):
        make_tree({"src/deep/a.ts": "", "src/shared.mjs": ""})

        resolved = analyzer.resolve_import("../shared", str(workspace / "src" / "deep" / "a.ts"))

        assert resolved == str(workspace / "src" / "shared.mjs")

    def test_unresolvable_returns_none(self, make_tree, workspace, analyzer):
        make_tree({"a.ts": ""})

        assert analyzer.resolve_import("./missing", str(workspace / "a.ts")) is None

    def test_resolve_all_skips_unresolved(self, make_tree, workspace, analyzer):
        make_tree({"a.ts": "", "real.ts": ""})
        code = 'import "./missing";\nimport { r } from "./real";\n'

        assert analyzer.resolve_all(code, str(workspace / "a.ts")) == [str(workspace / "real.ts")]


@pytest.mark.parametrize("specifier, expected", [
    ("./x", True),
    ("../x", True),
    ("/abs/x", True),
    ("react", False),
    ("@scope/pkg", False),
    ("", False),
])
def test_is_relative_specifier(specifier, expected):
    assert is_relative_specifier(specifier) is expected
