import pytest

from code_graph.config import Config
from code_graph.dependency_resolver.languages.graphql_analyser import GraphQLAnalyzer
from code_graph.dependency_resolver.languages.js_analyser import JSAnalyzer
from code_graph.dependency_resolver.languages.rust_analyser import RustAnalyzer
from code_graph.dependency_resolver.run import DependencyResolver
from code_graph.models.data_model import Dialect


@pytest.fixture
def resolver(workspace):
    return DependencyResolver(str(workspace))


class TestDispatch:

    @pytest.mark.parametrize("ext, analyzer_cls", [
        (".ts", JSAnalyzer),
        (".tsx", JSAnalyzer),
        (".js", JSAnalyzer),
        (".jsx", JSAnalyzer),
        (".mjs", JSAnalyzer),
        (".cjs", JSAnalyzer),
        (".rs", RustAnalyzer),
        (".graphql", GraphQLAnalyzer),
    ])
    def test_extension_routes_to_analyzer(self, resolver, ext, analyzer_cls):
        dialect = Dialect.for_path(f"/w/file{ext}")

        assert isinstance(resolver.get_analyzer(dialect), analyzer_cls)

    def test_every_supported_extension_has_an_analyzer(self, resolver):
        for ext in Config.SUPPORTED_EXTENSIONS:
            assert Dialect.for_path(f"/w/file{ext}") in DependencyResolver.ANALYZERS

    @pytest.mark.parametrize("name", ["data.json", "README.md", "Cargo.toml", "a.TS", "Makefile"])
    def test_unsupported_paths_have_no_dialect(self, name):
        assert Dialect.for_path(f"/w/{name}") is None

    def test_one_analyzer_instance_per_dialect(self, resolver):
        first = resolver.get_analyzer(Dialect.JS_LIKE)

        assert resolver.get_analyzer(Dialect.JS_LIKE) is first
        assert resolver.get_analyzer(Dialect.RUST) is not first

    def test_resolve_dependencies_uses_the_dialect_analyzer(self, make_tree, workspace, resolver):
        make_tree({"q.graphql": "", "UserFields.graphql": ""})

        resolved = resolver.resolve_dependencies(
            "query { ...UserFields }", str(workspace / "q.graphql"), Dialect.GRAPHQL
        )

        assert resolved == [str(workspace / "UserFields.graphql")]
