import pytest
from fastapi.testclient import TestClient

from code_graph.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_build_graph(client, make_tree, workspace):
    make_tree({"a.ts": 'import "./b";\n', "b.ts": ""})

    response = client.post("/graph", json={
        "workspace_root": str(workspace),
        "seed_paths": [str(workspace / "a.ts")],
    })

    assert response.status_code == 200
    body = response.json()
    assert [n["id"] for n in body["nodes"]] == ["a.ts", "b.ts"]
    assert [n["isChanged"] for n in body["nodes"]] == [True, False]
    assert body["edges"] == [{"source": "a.ts", "target": "b.ts", "kind": "import"}]


def test_build_graph_missing_workspace(client, tmp_path):
    response = client.post("/graph", json={"workspace_root": str(tmp_path / "nope"), "seed_paths": []})

    assert response.status_code == 400
    assert "does not exist" in response.json()["detail"]


def test_changes_graph_outside_git_repo(client, workspace):
    response = client.post("/graph/changes", json={"workspace_root": str(workspace)})

    assert response.status_code == 400


def test_request_validation(client):
    response = client.post("/graph", json={"workspace_root": "/tmp"})

    assert response.status_code == 422
