"""CLI tests."""

import logging
from unittest.mock import patch

import orjson
import pytest

from cli import main
from clients.projects import ProjectStore
from codegen import emit_react, emit_vue
from core import get_settings


@pytest.fixture(autouse=True)
def reset_logging():
    """main() points the root logger at the captured stdout; detach it afterwards."""
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def projects_path(tmp_path, monkeypatch):
    path = tmp_path / "projects.json"
    monkeypatch.setenv("STUDIO_PROJECTS_PATH", str(path))
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()


@pytest.fixture
def tree_file(tmp_path, small_tree):
    path = tmp_path / "tree.json"
    path.write_bytes(orjson.dumps(small_tree.to_wire()))
    return path


@pytest.mark.unit
def test_export_file_to_react(projects_path, tree_file, tmp_path, small_tree):
    out = tmp_path / "out" / "Component.jsx"

    assert main(["export", str(tree_file), "--out", str(out)]) == 0
    assert out.read_text() == emit_react(small_tree) + "\n"


@pytest.mark.unit
def test_export_saved_project_to_vue(projects_path, tmp_path, dashboard):
    project = ProjectStore(projects_path).save_named_project("Dashboard", dashboard)
    out = tmp_path / "Dashboard.vue"

    assert main(["export", project.id, "--dialect", "vue", "--out", str(out)]) == 0
    assert out.read_text() == emit_vue(dashboard) + "\n"


@pytest.mark.unit
def test_export_unknown_project_fails(projects_path, capsys):
    assert main(["export", "proj_01ARZ3NDEKTSV4RRFFQ69G5FAV"]) == 1
    assert "Unknown project" in capsys.readouterr().err


@pytest.mark.unit
def test_export_invalid_tree_fails(projects_path, tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text('{"id": "a", "type": "Card", "children": [{"id": "a", "type": "Text"}]}')

    assert main(["export", str(path)]) == 1
    assert "Duplicate node id 'a'" in capsys.readouterr().err


@pytest.mark.unit
def test_export_rejects_unknown_dialect(projects_path, tree_file):
    with pytest.raises(SystemExit):
        main(["export", str(tree_file), "--dialect", "svelte"])


@pytest.mark.unit
def test_projects_listing(projects_path, small_tree, capsys):
    assert main(["projects"]) == 0
    assert "No saved projects" in capsys.readouterr().out

    project = ProjectStore(projects_path).save_named_project("Landing page", small_tree)
    assert main(["projects"]) == 0
    out = capsys.readouterr().out
    assert project.id in out
    assert "Landing page" in out


@pytest.mark.unit
def test_generate_items(projects_path, mock_gemini_model, capsys):
    with patch("core.container.ModelLoader.load", return_value=mock_gemini_model):
        assert main(["generate-items", "tech stocks"]) == 0

    out = capsys.readouterr().out
    assert '"title": "AAPL"' in out


@pytest.mark.unit
def test_generate_items_failure(projects_path, mock_gemini_model, capsys):
    mock_gemini_model.generate_json.side_effect = RuntimeError("quota")

    with patch("core.container.ModelLoader.load", return_value=mock_gemini_model):
        assert main(["generate-items", "tech stocks"]) == 1

    assert "generation failed" in capsys.readouterr().err


@pytest.mark.unit
def test_corrupt_project_file_is_reported(projects_path, tree_file, capsys):
    projects_path.write_text("{not json")

    assert main(["projects"]) == 1
    assert "Cannot read saved projects" in capsys.readouterr().err

    assert main(["export", str(tree_file)]) == 0
    assert "export default function" in capsys.readouterr().out
