"""Tests for loading task definition files."""

import pytest

from ecs_run_task.task_definition import TaskDefinitionError, load_task_definition


class TestLoadTaskDefinition:
    """Tests for load_task_definition."""

    def test_yaml_document(self, tmp_path):
        """YAML documents are returned as the register request."""
        path = tmp_path / "task.yaml"
        path.write_text(
            "family: worker\n"
            "containerDefinitions:\n"
            "  - name: app\n"
            "    image: python:3.12\n"
            "    memory: 512\n",
            encoding="utf-8",
        )
        assert load_task_definition(path) == {
            "family": "worker",
            "containerDefinitions": [{"name": "app", "image": "python:3.12", "memory": 512}],
        }

    def test_json_document(self, tmp_path):
        """JSON is accepted since YAML is a superset."""
        path = tmp_path / "task.json"
        path.write_text(
            '{"family": "worker", "containerDefinitions": [{"name": "app", "image": "nginx"}]}',
            encoding="utf-8",
        )
        document = load_task_definition(path)
        assert document["family"] == "worker"
        assert document["containerDefinitions"][0]["image"] == "nginx"

    def test_unknown_keys_pass_through(self, tmp_path):
        """The document is not validated or transformed."""
        path = tmp_path / "task.yaml"
        path.write_text("family: x\nsomethingElse: {nested: [1, 2]}\n", encoding="utf-8")
        assert load_task_definition(path) == {"family": "x", "somethingElse": {"nested": [1, 2]}}

    def test_utf8_content(self, tmp_path):
        """Files are read as UTF-8."""
        path = tmp_path / "task.yaml"
        path.write_text("family: tâche\n", encoding="utf-8")
        assert load_task_definition(path)["family"] == "tâche"

    def test_missing_file(self, tmp_path):
        """A missing file raises TaskDefinitionError."""
        with pytest.raises(TaskDefinitionError, match="Cannot read"):
            load_task_definition(tmp_path / "missing.yaml")

    def test_malformed_document(self, tmp_path):
        """Parse errors raise TaskDefinitionError."""
        path = tmp_path / "task.json"
        path.write_text('{"family": "worker", "containerDefinitions": [', encoding="utf-8")
        with pytest.raises(TaskDefinitionError, match="Cannot parse"):
            load_task_definition(path)

    def test_non_mapping_document(self, tmp_path):
        """A document that isn't a mapping can't be a register request."""
        path = tmp_path / "task.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(TaskDefinitionError, match="must be a mapping"):
            load_task_definition(path)

    def test_empty_document(self, tmp_path):
        """An empty file is rejected."""
        path = tmp_path / "task.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(TaskDefinitionError):
            load_task_definition(path)

    def test_invalid_utf8(self, tmp_path):
        """Bytes that aren't UTF-8 are a read error, not a crash."""
        path = tmp_path / "task.yaml"
        path.write_bytes(b"family: \xff\xfe\n")
        with pytest.raises(TaskDefinitionError, match="Cannot read"):
            load_task_definition(path)

    def test_non_string_keys(self, tmp_path):
        """Top-level keys must be usable as request parameter names."""
        path = tmp_path / "task.yaml"
        path.write_text("family: worker\n1: x\n", encoding="utf-8")
        with pytest.raises(TaskDefinitionError, match="non-string keys"):
            load_task_definition(path)
