"""Command-line tests."""

from __future__ import annotations

import datetime
import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest
import yaml
from openapi_components.cli import main


def _document() -> dict[str, Any]:
    title = {"type": "object", "properties": {"title": {"type": "string"}}}
    return {
        "openapi": "3.0.3",
        "paths": {
            "/v1/drafts/{id}": {
                "get": {
                    "operationId": "getDraft",
                    "responses": {"200": {"content": {"application/json": {"schema": title}}}},
                }
            }
        },
    }


def test_json_entrypoint_written_to_output_file(tmp_path: Path) -> None:
    source = tmp_path / "openapi.json"
    source.write_text(json.dumps(_document()), encoding="utf-8")
    target = tmp_path / "out.json"

    assert main([str(source), "-o", str(target)]) == 0

    out = json.loads(target.read_text(encoding="utf-8"))
    assert list(out["components"]["schemas"]) == ["GetDraft.V1.Drafts.One"]
    schema = out["paths"]["/v1/drafts/{id}"]["get"]["responses"]["200"]["content"]["application/json"]["schema"]
    assert schema == {"$ref": "#/components/schemas/GetDraft.V1.Drafts.One"}


def test_yaml_entrypoint_is_echoed_as_yaml(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "openapi.yaml"
    document = _document()
    responses = document["paths"]["/v1/drafts/{id}"]["get"]["responses"]
    responses[200] = responses.pop("200")
    source.write_text(yaml.safe_dump(document), encoding="utf-8")

    assert main(["--entrypoint", str(source), "--no-schema-ids"]) == 0

    out = yaml.safe_load(capsys.readouterr().out)
    assert out["components"]["schemas"]["GetDraft.V1.Drafts.One"] == {
        "type": "object",
        "properties": {"title": {"type": "string"}},
    }


def test_format_can_be_overridden(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "openapi.yaml"
    source.write_text(yaml.safe_dump(_document()), encoding="utf-8")

    assert main([str(source), "--format", "json", "--no-pretty"]) == 0

    text = capsys.readouterr().out
    assert "\n" not in text
    assert json.loads(text)["components"]["schemas"]


def test_verbose_reports_on_stderr(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "openapi.json"
    source.write_text(json.dumps(_document()), encoding="utf-8")

    assert main([str(source), "--verbose", "-o", str(tmp_path / "out.json")]) == 0

    err = capsys.readouterr().err
    assert "extracted: GetDraft.V1.Drafts.One" in err
    assert "1 schema(s) extracted, 0 shared, 0 renamed." in err


def test_missing_entrypoint_exits_with_usage_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 2
    assert main([str(tmp_path / "missing.json")]) == 2
    assert "entrypoint does not exist" in capsys.readouterr().err


def test_extraction_errors_are_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = _document()
    operation = document["paths"]["/v1/drafts/{id}"]["get"]
    operation["responses"]["201"] = {
        "content": {"application/json": {"schema": {"type": "object", "properties": {"n": {"type": "integer"}}}}}
    }
    source = tmp_path / "openapi.json"
    source.write_text(json.dumps(document), encoding="utf-8")

    assert main([str(source)]) == 1
    assert capsys.readouterr().err.startswith("error: Conflict in schema names")


def test_unreadable_document_is_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "openapi.json"
    source.write_text("{not json", encoding="utf-8")

    assert main([str(source)]) == 1
    assert "error: Failed to read" in capsys.readouterr().err


_DATE_EXAMPLE_YAML = """\
openapi: 3.0.3
paths:
  /v1/events/{id}:
    get:
      operationId: getEvent
      responses:
        '200':
          content:
            application/json:
              schema:
                type: object
                properties:
                  day:
                    type: string
                    format: date
                    example: 2024-01-01
"""


def test_yaml_date_examples_are_extracted(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "openapi.yaml"
    source.write_text(_DATE_EXAMPLE_YAML, encoding="utf-8")

    assert main([str(source)]) == 0
    out = yaml.safe_load(capsys.readouterr().out)
    day = out["components"]["schemas"]["GetEvent.V1.Events.One"]["properties"]["day"]
    assert day["example"] == datetime.date(2024, 1, 1)

    assert main([str(source), "--format", "json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["components"]["schemas"]["GetEvent.V1.Events.One"]["properties"]["day"]["example"] == "2024-01-01"


def test_bin_script_runs_from_a_checkout(tmp_path: Path) -> None:
    script = Path(__file__).resolve().parents[1] / "bin" / "extract_openapi_components.py"
    source = tmp_path / "openapi.json"
    source.write_text(json.dumps(_document()), encoding="utf-8")
    target = tmp_path / "out.json"
    env = {k: v for k, v in os.environ.items() if k != "PYTHONPATH"}

    completed = subprocess.run(
        [sys.executable, str(script), str(source), "-o", str(target)],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stderr
    assert list(json.loads(target.read_text(encoding="utf-8"))["components"]["schemas"]) == ["GetDraft.V1.Drafts.One"]
