from __future__ import annotations

import json
from pathlib import Path

import pytest

from injector import main as injector_main
from orchestrator import step

MODEL = """
modules:
  - name: app
    project_dir: app
    build_file: app/build.gradle
    plugins: [com.android.application]
"""


def _project(tmp_path: Path) -> Path:
    (tmp_path / "build.gradle").write_text("// root\n", encoding="utf-8")
    app_dir = tmp_path / "app"
    app_dir.mkdir()
    (app_dir / "build.gradle").write_text("buildscript {\n}\n", encoding="utf-8")
    step_dir = tmp_path / "step"
    step_dir.mkdir()
    (step_dir / "traceSdk.gradle").write_text("", encoding="utf-8")
    (step_dir / "tracePlugin.gradle").write_text("", encoding="utf-8")
    model = tmp_path / "model.yaml"
    model.write_text(MODEL, encoding="utf-8")
    return model


def test_injector_cli_writes_report(tmp_path: Path) -> None:
    model = _project(tmp_path)
    report = tmp_path / "out" / "report.json"

    code = injector_main.main(
        ["--project-model", str(model), "--source-dir", str(tmp_path / "step"), "--report", str(report)]
    )

    assert code == 0
    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["module"] == "app"
    assert payload["changed"] is True
    assert [entry["strategy"] for entry in payload["steps"]] == ["append", "rewrite", "append"]
    assert any(event["kind"] == "block_rewritten" for event in payload["events"])


def test_injector_cli_fails_without_source_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    model = _project(tmp_path)
    monkeypatch.delenv("BITRISE_STEP_SOURCE_DIR", raising=False)
    assert injector_main.main(["--project-model", str(model)]) == 1


def test_step_cli_runs_all_stages(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    model = _project(tmp_path)
    monkeypatch.setenv("APM_COLLECTOR_TOKEN", "token-123")
    monkeypatch.setenv("BITRISE_STEP_SOURCE_DIR", str(tmp_path / "step"))

    code = step.main(["--project-path", str(tmp_path), "--project-model", str(model)])

    assert code == 0
    assert (tmp_path / "bitrise-addons-configuration.json").exists()
    assert 'apply from: "tracePlugin.gradle"' in (tmp_path / "app" / "build.gradle").read_text(encoding="utf-8")


def test_step_cli_exits_on_missing_token(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    model = _project(tmp_path)
    monkeypatch.delenv("APM_COLLECTOR_TOKEN", raising=False)
    assert step.main(["--project-path", str(tmp_path), "--project-model", str(model)]) == 1


def test_injector_cli_fails_on_non_utf8_build_file(tmp_path: Path) -> None:
    model = _project(tmp_path)
    (tmp_path / "app" / "build.gradle").write_bytes("// é\nbuildscript {\n}\n".encode("latin-1"))

    code = injector_main.main(["--project-model", str(model), "--source-dir", str(tmp_path / "step")])

    assert code == 1
