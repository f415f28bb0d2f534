"""Injector entry point."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from common.config import InjectorConfig, load_injector_config
from common.errors import InjectorError
from common.events import InjectionContext, RecordingSink
from common.logging import configure_logging, get_logger
from common.paths import ensure_dir

from injector.project import load_project_model
from injector.service import InjectionReport, TraceInjector

LOGGER = get_logger(__name__)


def run_injection(
    project_model: Path,
    config: InjectorConfig,
    *,
    source_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Run the injector and return the JSON-ready report with its events."""

    sink = RecordingSink()
    context = InjectionContext(logger=get_logger("injector"), sink=sink)
    modules = load_project_model(project_model)
    injector = TraceInjector(config, context, source_dir=source_dir)
    report: InjectionReport = injector.run(modules)
    payload = report.to_dict()
    payload["events"] = [event.to_dict() for event in sink.events]
    return payload


def write_report(payload: Dict[str, Any], path: Path) -> None:
    ensure_dir(path.parent)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    LOGGER.info("Report written to %s", path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inject the SDK and Gradle plugin into the application module")
    parser.add_argument("--project-model", required=True, type=Path, help="YAML/JSON project model file")
    parser.add_argument("--config", type=Path, help="Injector config (defaults to config/injector.yaml)")
    parser.add_argument("--source-dir", type=Path, help="Directory of the fragment files to copy")
    parser.add_argument("--report", type=Path, help="Write the JSON report to this path")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INJECTOR_LOG_LEVEL or INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        config = load_injector_config(args.config)
        payload = run_injection(args.project_model, config, source_dir=args.source_dir)
    except InjectorError as exc:
        LOGGER.error("Injection failed, aborting build. Reason: %s", exc)
        return 1
    if args.report:
        write_report(payload, args.report)
    LOGGER.info("Injection finished for module %s (changed=%s)", payload["module"], payload["changed"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
