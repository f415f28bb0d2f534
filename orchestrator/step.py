"""Step CLI.

Writes the add-on configuration file, injects the SDK and Gradle plugin into
the application module, and optionally runs the verification task."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from common.config import load_injector_config
from common.errors import InjectorError
from common.logging import configure_logging, get_logger

from injector.main import run_injection, write_report
from orchestrator.config_file import write_addon_config
from orchestrator.gradle import find_root_gradle, project_dir, run_gradle_task

LOGGER = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Add the SDK and Gradle plugin to an Android project")
    parser.add_argument("--project-path", default=".", help="Root project path (relative to BITRISE_SOURCE_DIR)")
    parser.add_argument("--project-model", required=True, type=Path, help="YAML/JSON project model file")
    parser.add_argument("--config", type=Path, help="Injector config (defaults to config/injector.yaml)")
    parser.add_argument("--source-dir", type=Path, help="Directory of the fragment files to copy")
    parser.add_argument("--gradle-options", default="", help="Extra options passed to the Gradle wrapper")
    parser.add_argument("--verify", action="store_true", help="Run the verification task afterwards")
    parser.add_argument("--report", type=Path, help="Write the JSON report to this path")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> None:
    config = load_injector_config(args.config)
    root = project_dir(args.project_path, config.source_dir_env)
    root_gradle = find_root_gradle(root)
    LOGGER.info("Found root build descriptor %s", root_gradle)

    LOGGER.info("Creating the configuration file")
    config_path = write_addon_config(root, config.addon_file)
    LOGGER.info("Configuration file successfully created at %s", config_path)

    LOGGER.info("Injecting SDK and plugin into the project")
    payload = run_injection(args.project_model, config, source_dir=args.source_dir)
    LOGGER.info("Injection finished for module %s (changed=%s)", payload["module"], payload["changed"])
    if args.report:
        write_report(payload, args.report)

    if args.verify:
        LOGGER.info("Verifying the injection on project")
        proc = run_gradle_task(root, config.verify_task, args.gradle_options)
        print(f"Console output from {config.verify_task} task:\n{proc.stdout}")
        LOGGER.info("Verification was successful")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    try:
        run(args)
    except InjectorError as exc:
        LOGGER.error("Step failed, aborting build. Reason: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
