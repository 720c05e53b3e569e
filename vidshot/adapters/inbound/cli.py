"""Command-line entry point for vidshot."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from vidshot import __version__
from vidshot.core.entities.export_result import ExportResult, ExportState
from vidshot.core.exceptions import VidshotError
from vidshot.core.services.timestamp_planner import TimestampPlanner
from vidshot.core.value_objects.sampling import SamplingMode, SamplingParams
from vidshot.infrastructure.config import Settings
from vidshot.infrastructure.container import ApplicationContainer
from vidshot.infrastructure.logging_config import setup_logging
from vidshot.infrastructure.settings_store import SettingsStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2
EXIT_CANCELLED = 130

_MODES = [m.value for m in SamplingMode]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vidshot", description="Export still frames from a video")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--settings", type=Path, default=None, help="Settings YAML file")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")

    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="Export frames using a sampling mode")
    export.add_argument("video", type=Path, help="Path to the video file")
    export.add_argument("--name", required=True, help="Project name (output sub-directory and file prefix)")
    export.add_argument("--output", type=Path, default=None, help="Export directory")
    _add_sampling_args(export)
    export.add_argument("--format", dest="image_format", choices=["jpg", "png", "webp", "bmp"], default=None)
    export.add_argument("--duration-ms", type=int, default=None, help="Override the probed duration")
    export.add_argument("--timeout", type=float, default=None, help="Seek timeout in seconds")
    export.add_argument(
        "--save-defaults", action="store_true", help="Persist the effective export options"
    )

    snapshot = sub.add_parser("snapshot", help="Save a single frame")
    snapshot.add_argument("video", type=Path, help="Path to the video file")
    snapshot.add_argument("--at", dest="timestamp_ms", type=int, required=True, help="Timestamp in ms")
    snapshot.add_argument("--name", required=True, help="Project name")
    snapshot.add_argument("--output", type=Path, default=None, help="Export directory")

    plan = sub.add_parser("plan", help="Print the capture timestamps without exporting")
    plan.add_argument("--duration-ms", type=int, required=True)
    _add_sampling_args(plan)

    return parser


def _add_sampling_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--mode", choices=_MODES, default=None, help="Sampling mode")
    parser.add_argument("--interval-ms", type=int, default=None, help="Spacing for interval mode")
    parser.add_argument("--count", type=int, default=None, help="Frame count for random/orthogonal mode")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible plans")


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    export_updates: dict = {}
    if getattr(args, "output", None) is not None:
        export_updates["export_path"] = str(args.output)
    if getattr(args, "mode", None) is not None:
        export_updates["mode"] = SamplingMode(args.mode)
    if getattr(args, "interval_ms", None) is not None:
        export_updates["interval_ms"] = args.interval_ms
    if getattr(args, "count", None) is not None:
        mode = export_updates.get("mode", settings.export.mode)
        key = "orthogonal_count" if mode is SamplingMode.ORTHOGONAL else "random_count"
        export_updates[key] = args.count
    if getattr(args, "seed", None) is not None:
        export_updates["seed"] = args.seed
    if getattr(args, "timeout", None) is not None:
        export_updates["seek_timeout_seconds"] = args.timeout

    updates: dict = {}
    if export_updates:
        updates["export"] = settings.export.model_copy(update=export_updates)
    if getattr(args, "image_format", None) is not None:
        updates["output"] = settings.output.model_copy(update={"image_format": args.image_format})
    return settings.model_copy(update=updates) if updates else settings


def _exit_code(result: ExportResult) -> int:
    if result.is_fatal:
        return EXIT_FATAL
    if result.status is ExportState.CANCELLED:
        return EXIT_CANCELLED
    if result.failures:
        return EXIT_PARTIAL
    return EXIT_OK


def _print_progress(completed: int, total: int) -> None:
    end = "\n" if completed >= total else ""
    print(f"\r{completed}/{total} frames", end=end, file=sys.stderr, flush=True)


def run_export(args: argparse.Namespace, settings: Settings, store: SettingsStore) -> int:
    if args.save_defaults:
        store.save(settings)

    container = ApplicationContainer(settings)
    controller = container.export_controller()
    job = settings.export.build_job(str(args.video), args.name, duration_ms=args.duration_ms)

    try:
        controller.start(job, on_progress=_print_progress)
    except VidshotError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL

    try:
        result = controller.wait()
    except KeyboardInterrupt:
        print("\nCancelling after the current frame...", file=sys.stderr)
        controller.cancel()
        result = controller.wait()

    print(result.summary())
    return _exit_code(result)


def run_snapshot(args: argparse.Namespace, settings: Settings) -> int:
    service = ApplicationContainer(settings).snapshot_service()
    try:
        path = service.take(str(args.video), args.timestamp_ms, settings.export.export_path, args.name)
    except VidshotError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL
    print(path)
    return EXIT_OK


def run_plan(args: argparse.Namespace, settings: Settings) -> int:
    cfg = settings.export
    planner = TimestampPlanner(seed=cfg.seed, min_spacing_ms=cfg.min_spacing_ms)
    params = SamplingParams(
        interval_ms=cfg.interval_ms,
        random_count=cfg.random_count,
        orthogonal_count=cfg.orthogonal_count,
    )
    try:
        plan = planner.plan(args.duration_ms, cfg.mode, params)
    except VidshotError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL
    for ts in plan:
        print(ts)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    store = SettingsStore(args.settings) if args.settings else SettingsStore()
    try:
        settings = _apply_overrides(store.load(), args)
    except VidshotError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL
    setup_logging(args.log_level or settings.logging.level)
    logger.debug("Running %s with settings from %s", args.command, store.path)

    if args.command == "export":
        return run_export(args, settings, store)
    if args.command == "snapshot":
        return run_snapshot(args, settings)
    return run_plan(args, settings)


if __name__ == "__main__":
    sys.exit(main())
