#!/usr/bin/env python
import argparse
import asyncio
from datetime import date
from pathlib import Path

from loguru import logger

from config import configure_loguru
from config.app_settings import settings
from core.calendar import workouts_on_date
from core.containers import build_container
from core.enums import ExportKind, StorageBackend
from core.exercises import exercise_names, total_volume
from core.export import backup_filename, export_csv, export_json, parse_import
from core.progress import exercise_series, progress_stats
from core.repository import TrackerRepository
from core.utils.dates import from_date_key


def _date_arg(value: str) -> date:
    try:
        return from_date_key(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from None


def _print_summary(repository: TrackerRepository, exercise: str | None, day: date | None) -> None:
    stats = progress_stats(repository.workouts)
    print(f"Workouts: {stats.workouts} | Exercises: {stats.exercises} | Active days: {stats.active_days}")
    if day:
        for workout in workouts_on_date(day, repository.workouts):
            print(f"{workout.date} {workout.routine_name}: {total_volume(workout):g} kg total volume")
    names = [exercise] if exercise else exercise_names(repository.workouts)
    for name in names:
        points = exercise_series(name, repository.workouts, settings.CHART_LOCALE)
        if not points:
            print(f"[empty] {name}")
            continue
        trend = ", ".join(f"{p.date}: {p.max_weight:g}" for p in points)
        print(f"{name} -> {trend}")


async def _run(args: argparse.Namespace) -> None:
    container = build_container(settings)
    repository = container.repository()
    try:
        await repository.load()
        if args.command == "summary":
            _print_summary(repository, args.exercise, args.date)
        elif args.command in {"export-json", "export-csv"}:
            kind = ExportKind.json if args.command == "export-json" else ExportKind.csv
            if kind is ExportKind.json:
                content = export_json(repository.routines, repository.workouts)
            else:
                content = export_csv(repository.workouts)
            target = args.output or Path(backup_filename(kind))
            target.write_text(content, encoding="utf-8")
            print(f"[ok] wrote {target}")
        elif args.command == "import":
            routines, workouts = parse_import(args.source.read_text(encoding="utf-8"))
            await repository.import_data(routines, workouts)
            print(f"[ok] imported {len(routines)} routines and {len(workouts)} workouts")
    finally:
        if settings.STORAGE_BACKEND is StorageBackend.remote:
            await container.http_client().aclose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Inspect, export or import the signed-in user's workout log.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    summary = subparsers.add_parser("summary", help="Print progress stats and per-exercise trends.")
    summary.add_argument("--exercise", help="Only print the trend of this exercise.")
    summary.add_argument("--date", type=_date_arg, help="Also list workouts logged on this YYYY-MM-DD day.")

    for name in ("export-json", "export-csv"):
        export = subparsers.add_parser(name, help=f"Write a {name.split('-')[1].upper()} backup.")
        export.add_argument("--output", type=Path, help="Target file. Defaults to a dated backup name.")

    importer = subparsers.add_parser("import", help="Re-create routines and workouts from a JSON backup.")
    importer.add_argument("source", type=Path)

    args = parser.parse_args(argv)
    configure_loguru()
    logger.debug(f"Running {args.command} against the {settings.STORAGE_BACKEND} backend")
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
