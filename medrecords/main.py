import argparse
import asyncio
from collections.abc import Sequence
from pathlib import Path

from medrecords.config.settings import Settings
from medrecords.logging.logger import Log
from medrecords.processor.exceptions import ValidationError
from medrecords.processor.models import RawFile
from medrecords.workbench.workbench import Workbench, build_workbench


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="medrecords",
        description="Extract examination records from medical PDFs/images and export them.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="PDF or image files")
    parser.add_argument("--output", type=Path, default=None, help="export destination")
    parser.add_argument("--query", default="", help="only report results matching this text")
    parser.add_argument("--format", choices=("xlsx", "csv"), default=None)
    return parser.parse_args(argv)


async def _run(workbench: Workbench, files: list[RawFile], args: argparse.Namespace) -> int:
    try:
        submission = workbench.submit_files(files)
    except ValidationError as exc:
        Log.error(str(exc))
        return 2
    for rejected in submission.rejected:
        Log.warning(f"Skipped {rejected.name}: {rejected.reason}")

    await workbench.drain()

    workbench.set_query(args.query)
    for result in workbench.filtered():
        if result.error_message is not None:
            Log.error(f"{result.file_name}: {result.status} ({result.error_message})")
        else:
            Log.info(f"{result.file_name}: {result.status}, {len(result.examinations)} examinations")

    rows = workbench.export_now(args.output)
    return 0 if rows else 1


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse args -> build workbench -> process -> export."""
    args = _parse_args(argv)
    overrides = {"export_format": args.format} if args.format else {}
    settings = Settings(**overrides)
    Log.configure(settings.log_level)

    workbench = build_workbench(settings)
    try:
        return asyncio.run(_run(workbench, [RawFile.from_path(p) for p in args.files], args))
    finally:
        workbench.close()


if __name__ == "__main__":
    raise SystemExit(main())
