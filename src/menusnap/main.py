"""Command-line entry point: analyze a menu photo and optionally save it to history."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from menusnap.core.config import Settings, get_settings
from menusnap.core.logging import configure_logging
from menusnap.db.mongo import MongoDB
from menusnap.db.repositories import MenuScanRepository
from menusnap.models.menu import AnalysisState, AnalysisStatus
from menusnap.models.scan import MenuScanRecord
from menusnap.services.menu_analysis import (
    build_coordinator,
    build_extraction_client,
    compress_for_history,
)

logger = logging.getLogger(__name__)


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Rank the items on a restaurant menu photo by healthiness."
    )
    parser.add_argument("image", nargs="?", help="Path to a menu photo (JPEG, PNG, ...)")
    parser.add_argument(
        "--save",
        metavar="RESTAURANT",
        default=None,
        help="Save a successful analysis to history under this restaurant name",
    )
    parser.add_argument(
        "--history", action="store_true", help="List saved scans, most recent first"
    )
    parser.add_argument("--log-level", default=None, help="Override MENUSNAP_LOG_LEVEL")
    args = parser.parse_args(argv)
    if not args.history and not args.image:
        parser.error("an image path is required unless --history is given")
    return args


def format_state(state: AnalysisState) -> str:
    """Render a terminal analysis state for the console."""
    if state.status is AnalysisStatus.ERROR:
        return f"Error: {state.error_message}"

    lines = []
    for index, item in enumerate(state.items, start=1):
        calories = f" | {item.calories}" if item.calories else ""
        lines.append(
            f"{index:>3}. [{item.health_score:>2}] {item.health_category.label:<12} "
            f"{item.name}{calories}"
        )
        lines.append(f"       {item.health_reason}")
    return "\n".join(lines)


async def show_history(settings: Settings) -> int:
    mongo = MongoDB(settings.mongo_uri, settings.db_name)
    mongo.connect()
    try:
        repo = MenuScanRepository(mongo.get_database()[settings.scans_collection])
        scans = await repo.list_recent()
    finally:
        mongo.close()

    if not scans:
        print("No saved scans.")
    for scan in scans:
        print(f"{scan.id}  {scan.formatted_date}  {scan.restaurant_name} ({len(scan.items)} items)")
    return 0


async def analyze(settings: Settings, image_path: Path, restaurant_name: str | None) -> int:
    image_data = image_path.read_bytes()

    async with build_extraction_client(settings) as client:
        coordinator = build_coordinator(client)
        state = await coordinator.analyze(image_data)

    print(format_state(state))
    if state.status is not AnalysisStatus.SUCCESS:
        return 1

    if restaurant_name is not None:
        try:
            record = MenuScanRecord.create(
                restaurant_name=restaurant_name,
                image=compress_for_history(image_data),
                items=state.items,
            )
        except ValueError as e:
            print(f"Not saved: {e}")
            return 2
        mongo = MongoDB(settings.mongo_uri, settings.db_name)
        mongo.connect()
        try:
            repo = MenuScanRepository(mongo.get_database()[settings.scans_collection])
            await repo.ensure_indexes()
            await repo.save(record)
        finally:
            mongo.close()
        print(f"Saved scan {record.id} for '{record.restaurant_name}'")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    if args.history:
        return asyncio.run(show_history(settings))

    image_path = Path(args.image)
    if not image_path.is_file():
        logger.error(f"Image not found: {image_path}")
        return 2
    return asyncio.run(analyze(settings, image_path, args.save))


if __name__ == "__main__":
    sys.exit(main())
