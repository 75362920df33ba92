"""
Main entry point for PRIZEWHEEL.

Opens the simulator window with segments from a file or the built-in demo
list.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from prizewheel.config.settings import WheelSettings, get_settings
from prizewheel.config.theme import load_theme
from prizewheel.core.segments import load_segments, to_entry

DEMO_SEGMENTS = [
    "What is the capital of Tuscany?",
    "Name three works by Duccio",
    "When is the Palio held?",
    "Which contrada has won the most Palios?",
    "What does the Balzana represent?",
    "Who designed the Torre del Mangia?",
    "This is a very long question that will not fit",
    "Bonus round",
]


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Prize wheel presenter")
    parser.add_argument("--segments", type=Path, help="YAML/JSON file with wheel entries")
    parser.add_argument("--emblem", type=Path, help="Image shown in the wheel hub")
    parser.add_argument("--theme", type=Path, help="YAML theme file")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def apply_args(settings: WheelSettings, args: argparse.Namespace) -> WheelSettings:
    """Command line flags override environment settings."""
    updates = {}
    if args.segments:
        updates["segments_path"] = args.segments
    if args.emblem:
        updates["emblem_path"] = args.emblem
    if args.theme:
        updates["theme_path"] = args.theme
    if args.debug:
        updates["debug"] = True
    return settings.model_copy(update=updates) if updates else settings


async def run_simulator(settings: WheelSettings) -> None:
    """Run the desktop window."""
    from prizewheel.simulator.window import SimulatorWindow

    if settings.segments_path:
        segments = load_segments(settings.segments_path)
    else:
        segments = [to_entry(text) for text in DEMO_SEGMENTS]

    window = SimulatorWindow(
        settings=settings,
        segments=segments,
        theme=load_theme(settings.theme_path),
    )
    await window.run()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    load_dotenv()
    args = parse_args(argv)
    settings = apply_args(get_settings(), args)

    setup_logging(settings.debug)
    logger = logging.getLogger(__name__)
    logger.info("PRIZEWHEEL starting...")

    try:
        asyncio.run(run_simulator(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except (OSError, ValueError) as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("PRIZEWHEEL stopped")


if __name__ == "__main__":
    main()
