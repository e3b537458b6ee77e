"""genforge command-line entry point.

Usage::

    genforge
    genforge component -d ./app
    genforge component --config ./tools/genforge.config.py --verbose
"""

from __future__ import annotations

import asyncio
import sys
import traceback
from pathlib import Path

from genforge.config import Config
from genforge.engine import GeneratorRunner, Session
from genforge.loader import load_config
from genforge.prompts import resolve_generator_id
from genforge.utils import Logger, error_message, iter_causes


async def run(config: Config, logger: Logger) -> int:
    """Load the configuration, pick a generator and run it."""
    registry = await load_config(config, logger)
    generator_id = resolve_generator_id(
        config.selected_generator, registry, config.selection_prompt, logger
    )
    config.selected_generator = generator_id
    session = Session(config, registry, logger=logger)
    return await GeneratorRunner(session).run(generator_id)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``genforge``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="genforge",
        description="genforge -- template driven file generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  genforge\n"
            "  genforge component -d ./app\n"
            "  genforge component -c ./tools/genforge.config.py --debug\n"
        ),
    )
    parser.add_argument(
        "generator",
        nargs="?",
        default="",
        help="ID of the generator to run (a selection menu is shown if omitted)",
    )
    parser.add_argument(
        "--destination", "-d",
        default=None,
        help="Directory all relative output paths resolve against (default: config file directory)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to the config file (default: nearest genforge.config.py)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log progress messages",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log internal details",
    )

    args = parser.parse_args(argv)

    config = Config.from_env()
    config.selected_generator = args.generator
    if args.destination:
        config.destination_base_path = Path(args.destination)
    if args.config:
        config.config_file_path = Path(args.config)
    config.verbose = config.verbose or args.verbose
    config.debug = config.debug or args.debug

    logger = Logger.from_config(config)
    if config.debug:
        logger.debug("Debug logging enabled")

    try:
        asyncio.run(run(config, logger))
    except Exception as exc:
        logger.error(f"Error: {error_message(exc)}")
        for cause in iter_causes(exc):
            logger.error(f"Caused by: {error_message(cause)}")
        logger.debug("Original error stack:", "".join(traceback.format_exception(exc)))
        sys.exit(1)

    logger.success("Done!")


if __name__ == "__main__":
    main()
