"""streamscale CLI entry point."""

import asyncio
import sys
from typing import Any

from loguru import logger
from pydantic import ValidationError

from streamscale.core.config.config import Config
from streamscale.core.config.logging_config import LoggingConfig

from .parsers import create_main_parser, setup_subparsers


def setup_logging(verbose: bool = False, config: Any = None) -> None:
    """Configure loguru sinks for the CLI process.

    Args:
        verbose: Show DEBUG output on the console
        config: LoggingConfig, or an object with a ``logging`` attribute
    """
    logging_config = config
    if logging_config is not None and not isinstance(logging_config, LoggingConfig):
        logging_config = getattr(config, "logging", None)

    logger.remove()

    file_enabled = logging_config is not None and logging_config.file.enabled

    if verbose:
        console_level = "DEBUG"
    elif file_enabled:
        console_level = "WARNING"
    elif logging_config is not None:
        console_level = logging_config.console_level
    else:
        console_level = "INFO"

    logger.add(
        sys.stderr,
        level=console_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )

    if file_enabled:
        file_config = logging_config.file
        logger.add(
            file_config.path,
            level=file_config.level,
            rotation=file_config.rotation,
            retention=file_config.retention,
            format=file_config.format,
        )


async def async_main(args: Any, config: Config) -> None:
    """Dispatch to the selected command."""
    if args.command == "merge":
        from .commands.merge import merge_command

        await merge_command(args, config)
    elif args.command == "shards":
        from .commands.shards import shards_command

        await shards_command(args, config)


def main() -> None:
    """Main CLI entry point."""
    parser = create_main_parser()
    setup_subparsers(parser)
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    try:
        config = Config.load(args)
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(verbose=getattr(args, "verbose", False), config=config)

    try:
        asyncio.run(async_main(args, config))
    except KeyboardInterrupt:
        logger.warning("Interrupted; a submitted merge may still complete on the service")
        sys.exit(130)


if __name__ == "__main__":
    main()
