"""Shards command module - lists open shards of a stream."""

import argparse
import sys

from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from streamscale.core.config.config import Config
from streamscale.providers.kinesis import KinesisStreamProvider

from ..utils.rich_output import RichOutputFormatter


async def shards_command(
    args: argparse.Namespace,
    config: Config,
    provider: KinesisStreamProvider | None = None,
) -> None:
    """List the open shards of a stream ordered by hash key."""
    formatter = RichOutputFormatter(verbose=args.verbose)
    provider = provider or KinesisStreamProvider(config.kinesis, config.scaling)

    try:
        open_shards = await provider.list_open_shards(args.stream)
    except (ClientError, BotoCoreError) as e:
        formatter.error(f"Failed to list shards of {args.stream}: {e}")
        logger.exception("Full error details:")
        sys.exit(1)

    if not open_shards:
        formatter.warning(f"Stream {args.stream} has no open shards")
        return
    formatter.shard_table(list(open_shards.values()))
