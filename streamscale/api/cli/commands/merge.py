"""Merge command module - merges two adjacent shards of a stream."""

import argparse
import sys

from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from streamscale.core.config.config import Config
from streamscale.core.exceptions import (
    AdjacencyViolationError,
    ChildShardNotFoundError,
    ScalingError,
    ShardNotOpenError,
)
from streamscale.providers.kinesis import KinesisStreamProvider
from streamscale.services import AdjacentPair

from ..utils.rich_output import RichOutputFormatter


async def merge_command(
    args: argparse.Namespace,
    config: Config,
    provider: KinesisStreamProvider | None = None,
) -> None:
    """Execute the merge command.

    Args:
        args: Parsed command-line arguments
        config: Pre-validated configuration instance
        provider: Optional pre-built provider (used by tests)
    """
    formatter = RichOutputFormatter(verbose=args.verbose)
    provider = provider or KinesisStreamProvider(config.kinesis, config.scaling)

    formatter.section_header(f"Merge shards in {args.stream}")

    try:
        open_shards = await provider.list_open_shards(args.stream)
        pair = AdjacentPair.from_open_shards(
            args.stream, open_shards, args.shard_a, args.shard_b
        )
    except (ShardNotOpenError, AdjacencyViolationError) as e:
        formatter.error(str(e))
        sys.exit(2)
    except (ClientError, BotoCoreError) as e:
        formatter.error(f"Failed to list shards of {args.stream}: {e}")
        logger.exception("Full error details:")
        sys.exit(1)

    formatter.info(f"Lower:  {pair.lower.shard_id} {pair.lower.hash_range}")
    formatter.info(f"Higher: {pair.higher.shard_id} {pair.higher.hash_range}")
    formatter.progress_indicator("Merging shards...")

    try:
        child = await pair.merge(provider, provider, config.scaling)
    except ChildShardNotFoundError as e:
        formatter.warning(str(e))
        formatter.warning("The merge was submitted; list shards again to find the child")
        sys.exit(1)
    except (ScalingError, ClientError, BotoCoreError) as e:
        formatter.error(f"Merge failed: {e}")
        logger.exception("Full error details:")
        sys.exit(1)

    if getattr(args, "json", False):
        formatter.json_output(
            {
                "stream": child.stream_name,
                "shard_id": child.shard_id,
                "starting_hash_key": str(child.hash_range.start),
                "ending_hash_key": str(child.hash_range.end),
                "parent_shard_id": child.parent_shard_id,
                "adjacent_parent_shard_id": child.adjacent_parent_shard_id,
            }
        )
        return

    formatter.success(f"Merged into {child.shard_id} {child.hash_range}")
    formatter.info(f"Keyspace share: {child.hash_range.pct_of_keyspace:.2%}")
