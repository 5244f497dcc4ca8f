"""Rich-based output formatting utilities for streamscale CLI commands."""

import json
import os
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from streamscale.core.models import ShardRef


class MessagePrefixes:
    """Constants for consistent message prefixes in fallback mode."""

    INFO = "[INFO]"
    SUCCESS = "[SUCCESS]"
    WARN = "[WARN]"
    ERROR = "[ERROR]"
    PROGRESS = "[PROGRESS]"


class RichOutputFormatter:
    """Terminal UI formatter using the Rich library, with a plain-text fallback."""

    def __init__(self, verbose: bool = False):
        """Initialize Rich output formatter.

        Args:
            verbose: Whether to enable verbose output
        """
        self.verbose = verbose
        self._terminal_compatible = self._check_terminal_compatibility()
        self.console = Console() if self._terminal_compatible else None

    def _check_terminal_compatibility(self) -> bool:
        """Check if terminal supports Rich formatting."""
        if os.environ.get("STREAMSCALE_NO_RICH"):
            return False
        if not sys.stdout.isatty():
            return False
        return os.environ.get("TERM", "") not in ("dumb", "unknown")

    def _safe_print(self, message: str, fallback_text: str, fallback_prefix: str = "") -> None:
        """Print with Rich, or plain text when the terminal is not compatible."""
        if self.console is not None:
            self.console.print(message)
            return
        if fallback_prefix:
            print(f"{fallback_prefix} {fallback_text}")
        else:
            print(fallback_text)

    def info(self, message: str) -> None:
        """Print an info message."""
        self._safe_print(f"[blue][INFO][/blue] {escape(message)}", message, MessagePrefixes.INFO)

    def success(self, message: str) -> None:
        """Print a success message."""
        self._safe_print(
            f"[green][SUCCESS][/green] {escape(message)}", message, MessagePrefixes.SUCCESS
        )

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._safe_print(
            f"[yellow][WARN][/yellow] {escape(message)}", message, MessagePrefixes.WARN
        )

    def error(self, message: str) -> None:
        """Print an error message."""
        self._safe_print(f"[red][ERROR][/red] {escape(message)}", message, MessagePrefixes.ERROR)

    def progress_indicator(self, message: str) -> None:
        """Print a progress indicator message."""
        self._safe_print(
            f"[cyan][PROGRESS][/cyan] {escape(message)}", message, MessagePrefixes.PROGRESS
        )

    def section_header(self, title: str) -> None:
        """Print a section header with consistent formatting."""
        if self.console is not None:
            self.console.print(Panel(title, style="bold cyan", padding=(0, 1)))
            return
        print(f"\n=== {title} ===\n")

    def json_output(self, data: dict[str, Any]) -> None:
        """Print data as formatted JSON."""
        print(json.dumps(data, indent=2, default=str))

    def shard_table(self, shards: list[ShardRef]) -> None:
        """Print shards ordered by hash range with their share of the key space."""
        ordered = sorted(shards, key=lambda shard: shard.hash_range)
        if self.console is None:
            for shard in ordered:
                print(
                    f"{shard.shard_id}\t{shard.hash_range.start}\t{shard.hash_range.end}"
                    f"\t{shard.hash_range.pct_of_keyspace:.2%}"
                )
            return

        table = Table(title=f"{len(ordered)} open shard(s)")
        table.add_column("Shard", style="cyan")
        table.add_column("Start hash key", justify="right")
        table.add_column("End hash key", justify="right")
        table.add_column("Keyspace", justify="right")
        table.add_column("Parents", style="dim")
        for shard in ordered:
            parents = ", ".join(
                p for p in (shard.parent_shard_id, shard.adjacent_parent_shard_id) if p
            )
            table.add_row(
                shard.shard_id,
                str(shard.hash_range.start),
                str(shard.hash_range.end),
                f"{shard.hash_range.pct_of_keyspace:.2%}",
                parents or "-",
            )
        self.console.print(table)
