"""Entry point for running streamscale as a module: python -m streamscale.

This enables:
    python -m streamscale merge my-stream shardId-000000000000 shardId-000000000001
    python -m streamscale shards my-stream
"""

from streamscale.api.cli.main import main

if __name__ == "__main__":
    main()
