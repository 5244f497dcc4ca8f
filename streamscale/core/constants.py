"""Core constants for streamscale."""

# Hash keys are unsigned 128-bit integers carried as decimal strings
MAX_HASH_KEY = 2**128 - 1
HASH_KEYSPACE_SIZE = 2**128

# Merge retry defaults
BASE_RETRY_MS = 100
MODIFY_RETRIES = 10
BUSY_RETRY_SECONDS = 1.0

# Stream status polling defaults
STREAM_STATUS_ACTIVE = "ACTIVE"
STATUS_POLL_SECONDS = 1.0
STREAM_STATUS_TIMEOUT_SECONDS = 300.0
