"""Module-level constants for the vault query server."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "vaults.yaml"
CONFIG_ENV_VAR = "VAULT_QUERY_CONFIG"
DEFAULT_API_KEY_ENV = "OBSIDIAN_API_KEY"

# Search limits
DEFAULT_MAX_RESULTS = 10
DEFAULT_CONTEXT_CHARS = 100
MAX_MATCHES_PER_DOCUMENT = 3
MAX_MATCHING_DOCUMENTS = 50
NOTE_EXTENSION = "md"

# Response shaping
DEFAULT_MAX_CHARS = 5_000
DEFAULT_MAX_CHARS_PER_NOTE = 1_000
DEFAULT_PER_PAGE = 20
STATS_TAG_SAMPLE_NOTES = 50
STATS_MAX_TAGS = 50
TRUNCATION_SUFFIX = "... [truncated]"
WORD_BOUNDARY_RATIO = 0.8

# REST API
REST_TIMEOUT_SECONDS = 30.0
NOTE_JSON_MEDIA_TYPE = "application/vnd.olrapi.note+json"

# Logging
LOG_LEVEL = "INFO"
LOG_LEVEL_ENV_VAR = "VAULT_QUERY_LOG_LEVEL"
