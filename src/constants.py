"""Application-wide constants.

This module centralizes all magic numbers and configuration constants
to ensure a single source of truth and easier maintenance.

Constants are organized by category. Limits mirror what the Eddie Surf
API accepts; they are checked locally before any request is sent.
"""

# =============================================================================
# Eddie Surf API
# =============================================================================

# Default API base URL (overridable per credential)
DEFAULT_EDDIE_BASE_URL = "https://api.eddie.surf"

# Header carrying the API key on every authenticated request
API_KEY_HEADER = "X-API-Key"

# Endpoint paths
HEALTH_PATH = "/health"
CRAWL_PATH = "/crawl"
CRAWL_BATCH_PATH = "/crawl-batch"
SMART_SEARCH_PATH = "/smart-search"

# =============================================================================
# HTTP Timeout Configuration
# =============================================================================

# Local timeout for calls to the Eddie Surf API (seconds)
EDDIE_API_TIMEOUT_SECONDS = 30.0

# =============================================================================
# URL Limits
# =============================================================================

# Crawl accepts at most this many URLs; larger lists go to crawl-batch
MAX_CRAWL_URLS = 199

# Crawl-batch requires at least this many URLs
MIN_CRAWL_BATCH_URLS = 200

# Accepted URL schemes
ALLOWED_URL_PREFIXES = ("http://", "https://")

# =============================================================================
# Advanced Option Limits
# =============================================================================

MIN_MAX_DEPTH = 1
MAX_MAX_DEPTH = 10

MIN_MAX_PAGES = 1

MIN_MAX_RESULTS = 1
MAX_MAX_RESULTS = 5000

# Remote per-page timeout, sent to the API (seconds)
MIN_TIMEOUT_PER_PAGE_SECONDS = 1
MAX_TIMEOUT_PER_PAGE_SECONDS = 180

# =============================================================================
# Logging
# =============================================================================

# Max characters of a response body included in error logs
LOGGED_RESPONSE_BODY_CHARS = 500
