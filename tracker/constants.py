"""
Application constants for Repo Streak Tracker.
"""

# =============================================================================
# GitHub API
# =============================================================================

GITHUB_API_BASE = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_ACCEPT = "application/vnd.github+json"
USER_AGENT = "RepoStreakTracker/1.0"

# Organization listed next to the identity's own repositories
DEFAULT_ORG = "college-of-mary-immaculate"

# GitHub answers 409 for the commit listing of a repository with no Git data
EMPTY_REPOSITORY_STATUS = 409

RATE_LIMIT_WARN_THRESHOLD = 100

# =============================================================================
# Pagination
# =============================================================================

COMMITS_PAGE_SIZE = 100
LISTING_PAGE_SIZE = 100
MAX_COMMIT_PAGES = 500
MAX_LISTING_PAGES = 10

# =============================================================================
# Concurrency
# =============================================================================

DEFAULT_MAX_CONCURRENT_REQUESTS = 8
DEFAULT_ENRICHMENT_CONCURRENCY = 8

# =============================================================================
# Storage
# =============================================================================

DEFAULT_STORAGE_DIR = "storage"
CATALOG_FILE = "repos.json"
COMMITS_DIR = "commits"
REPO_KEY_SEPARATOR = "__"

# =============================================================================
# Profile
# =============================================================================

AVATAR_URL_TEMPLATE = "https://github.com/{login}.png"
DEFAULT_AVATAR_URL = "https://github.githubassets.com/images/modules/logos_page/GitHub-Mark.png"
