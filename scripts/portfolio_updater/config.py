#------------------------------------------------------------
#                          config.py
#   Centralizes page paths, API constants and environment
#                  configuration helpers.

import os

# Environment variable names for configuration
ENV_GITHUB_USERNAME = "GITHUB_USERNAME"
ENV_PAGE_PATH = "PAGE_PATH"
ENV_SKIP_BOOT = "SKIP_BOOT"

# Default values for configuration parameters
DEFAULT_GITHUB_USERNAME = "leon-rg"
DEFAULT_PAGE_FILENAME = "index.html"
TRUTHY_ENV_VALUES = ("1", "true", "yes", "on")

# Constants for GitHub API interaction
GITHUB_API_ACCEPT_HEADER = "application/vnd.github+json"
GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_REPOS_PER_PAGE = 100
GITHUB_REPOS_SORT = "updated"
GITHUB_REQUEST_TIMEOUT_SECONDS = 30

# Boot splash timings (seconds) before the pipeline fires.
BOOT_DELAY_SECONDS = 4.5
SKIP_DELAY_SECONDS = 0.3

# Slot names of the page shell. Each slot is delimited by
# <!-- NAME:start --> and <!-- NAME:end --> markers.
REPO_COUNT_SLOT = "REPO_COUNT"
STARS_COUNT_SLOT = "STARS_COUNT"
LOADING_SLOT = "LOADING"
PROJECTS_SLOT = "PROJECTS"
SLOT_START_MARKER_TEMPLATE = "<!-- {slot}:start -->"
SLOT_END_MARKER_TEMPLATE = "<!-- {slot}:end -->"

# Card layout values.
MAX_VISIBLE_TOPICS = 3
CARD_ANIMATION_DELAY_STEP_SECONDS = 0.1

# Messages shown on the page.
NO_DESCRIPTION_MESSAGE = "No description available"
EMPTY_PROJECTS_MESSAGE = "No repositories found."
FETCH_ERROR_MESSAGE = "❌ Error loading repositories. Please try again later."

# Directory paths for the project and the page shell.
SCRIPTS_DIR = os.path.dirname(os.path.dirname(__file__))
ROOT_DIR = os.path.dirname(SCRIPTS_DIR)

def slot_markers(slot: str) -> tuple[str, str]:
    return (
        SLOT_START_MARKER_TEMPLATE.format(slot=slot),
        SLOT_END_MARKER_TEMPLATE.format(slot=slot),
    )

# This function does resolve the page shell location.
# Relative PAGE_PATH values are taken from the repository root.
def resolve_page_path() -> str:
    configured = os.environ.get(ENV_PAGE_PATH, "").strip()
    if configured:
        if os.path.isabs(configured):
            return configured
        return os.path.join(ROOT_DIR, configured)
    return os.path.join(ROOT_DIR, DEFAULT_PAGE_FILENAME)

def skip_boot_requested() -> bool:
    return os.environ.get(ENV_SKIP_BOOT, "").strip().lower() in TRUTHY_ENV_VALUES
