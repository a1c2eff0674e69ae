#------------------------------------------------------------
#                      github_service.py
#            Fetches the profile and repository list
#          in parallel and shapes them into models.

import sys
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Dict, List, Optional
import requests
from dateutil.parser import isoparse
from ..config import (
    GITHUB_API_ACCEPT_HEADER,
    GITHUB_API_BASE_URL,
    GITHUB_REPOS_PER_PAGE,
    GITHUB_REPOS_SORT,
    GITHUB_REQUEST_TIMEOUT_SECONDS,
)
from ..models import FetchFailure, FetchOutcome, FetchSuccess, Profile, RepositorySummary

USER_ENDPOINT_TEMPLATE = "/users/{username}"
USER_REPOS_ENDPOINT_TEMPLATE = "/users/{username}/repos"
REPO_QUERY_TEMPLATE = "{base}?sort={sort}&per_page={per_page}"

FETCH_MESSAGE = "Fetching profile and repositories for {username} …"
FETCH_RESULT_MESSAGE = "Fetched {count} repositories ({public_repos} public repos on profile)"
FETCH_ERROR_TEMPLATE = "ERROR: error fetching GitHub data: {error}"

# Raised when an API payload does not have the expected shape.
class MalformedPayloadError(ValueError):
    pass

def _optional_text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None

def _count(value) -> int:
    if value is None:
        return 0
    count = int(value)
    return count if count > 0 else 0

# This function does parse an ISO 8601 timestamp from the API.
# Values without an offset are taken as UTC so all timestamps compare.
def _parse_timestamp(value) -> datetime:
    parsed = isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

# This function does map a profile payload onto the Profile model.
# A missing public_repos count stays None.
def parse_profile(data) -> Profile:
    if not isinstance(data, dict):
        raise MalformedPayloadError(f"expected profile object, got {type(data).__name__}")
    public_repos = data.get("public_repos")
    return Profile(public_repos=int(public_repos) if public_repos is not None else None)

# This function does map one repository payload onto RepositorySummary.
# Optional fields fall back to defaults; name, html_url and updated_at are required.
def parse_repository(data) -> RepositorySummary:
    if not isinstance(data, dict):
        raise MalformedPayloadError(f"expected repository object, got {type(data).__name__}")

    topics = data.get("topics") or []
    if not isinstance(topics, list):
        raise MalformedPayloadError(f"topics of {data.get('name')!r} is not a list")

    return RepositorySummary(
        name=str(data["name"]),
        url=str(data["html_url"]),
        updated_at=_parse_timestamp(data["updated_at"]),
        description=_optional_text(data.get("description")),
        language=_optional_text(data.get("language")),
        star_count=_count(data.get("stargazers_count")),
        fork_count=_count(data.get("forks_count")),
        homepage=_optional_text(data.get("homepage")),
        topics=tuple(str(topic) for topic in topics),
        is_fork=bool(data.get("fork", False)),
    )

class GitHubService:

    def __init__(self, username: str):
        self.username = username

    def headers(self) -> Dict[str, str]:
        return {"Accept": GITHUB_API_ACCEPT_HEADER}

    def profile_url(self) -> str:
        return f"{GITHUB_API_BASE_URL}{USER_ENDPOINT_TEMPLATE.format(username=self.username)}"

    def repos_url(self) -> str:
        base_url = f"{GITHUB_API_BASE_URL}{USER_REPOS_ENDPOINT_TEMPLATE.format(username=self.username)}"
        return REPO_QUERY_TEMPLATE.format(base=base_url, sort=GITHUB_REPOS_SORT, per_page=GITHUB_REPOS_PER_PAGE)

    def _get_json(self, url: str):
        response = requests.get(url, headers=self.headers(), timeout=GITHUB_REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        return response.json()

    # This function does fetch the public profile of the account.
    # It raises on any HTTP or payload error.
    def fetch_profile(self) -> Profile:
        return parse_profile(self._get_json(self.profile_url()))

    # This function does fetch up to one page of the most recently updated repositories.
    # It raises on any HTTP or payload error.
    def fetch_repos(self) -> List[RepositorySummary]:
        data = self._get_json(self.repos_url())
        if not isinstance(data, list):
            raise MalformedPayloadError(f"expected repository list, got {type(data).__name__}")
        return [parse_repository(item) for item in data]

    # This function does run both requests concurrently and waits for both.
    # Any failure on either side collapses into a FetchFailure.
    def fetch_portfolio_data(self) -> FetchOutcome:
        print(FETCH_MESSAGE.format(username=self.username))
        try:
            with ThreadPoolExecutor(max_workers=2) as executor:
                profile_future = executor.submit(self.fetch_profile)
                repos_future = executor.submit(self.fetch_repos)
                profile = profile_future.result()
                repos = repos_future.result()
        except Exception as error:
            print(FETCH_ERROR_TEMPLATE.format(error=error), file=sys.stderr)
            return FetchFailure()

        print(FETCH_RESULT_MESSAGE.format(count=len(repos), public_repos=profile.public_repos))
        return FetchSuccess(profile=profile, repos=tuple(repos))
