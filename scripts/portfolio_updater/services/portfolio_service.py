#------------------------------------------------------------
#                    portfolio_service.py
#          Derives counters, the ordered project list
#               and per-card display values.

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterable, List, Optional, Sequence, Tuple
from ..config import MAX_VISIBLE_TOPICS
from ..models import Counters, FetchSuccess, PortfolioView, Profile, RepositorySummary

DEFAULT_LANGUAGE_KEY = "default"

LANGUAGE_EMOJIS = MappingProxyType({
    "JavaScript": "📜",
    "TypeScript": "🔷",
    "Python": "🐍",
    "Java": "☕",
    "C++": "⚙️",
    "C": "🔧",
    "Go": "🐹",
    "Rust": "🦀",
    "Ruby": "💎",
    "PHP": "🐘",
    "HTML": "🌐",
    "CSS": "🎨",
    "Shell": "🐚",
    "Dockerfile": "🐳",
    DEFAULT_LANGUAGE_KEY: "📦",
})

# Short month names as rendered by the es-ES locale.
SPANISH_SHORT_MONTHS = (
    "ene", "feb", "mar", "abr", "may", "jun",
    "jul", "ago", "sept", "oct", "nov", "dic",
)
SHORT_DATE_TEMPLATE = "{day} {month} {year}"

def own_repos(repos: Iterable[RepositorySummary]) -> List[RepositorySummary]:
    return [repo for repo in repos if not repo.is_fork]

# This function does compute the two summary counters.
# Stars are summed over non-fork repositories only, matching the displayed cards.
def compute_counters(profile: Profile, repos: Sequence[RepositorySummary]) -> Counters:
    repo_count = profile.public_repos if profile.public_repos is not None else len(repos)
    total_stars = sum(repo.star_count for repo in own_repos(repos))
    return Counters(repo_count=repo_count, total_stars=total_stars)

# This function does drop forks and order the rest for display.
# Most stars first, then most recently updated; equal keys keep API order.
def select_display_repos(repos: Sequence[RepositorySummary]) -> Tuple[RepositorySummary, ...]:
    ranked = sorted(
        own_repos(repos),
        key=lambda repo: (repo.star_count, repo.updated_at),
        reverse=True,
    )
    return tuple(ranked)

def language_glyph(language: Optional[str]) -> str:
    return LANGUAGE_EMOJIS.get(language, LANGUAGE_EMOJIS[DEFAULT_LANGUAGE_KEY])

def visible_topics(topics: Sequence[str]) -> Tuple[str, ...]:
    return tuple(topics[:MAX_VISIBLE_TOPICS])

# This function does format a timestamp as an es-ES short date, e.g. "15 ene 2024".
# Naive timestamps are taken as UTC; aware ones are converted to UTC first.
def format_updated_date(updated_at: datetime) -> str:
    if updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=timezone.utc)
    moment = updated_at.astimezone(timezone.utc)
    return SHORT_DATE_TEMPLATE.format(
        day=moment.day,
        month=SPANISH_SHORT_MONTHS[moment.month - 1],
        year=moment.year,
    )

def build_portfolio_view(outcome: FetchSuccess) -> PortfolioView:
    return PortfolioView(
        counters=compute_counters(outcome.profile, outcome.repos),
        repos=select_display_repos(outcome.repos),
    )
