#------------------------------------------------------------
#                          models.py
#     Defines dataclasses used by the portfolio pipeline.

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple, Union
from .config import BOOT_DELAY_SECONDS, DEFAULT_GITHUB_USERNAME, SKIP_DELAY_SECONDS

@dataclass(frozen=True)
class Profile:
    public_repos: Optional[int] = None

@dataclass(frozen=True)
class RepositorySummary:
    name: str
    url: str
    updated_at: datetime
    description: Optional[str] = None
    language: Optional[str] = None
    star_count: int = 0
    fork_count: int = 0
    homepage: Optional[str] = None
    topics: Tuple[str, ...] = ()
    is_fork: bool = False

@dataclass(frozen=True)
class FetchSuccess:
    profile: Profile
    repos: Tuple[RepositorySummary, ...] = ()

# Failure keeps no error detail; the cause only goes to the log.
@dataclass(frozen=True)
class FetchFailure:
    pass

FetchOutcome = Union[FetchSuccess, FetchFailure]

@dataclass(frozen=True)
class Counters:
    repo_count: int
    total_stars: int

@dataclass(frozen=True)
class PortfolioView:
    counters: Counters
    repos: Tuple[RepositorySummary, ...] = field(default_factory=tuple)

@dataclass
class UpdateConfig:
    github_username: str = DEFAULT_GITHUB_USERNAME
    page_path: str = ""
    skip_boot: bool = False
    boot_delay: float = BOOT_DELAY_SECONDS
    skip_delay: float = SKIP_DELAY_SECONDS
