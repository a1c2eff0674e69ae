#------------------------------------------------------------
#                        controller.py
#          Coordinates the fetch, transform and render
#             pipeline and the page shell update.

import os
import sys
import threading
from typing import Optional
from .config import (
    DEFAULT_GITHUB_USERNAME,
    ENV_GITHUB_USERNAME,
    resolve_page_path,
    skip_boot_requested,
)
from .models import FetchFailure, FetchOutcome, UpdateConfig
from .services.github_service import GitHubService
from .services.page_service import MarkerPageSurface, load_page, save_page
from .services.portfolio_service import build_portfolio_view
from .trigger import BootTrigger
from .views.html_view import render_failure, render_portfolio

BANNER_LINES = (
    "🐧 {username} Terminal v2.0",
    "Welcome to the matrix...",
    "Now with auto-updating GitHub repos!",
    "Interested in the code? Check it out on GitHub: https://github.com/{username}",
)
BOOT_MESSAGE = "Booting… press Enter to skip ({delay:.1f}s)"
SKIP_MESSAGE = "Boot skipped."
PIPELINE_INCOMPLETE_MESSAGE = "ERROR: portfolio pipeline did not complete; page left unchanged"
SUMMARY_MESSAGE = "Rendered {cards} project cards ({repo_count} repos, {stars} stars)"
FAILURE_MESSAGE = "Rendered error notice; project cards cleared."

def print_banner(username: str) -> None:
    for line in BANNER_LINES:
        print(line.format(username=username))

def load_config() -> UpdateConfig:
    return UpdateConfig(
        github_username=os.environ.get(ENV_GITHUB_USERNAME, DEFAULT_GITHUB_USERNAME),
        page_path=resolve_page_path(),
        skip_boot=skip_boot_requested(),
    )

# This function does run the data pipeline once against a surface.
# Fetch failures are rendered as the error notice and never raised.
def run_pipeline(surface, github_service: GitHubService) -> FetchOutcome:
    outcome = github_service.fetch_portfolio_data()
    if isinstance(outcome, FetchFailure):
        render_failure(surface)
        print(FAILURE_MESSAGE)
        return outcome

    view = build_portfolio_view(outcome)
    render_portfolio(surface, view)
    print(SUMMARY_MESSAGE.format(
        cards=len(view.repos),
        repo_count=view.counters.repo_count,
        stars=view.counters.total_stars,
    ))
    return outcome

def _listen_for_skip(trigger: BootTrigger) -> None:
    if not sys.stdin or not sys.stdin.isatty():
        return

    def _wait_for_enter() -> None:
        try:
            sys.stdin.readline()
        except (OSError, ValueError):
            return
        if trigger.skip():
            print(SKIP_MESSAGE)

    threading.Thread(target=_wait_for_enter, daemon=True).start()

# This function does execute the full update workflow end-to-end.
# It loads the page shell, waits for the boot trigger, runs the pipeline once and saves the page.
def run_update(config: Optional[UpdateConfig] = None) -> Optional[FetchOutcome]:
    config = config or load_config()
    surface = MarkerPageSurface(load_page(config.page_path))
    github_service = GitHubService(config.github_username)
    outcomes = []

    trigger = BootTrigger(
        lambda: outcomes.append(run_pipeline(surface, github_service)),
        boot_delay=config.boot_delay,
        skip_delay=config.skip_delay,
    )
    print(BOOT_MESSAGE.format(delay=config.boot_delay))
    trigger.start()
    if config.skip_boot:
        trigger.skip()
    else:
        _listen_for_skip(trigger)

    trigger.wait()
    trigger.cancel()
    if not outcomes:
        print(PIPELINE_INCOMPLETE_MESSAGE, file=sys.stderr)
        return None

    save_page(config.page_path, surface.render())
    print(f"{os.path.basename(config.page_path)} updated successfully.")
    return outcomes[0]

def main() -> None:
    config = load_config()
    print_banner(config.github_username)
    run_update(config)
