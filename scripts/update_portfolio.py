#!/usr/bin/env python3
"""
Update the project cards and summary counters of index.html
by querying the GitHub API for one account's profile and public repositories.

Slots used in index.html:
  <!-- REPO_COUNT:start -->  ... <!-- REPO_COUNT:end -->
  <!-- STARS_COUNT:start --> ... <!-- STARS_COUNT:end -->
  <!-- LOADING:start -->     ... <!-- LOADING:end -->
  <!-- PROJECTS:start -->    ... <!-- PROJECTS:end -->

Environment variables:
  GITHUB_USERNAME: GitHub username (default: leon-rg)
  PAGE_PATH: Page shell to update (default: index.html at the repository root)
  SKIP_BOOT: Set to 1 to skip the boot delay
"""

from portfolio_updater.controller import main

if __name__ == "__main__":
    main()
