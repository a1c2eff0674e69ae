# tests/test_controller.py

import pytest
import requests
from unittest.mock import MagicMock, patch

from portfolio_updater import controller
from portfolio_updater.models import FetchFailure, FetchSuccess, UpdateConfig

SHELL = """<html><body>
<span id="repoCount"><!-- REPO_COUNT:start -->
0
<!-- REPO_COUNT:end --></span>
<span id="starsCount"><!-- STARS_COUNT:start -->
0
<!-- STARS_COUNT:end --></span>
<div id="loadingMessage"><!-- LOADING:start -->
<p>Loading repositories...</p>
<!-- LOADING:end --></div>
<div id="projectsGrid"><!-- PROJECTS:start -->
<!-- PROJECTS:end --></div>
</body></html>
"""

PROFILE_URL = "https://api.github.com/users/leon-rg"
REPOS_URL = "https://api.github.com/users/leon-rg/repos?sort=updated&per_page=100"

REPOS_PAYLOAD = [
    {
        "name": "x",
        "html_url": "https://github.com/leon-rg/x",
        "updated_at": "2024-03-01T00:00:00Z",
        "stargazers_count": 10,
        "fork": True,
    },
    {
        "name": "y",
        "html_url": "https://github.com/leon-rg/y",
        "updated_at": "2024-02-10T00:00:00Z",
        "stargazers_count": 3,
        "language": "Rust",
        "fork": False,
    },
]

# ---- Fixtures and Test Helpers ----

def make_response(payload=None, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Server Error")
    response.json.return_value = payload
    return response

def patch_github(profile_response, repos_response):
    responses = {PROFILE_URL: profile_response, REPOS_URL: repos_response}
    return patch(
        "portfolio_updater.services.github_service.requests.get",
        side_effect=lambda url, headers=None, timeout=None: responses[url],
    )

@pytest.fixture
def page(tmp_path):
    path = tmp_path / "index.html"
    path.write_text(SHELL, encoding="utf-8")
    return path

@pytest.fixture
def config(page):
    return UpdateConfig(
        github_username="leon-rg",
        page_path=str(page),
        skip_boot=True,
        boot_delay=60,
        skip_delay=0.01,
    )

# ---- Workflow ----

def test_run_update_renders_cards_and_counters(config, page):
    """Scenario: Fork excluded, counters written, Rust card rendered"""
    with patch_github(make_response({"public_repos": 2}), make_response(REPOS_PAYLOAD)):
        outcome = controller.run_update(config)

    assert isinstance(outcome, FetchSuccess)
    html = page.read_text(encoding="utf-8")
    assert "<!-- REPO_COUNT:start -->\n2\n<!-- REPO_COUNT:end -->" in html
    assert "<!-- STARS_COUNT:start -->\n3\n<!-- STARS_COUNT:end -->" in html
    assert "Loading repositories" not in html
    assert html.count('class="project-card"') == 1
    assert "🦀 y" in html
    assert "github.com/leon-rg/x" not in html

def test_run_update_failure_shows_error_notice(config, page):
    """Scenario: HTTP 500 on the repository list renders only the error notice"""
    with patch_github(make_response({"public_repos": 2}), make_response(status_code=500)):
        outcome = controller.run_update(config)

    assert isinstance(outcome, FetchFailure)
    html = page.read_text(encoding="utf-8")
    assert "Error loading repositories" in html
    assert "project-card" not in html
    assert "<!-- REPO_COUNT:start -->\n0\n<!-- REPO_COUNT:end -->" in html

def test_run_update_failure_after_success_clears_old_cards(config, page):
    """Scenario: A failed run after a successful one leaves only the error notice"""
    with patch_github(make_response({"public_repos": 2}), make_response(REPOS_PAYLOAD)):
        controller.run_update(config)
    assert 'class="project-card"' in page.read_text(encoding="utf-8")

    with patch_github(make_response({"public_repos": 2}), make_response(status_code=500)):
        outcome = controller.run_update(config)

    assert isinstance(outcome, FetchFailure)
    html = page.read_text(encoding="utf-8")
    assert "Error loading repositories" in html
    assert 'class="project-card"' not in html
    assert "<!-- PROJECTS:start -->\n<!-- PROJECTS:end -->" in html

def test_run_update_only_forks_shows_empty_state(config, page):
    """Scenario: Every repository is a fork"""
    with patch_github(make_response({"public_repos": 1}), make_response(REPOS_PAYLOAD[:1])):
        controller.run_update(config)

    html = page.read_text(encoding="utf-8")
    assert html.count("No repositories found.") == 1
    assert "project-card" not in html

def test_run_update_rerun_does_not_duplicate_cards(config, page):
    """Scenario: Running twice leaves one set of cards"""
    for _ in range(2):
        with patch_github(make_response({"public_repos": 2}), make_response(REPOS_PAYLOAD)):
            controller.run_update(config)

    assert page.read_text(encoding="utf-8").count('class="project-card"') == 1

def test_run_pipeline_fetches_once_per_run(config, page):
    """Scenario: The pipeline is invoked once even with skip enabled"""
    with patch.object(controller, "run_pipeline", wraps=controller.run_pipeline) as pipeline, \
        patch_github(make_response({"public_repos": 2}), make_response(REPOS_PAYLOAD)):
        controller.run_update(config)

    assert pipeline.call_count == 1

def test_run_update_missing_page_raises(config, tmp_path):
    """Scenario: A missing page shell is reported to the caller"""
    config.page_path = str(tmp_path / "missing.html")
    with pytest.raises(FileNotFoundError):
        controller.run_update(config)

# ---- Configuration ----

def test_load_config_reads_environment(monkeypatch, tmp_path):
    """Scenario: Environment variables override defaults"""
    monkeypatch.setenv("GITHUB_USERNAME", "someone")
    monkeypatch.setenv("PAGE_PATH", str(tmp_path / "page.html"))
    monkeypatch.setenv("SKIP_BOOT", "true")

    config = controller.load_config()

    assert config.github_username == "someone"
    assert config.page_path == str(tmp_path / "page.html")
    assert config.skip_boot is True

def test_load_config_defaults(monkeypatch):
    """Scenario: No environment gives the fixed account and root page"""
    for name in ("GITHUB_USERNAME", "PAGE_PATH", "SKIP_BOOT"):
        monkeypatch.delenv(name, raising=False)

    config = controller.load_config()

    assert config.github_username == "leon-rg"
    assert config.page_path.endswith("index.html")
    assert config.skip_boot is False

def test_print_banner(capsys):
    """Scenario: Start-up banner names the account"""
    controller.print_banner("leon-rg")
    out = capsys.readouterr().out
    assert "🐧 leon-rg Terminal v2.0" in out
    assert "https://github.com/leon-rg" in out
