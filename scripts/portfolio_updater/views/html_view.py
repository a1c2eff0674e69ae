#------------------------------------------------------------
#                        html_view.py
#             Renders project cards and applies the
#              portfolio view to a page surface.

from html import escape
from typing import List
from ..config import (
    CARD_ANIMATION_DELAY_STEP_SECONDS,
    EMPTY_PROJECTS_MESSAGE,
    FETCH_ERROR_MESSAGE,
    LOADING_SLOT,
    NO_DESCRIPTION_MESSAGE,
    PROJECTS_SLOT,
    REPO_COUNT_SLOT,
    STARS_COUNT_SLOT,
)
from ..models import PortfolioView, RepositorySummary
from ..services.portfolio_service import format_updated_date, language_glyph, visible_topics

CARD_TEMPLATE = (
    '<div class="project-card" style="opacity: 0; animation: slideIn 0.5s ease-out forwards; '
    'animation-delay: {delay}s;">\n'
    '  <div class="project-title">{glyph} {name}</div>\n'
    '  <div class="project-desc">{description}</div>\n'
    '{badges}'
    '{topics}'
    '  <div class="project-updated" style="margin-top: 10px; font-size: 11px; color: var(--text-secondary);">'
    'Updated: {updated}</div>\n'
    '  <div class="project-links" style="margin-top: 15px;">{links}</div>\n'
    '</div>'
)
LANGUAGE_BADGE_TEMPLATE = '  <span class="project-lang">{language}</span>\n'
STAR_BADGE_TEMPLATE = '  <span class="project-lang project-stars" style="margin-left: 5px;">⭐ {stars}</span>\n'
FORK_BADGE_TEMPLATE = '  <span class="project-lang project-forks" style="margin-left: 5px;">🔱 {forks}</span>\n'
TOPICS_BLOCK_TEMPLATE = '  <div class="project-topics" style="margin-top: 10px;">{tags}</div>\n'
TOPIC_TAG_TEMPLATE = '<span class="project-lang project-topic" style="margin-right: 5px;">#{topic}</span>'
REPO_LINK_TEMPLATE = '<a href="{url}" target="_blank">→ View Repository</a>'
HOMEPAGE_LINK_TEMPLATE = ' | <a href="{url}" target="_blank">→ Live Demo</a>'
EMPTY_NOTICE_TEMPLATE = '<p class="projects-empty" style="color: var(--text-secondary);">{message}</p>'
ERROR_NOTICE_TEMPLATE = '<p class="projects-error" style="color: var(--terminal-red);">{message}</p>'

def _render_badges(repo: RepositorySummary) -> str:
    badges = []
    if repo.language:
        badges.append(LANGUAGE_BADGE_TEMPLATE.format(language=escape(repo.language)))
    if repo.star_count > 0:
        badges.append(STAR_BADGE_TEMPLATE.format(stars=repo.star_count))
    if repo.fork_count > 0:
        badges.append(FORK_BADGE_TEMPLATE.format(forks=repo.fork_count))
    return "".join(badges)

def _render_topics(repo: RepositorySummary) -> str:
    topics = visible_topics(repo.topics)
    if not topics:
        return ""
    tags = "".join(TOPIC_TAG_TEMPLATE.format(topic=escape(topic)) for topic in topics)
    return TOPICS_BLOCK_TEMPLATE.format(tags=tags)

def _render_links(repo: RepositorySummary) -> str:
    links = REPO_LINK_TEMPLATE.format(url=escape(repo.url))
    if repo.homepage:
        links += HOMEPAGE_LINK_TEMPLATE.format(url=escape(repo.homepage))
    return links

# This function does render one repository card.
# The index only drives the staggered entrance delay.
def render_card(repo: RepositorySummary, index: int = 0) -> str:
    return CARD_TEMPLATE.format(
        delay=round(index * CARD_ANIMATION_DELAY_STEP_SECONDS, 3),
        glyph=language_glyph(repo.language),
        name=escape(repo.name),
        description=escape(repo.description or NO_DESCRIPTION_MESSAGE),
        badges=_render_badges(repo),
        topics=_render_topics(repo),
        updated=format_updated_date(repo.updated_at),
        links=_render_links(repo),
    )

def render_cards(repos: List[RepositorySummary]) -> List[str]:
    return [render_card(repo, index) for index, repo in enumerate(repos)]

def render_empty_notice() -> str:
    return EMPTY_NOTICE_TEMPLATE.format(message=escape(EMPTY_PROJECTS_MESSAGE))

def render_error_notice() -> str:
    return ERROR_NOTICE_TEMPLATE.format(message=escape(FETCH_ERROR_MESSAGE))

# This function does apply a successful portfolio view to the surface.
# Counters go into their slots, the loading indicator is cleared, then cards are appended in order.
def render_portfolio(surface, view: PortfolioView) -> None:
    surface.set_text(REPO_COUNT_SLOT, view.counters.repo_count)
    surface.set_text(STARS_COUNT_SLOT, view.counters.total_stars)
    surface.set_html(LOADING_SLOT, "")

    if not view.repos:
        surface.set_html(PROJECTS_SLOT, render_empty_notice())
        return

    for card in render_cards(list(view.repos)):
        surface.append(PROJECTS_SLOT, card)

# This function does show the fetch error in place of the loading indicator.
# Cards from an earlier run are cleared without appending; counters are left untouched.
def render_failure(surface) -> None:
    surface.set_html(LOADING_SLOT, render_error_notice())
    surface.set_html(PROJECTS_SLOT, "")
