#!/usr/bin/env python3
"""Patch database totals into the overview page.

Only the anchors below are touched; every other byte of the document is
preserved. Anchors that are missing are skipped and reported, never inserted.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from utils.stats_models import StatRecord, STAT_FIELDS

logger = logging.getLogger(__name__)

STAT_COLORS: Dict[str, str] = {
    "regions": "blue",
    "subregions": "green",
    "countries": "purple",
    "states": "orange",
    "cities": "red",
}

LAST_UPDATED_FIELD = "last_updated"
DESCRIPTION_FIELD = "description"

_LAST_UPDATED_RE = re.compile(r"Last Updated: [^<\r\n]+")
_DESCRIPTION_RE = re.compile(
    r'description: "Complete geographical database with \d+\+ countries, \d+k?\+ states, '
    r'and \d+k?\+ cities in multiple formats"'
)


def stat_anchor(color: str) -> re.Pattern:
    return re.compile(
        r'(<div className="text-2xl font-bold text-' + re.escape(color) + r'-600">)\d+(?:,\d+)*(</div>)'
    )


STAT_ANCHORS = {name: stat_anchor(color) for name, color in STAT_COLORS.items()}


@dataclass
class RewriteResult:
    content: str
    updated: bool = False
    updated_fields: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    date_updated: bool = False
    description_updated: bool = False
    written: bool = False


def format_number(value: int) -> str:
    return f"{value:,}"


def ordinal_suffix(day: int) -> str:
    if day % 10 > 3 or day // 10 == 1:
        return "th"
    return ("th", "st", "nd", "rd")[day % 10]


def format_long_date(value: date) -> str:
    """Day with ordinal suffix, full month, year: ``21st September 2025``."""
    return f"{value.day}{ordinal_suffix(value.day)} {value:%B} {value.year}"


def summarize_description(stats: StatRecord) -> str:
    countries = stats.countries // 50 * 50
    states_k = (stats.states // 500 * 500) // 1000
    cities_k = (stats.cities // 1000 * 1000) // 1000
    return (
        f'description: "Complete geographical database with {countries}+ countries, '
        f'{states_k}k+ states, and {cities_k}k+ cities in multiple formats"'
    )


def _replace_once(pattern: re.Pattern, content: str, replacement: str):
    return pattern.subn(lambda _m: replacement, content, count=1)


def rewrite_overview(content: str, stats: StatRecord, today: Optional[date] = None) -> RewriteResult:
    """Apply the stats to the overview text.

    Args:
        content: Current overview document
        stats: Parsed totals; unset fields are left alone
        today: Date written into the "Last Updated" line (defaults to today)

    Returns:
        RewriteResult; ``content`` is the input unchanged when ``stats`` is empty
    """
    result = RewriteResult(content=content)
    if stats.is_empty():
        return result

    values = stats.as_dict()
    for name in STAT_FIELDS:
        value = values[name]
        if value is None:
            continue
        pattern = STAT_ANCHORS[name]
        new_content, n = pattern.subn(
            lambda m, v=value: f"{m.group(1)}{format_number(v)}{m.group(2)}", result.content, count=1
        )
        result.updated = True
        if n:
            result.content = new_content
            result.updated_fields.append(name)
        else:
            logger.info(f"Anchor for {name} not found, skipping")
            result.skipped.append(name)

    today = today or date.today()
    result.content, n = _replace_once(_LAST_UPDATED_RE, result.content, f"Last Updated: {format_long_date(today)}")
    if n:
        result.date_updated = True
    else:
        logger.warning("'Last Updated' line not found; date left unchanged")
        result.skipped.append(LAST_UPDATED_FIELD)

    if stats.countries is not None and stats.states is not None and stats.cities is not None:
        result.content, n = _replace_once(_DESCRIPTION_RE, result.content, summarize_description(stats))
        if n:
            result.description_updated = True
        else:
            logger.info("Frontmatter description not found, skipping")
            result.skipped.append(DESCRIPTION_FIELD)

    return result
