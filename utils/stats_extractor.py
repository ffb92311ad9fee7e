#!/usr/bin/env python3
"""Extract database totals from the upstream README.

The README lists totals in its "Insights" section like::

    Total Regions : 6 <br>
    Total Sub Regions : 22 <br>
    Total Countries : 250 <br>
    Total States/Regions/Municipalities : 5,038 <br>
    Total Cities/Towns/Districts : 151,024 <br>

Each pattern is searched independently; a missing label leaves its field
unset instead of failing.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional, Pattern

from utils.stats_models import StatRecord

logger = logging.getLogger(__name__)

_NUMBER = r"(\d+(?:,\d+)*)"

STAT_PATTERNS: Dict[str, Pattern[str]] = {
    "regions": re.compile(r"Total\s+Regions?\s*:\s*" + _NUMBER, re.IGNORECASE),
    "subregions": re.compile(r"Total\s+Sub\s+Regions?\s*:\s*" + _NUMBER, re.IGNORECASE),
    "countries": re.compile(r"Total\s+Countr(?:y|ies)\s*:\s*" + _NUMBER, re.IGNORECASE),
    "states": re.compile(r"Total\s+States?(?:/Regions?/Municipalities?)?\s*:\s*" + _NUMBER, re.IGNORECASE),
    "cities": re.compile(r"Total\s+Cit(?:y|ies)(?:/Towns?/Districts?)?\s*:\s*" + _NUMBER, re.IGNORECASE),
}

_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*#*[ \t]*$", re.MULTILINE)


class NoStatisticsFoundWarning(UserWarning):
    """None of the total patterns matched; the README format may have changed."""


def parse_count(raw: str) -> int:
    return int(raw.replace(",", ""))


def scope_to_section(text: str, heading: str) -> Optional[str]:
    """Return the body under a Markdown heading, up to the next heading of the same or higher level.

    Returns None when no heading with that title exists.
    """
    wanted = heading.strip().lower()
    headings = list(_HEADING_RE.finditer(text))
    for i, match in enumerate(headings):
        if match.group(2).strip().lower() != wanted:
            continue
        level = len(match.group(1))
        end = len(text)
        for following in headings[i + 1:]:
            if len(following.group(1)) <= level:
                end = following.start()
                break
        return text[match.end():end]
    return None


def extract_statistics(text: str, section_heading: Optional[str] = None) -> StatRecord:
    """Parse the five totals out of README text.

    Args:
        text: Full README content
        section_heading: Optional heading title to restrict the search to.
            If the heading is absent the whole text is searched.
    """
    haystack = text or ""
    if section_heading:
        scoped = scope_to_section(haystack, section_heading)
        if scoped is None:
            logger.warning(f"Section {section_heading!r} not found in README, searching whole text")
        else:
            haystack = scoped

    values: Dict[str, Optional[int]] = {}
    for name, pattern in STAT_PATTERNS.items():
        match = pattern.search(haystack)
        values[name] = parse_count(match.group(1)) if match else None
        if match is None:
            logger.debug(f"No match for {name}")
    return StatRecord(**values)
