#!/usr/bin/env python3
from __future__ import annotations

from datetime import datetime
from itertools import groupby
from typing import List, Optional

from utils.release_models import Release, ClassifiedRelease
from utils.release_parser import classify_release_body
from configs.config import Config

FRONT_MATTER = """---
title: "Changelog"
description: "Track the latest updates, improvements, and changes to the Country State City ecosystem including API, database, and tools."
icon: "clock"
---

# Changelog

Stay up-to-date with the latest improvements, new features, and changes across the Country State City ecosystem.

<Info>
This changelog is automatically synced from [GitHub releases](https://github.com/{{ repo }}/releases). For detailed technical information, visit the repository.
</Info>

"""

FOOTER = """## Release Information

<Tip>
Our releases follow semantic versioning (SemVer) with the following format:
- **Major.Minor.Patch** (e.g., 3.0.0)
- **Major**: Breaking changes requiring migration
- **Minor**: New features with backward compatibility
- **Patch**: Bug fixes and minor improvements
</Tip>

## Stay Updated

<CardGroup cols={2}>
<Card title="GitHub Releases" icon="github" href="https://github.com/{{ repo }}/releases">
  Get notified about new releases and download assets directly from GitHub.
</Card>

<Card title="API Portal" icon="globe" href="https://countrystatecity.in">
  Access the API and get your developer key for integration.
</Card>
</CardGroup>

## Contributing to Updates

We welcome community contributions to keep our geographical data accurate and up-to-date.

<Steps>
<Step title="Identify Changes">
  Notice outdated or incorrect geographical information? Check our data against official government sources.
</Step>

<Step title="Use Update Tool">
  Submit changes through our [Update Tool](/tools/update-tool) with proper documentation and sources.
</Step>

<Step title="Review Process">
  Our team reviews all submissions for accuracy and integrates approved changes into the next release.
</Step>
</Steps>

<Info>
All major data updates are tested extensively before release to ensure accuracy and maintain API compatibility.
</Info>
"""


def format_release_date(value: datetime) -> str:
	"""Long US date, e.g. ``September 21, 2025``."""
	return f"{value:%B} {value.day}, {value.year}"


def section(title: str, items: List[str], max_items: int) -> str:
	if not items:
		return ""
	lines = [f"## {title}"]
	lines.extend(f"- {item}" for item in items[:max_items])
	return "\n".join(lines) + "\n\n"


def render_update(release: Release, classified: Optional[ClassifiedRelease] = None, *, max_items: Optional[int] = None) -> str:
	"""Render one release as a Mintlify ``<Update>`` block."""
	if classified is None:
		classified = classify_release_body(release.body)
	if max_items is None:
		max_items = Config.CHANGELOG_MAX_ITEMS
	date = format_release_date(release.published_at)
	out = f'<Update label="{release.tag_name}" description="Released {date}">\n'
	if classified.breaking:
		out += f"<Warning>\n{classified.breaking_description}\n</Warning>\n\n"
	out += section("New Features", classified.features, max_items)
	out += section("Improvements", classified.improvements, max_items)
	out += section("Bug Fixes", classified.fixes, max_items)
	out += "</Update>\n"
	return out


def render_changelog(releases: List[Release], *, max_items: Optional[int] = None, repo: Optional[str] = None) -> str:
	"""Render the complete changelog page; prior content is never merged."""
	repo = repo or Config.CSC_REPO
	ordered = sorted(releases, key=lambda r: r.published_at, reverse=True)
	parts = [FRONT_MATTER.replace("{{ repo }}", repo)]
	for year, group in groupby(ordered, key=lambda r: r.published_at.year):
		parts.append(f"## {year}\n\n")
		for release in group:
			parts.append(render_update(release, max_items=max_items))
			parts.append("\n")
	parts.append(FOOTER.replace("{{ repo }}", repo))
	return "".join(parts)
