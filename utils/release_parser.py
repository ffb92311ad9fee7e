#!/usr/bin/env python3
from __future__ import annotations

import re
from typing import Callable, Dict, List, Literal, Optional, Tuple

from utils.release_models import ClassifiedRelease

Category = Literal["fix", "feature", "improvement"]
Rule = Tuple[Callable[[str], bool], Category]

BULLET_MARKERS = ("* ", "- ")
DEFAULT_BREAKING_DESCRIPTION = "This release contains breaking changes."

_BREAKING_RE = re.compile(r"BREAKING CHANGE[:\s]*(.*?)$", re.IGNORECASE | re.MULTILINE)


def _contains_any(*needles: str) -> Callable[[str], bool]:
	return lambda lowered: any(n in lowered for n in needles)


# Evaluated top-down on the lowercased bullet; first match wins.
CLASSIFICATION_RULES: List[Rule] = [
	(_contains_any("fix", "resolve", "solved"), "fix"),
	(lambda s: "add" in s or "new" in s or ("support" in s and "fix" not in s), "feature"),
	(lambda s: True, "improvement"),
]


def is_boilerplate(item: str) -> bool:
	"""Contributor credits and auto-generated compare links carry no changelog content."""
	if "made their first contribution" in item:
		return True
	if "@" in item and "in #" in item:
		return True
	return "Full Changelog" in item


def classify_item(item: str) -> Category:
	lowered = item.lower()
	for predicate, category in CLASSIFICATION_RULES:
		if predicate(lowered):
			return category
	return "improvement"


def extract_bullets(body: Optional[str]) -> List[str]:
	"""Return stripped bullet texts in order, boilerplate excluded."""
	out: List[str] = []
	for raw in (body or "").split("\n"):
		line = raw.strip()
		if not line or not line.startswith(BULLET_MARKERS):
			continue
		item = line[2:].strip()
		if is_boilerplate(item):
			continue
		out.append(item)
	return out


def detect_breaking(body: Optional[str]) -> Tuple[bool, Optional[str]]:
	if not body:
		return False, None
	lowered = body.lower()
	if "breaking change" not in lowered and "!!breaking" not in lowered:
		return False, None
	match = _BREAKING_RE.search(body)
	desc = match.group(1).strip() if match else ""
	return True, desc or DEFAULT_BREAKING_DESCRIPTION


def classify_release_body(body: Optional[str]) -> ClassifiedRelease:
	"""Sort the bullets of a release body into features, improvements and fixes."""
	buckets: Dict[Category, List[str]] = {"feature": [], "improvement": [], "fix": []}
	for item in extract_bullets(body):
		buckets[classify_item(item)].append(item)
	breaking, description = detect_breaking(body)
	return ClassifiedRelease(
		features=buckets["feature"],
		improvements=buckets["improvement"],
		fixes=buckets["fix"],
		breaking=breaking,
		breaking_description=description,
	)
