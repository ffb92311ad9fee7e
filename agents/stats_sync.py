#!/usr/bin/env python3
"""Database statistics sync job.

Fetches the upstream README, extracts the region/country/state/city totals
and patches them into ``database/overview.mdx``.

Usage: python -m agents.stats_sync
"""

import logging
import sys
import warnings
from datetime import date
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from clients.github_client import GithubClient, GithubClientError  # noqa: E402
from configs.config import Config  # noqa: E402
from utils.file_writer import read_document, replace_document, DocumentWriteError  # noqa: E402
from utils.overview_rewriter import rewrite_overview, format_long_date, RewriteResult  # noqa: E402
from utils.stats_extractor import extract_statistics, NoStatisticsFoundWarning  # noqa: E402
from utils.stats_models import StatRecord  # noqa: E402

# Set up logging
logger = logging.getLogger(__name__)


class StatsSync:
	"""Fetch README totals and patch the overview page."""

	def __init__(self, client: Optional[GithubClient] = None, overview_path: Optional[str] = None):
		self.client = client or GithubClient()
		self.overview_path = overview_path or Config.get_paths()["overview"]

	def fetch_statistics(self) -> StatRecord:
		readme = self.client.fetch_text(Config.README_URL)
		stats = extract_statistics(readme, section_heading=Config.STATS_SECTION_HEADING or None)
		if stats.is_empty():
			preview = readme[:Config.README_PREVIEW_CHARS]
			logger.warning(f"No statistics found in README. The format may have changed. Preview: {preview!r}")
			warnings.warn("No statistics found in README", NoStatisticsFoundWarning, stacklevel=2)
		return stats

	def apply(self, stats: StatRecord, *, today: Optional[date] = None, dry_run: bool = False) -> RewriteResult:
		"""Rewrite the overview page; nothing is written when no field was found.

		Raises:
			DocumentWriteError: If reading, backing up or writing fails
		"""
		current = read_document(self.overview_path)
		result = rewrite_overview(current, stats, today=today)
		if not result.updated:
			logger.info("No statistics found to update")
			return result
		if dry_run:
			sys.stdout.write(result.content)
			return result
		if result.content == current:
			logger.info(f"{self.overview_path} already up to date")
			return result
		backup = replace_document(self.overview_path, result.content)
		result.written = True
		if backup:
			logger.info(f"Backup created: {backup}")
		logger.info(f"Updated {self.overview_path}: {', '.join(result.updated_fields) or 'no anchors'}")
		return result

	def run(self, *, today: Optional[date] = None, dry_run: bool = False) -> Optional[RewriteResult]:
		stats = self.fetch_statistics()
		if stats.is_empty():
			return None
		return self.apply(stats, today=today, dry_run=dry_run)

	def close(self) -> None:
		self.client.close()


def print_statistics(stats: StatRecord) -> None:
	print("Parsed statistics:")
	for name, value in stats.as_dict().items():
		shown = f"{value:,}" if value is not None else "Not found"
		print(f"  {name.capitalize()}: {shown}")


def main(argv: Optional[List[str]] = None) -> int:
	"""CLI entry point for the statistics sync."""
	import argparse

	parser = argparse.ArgumentParser(description="Update database/overview.mdx from the upstream README")
	parser.add_argument("--dry-run", action="store_true", help="Print the patched page instead of writing it")
	parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
	args = parser.parse_args(argv)

	log_level = logging.DEBUG if args.verbose else logging.INFO
	logging.basicConfig(
		level=log_level,
		format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
	)
	if not args.verbose:
		logging.getLogger("clients.github_client").setLevel(logging.WARNING)

	sync = None
	try:
		sync = StatsSync()
		stats = sync.fetch_statistics()
		print_statistics(stats)
		if stats.is_empty():
			print("No statistics found in README; nothing to update.")
			return 0
		result = sync.apply(stats, dry_run=args.dry_run)
		if args.dry_run:
			return 0
		if result.skipped:
			print(f"Skipped missing anchors: {', '.join(result.skipped)}")
		if not result.written:
			print(f"{sync.overview_path} already up to date")
		elif result.date_updated:
			print(f"Database statistics updated ({format_long_date(date.today())})")
		else:
			print("Database statistics updated")
		return 0
	except (GithubClientError, DocumentWriteError) as e:
		print(f"Error: {e}", file=sys.stderr)
		return 1
	finally:
		if sync:
			sync.close()


if __name__ == "__main__":
	sys.exit(main())
