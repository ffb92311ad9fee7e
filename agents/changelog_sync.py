#!/usr/bin/env python3
"""Changelog sync job.

Fetches GitHub releases of the Country State City database and regenerates
``changelog.mdx`` from scratch, keeping the previous file as a ``.backup``
sibling.

Usage: GITHUB_TOKEN=your_token python -m agents.changelog_sync
"""

import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from clients.github_client import GithubClient, GithubClientError, GithubAuthError  # noqa: E402
from configs.config import Config  # noqa: E402
from utils.changelog_renderer import render_changelog, format_release_date  # noqa: E402
from utils.file_writer import replace_document, DocumentWriteError  # noqa: E402
from utils.release_models import Release  # noqa: E402

# Set up logging
logger = logging.getLogger(__name__)

AUTH_HINT = "Make sure your GitHub token has the correct permissions."


class ChangelogSync:
	"""Fetch releases and rewrite the changelog page."""

	def __init__(self, client: Optional[GithubClient] = None, changelog_path: Optional[str] = None):
		self.client = client or GithubClient()
		self.changelog_path = changelog_path or Config.get_paths()["changelog"]

	def fetch(self) -> List[Release]:
		owner, repo = Config.repo_parts()
		releases = self.client.fetch_releases(owner, repo)
		logger.info(f"Found {len(releases)} releases")
		return releases

	def run(self, *, dry_run: bool = False) -> List[Release]:
		"""Regenerate the changelog.

		Raises:
			GithubClientError: If fetching releases fails
			DocumentWriteError: If the backup or write fails
		"""
		releases = self.fetch()
		content = render_changelog(releases)
		if dry_run:
			sys.stdout.write(content)
			return releases
		backup = replace_document(self.changelog_path, content)
		if backup:
			logger.info(f"Backup created: {backup}")
		logger.info(f"Wrote {self.changelog_path}")
		return releases

	def close(self) -> None:
		self.client.close()


def print_latest(releases: List[Release], limit: int = 5) -> None:
	print("Latest releases synced:")
	for release in sorted(releases, key=lambda r: r.published_at, reverse=True)[:limit]:
		marker = "[pre]" if release.prerelease else "[tag]"
		print(f"  {marker} {release.tag_name} - {format_release_date(release.published_at)}")


def main(argv: Optional[List[str]] = None) -> int:
	"""CLI entry point for the changelog sync."""
	import argparse

	parser = argparse.ArgumentParser(description="Sync changelog.mdx from GitHub releases")
	parser.add_argument("--dry-run", action="store_true", help="Print the generated page instead of writing it")
	parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
	args = parser.parse_args(argv)

	log_level = logging.DEBUG if args.verbose else logging.INFO
	logging.basicConfig(
		level=log_level,
		format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
	)
	if not args.verbose:
		logging.getLogger("clients.github_client").setLevel(logging.WARNING)

	if not Config.GITHUB_TOKEN:
		print("Error: GITHUB_TOKEN environment variable is required", file=sys.stderr)
		print("Usage: GITHUB_TOKEN=your_token python -m agents.changelog_sync", file=sys.stderr)
		return 1

	sync = None
	try:
		sync = ChangelogSync()
		releases = sync.run(dry_run=args.dry_run)
		if not args.dry_run:
			print(f"Changelog synced: {os.path.relpath(sync.changelog_path)} with {len(releases)} releases")
			print_latest(releases)
		return 0
	except (GithubClientError, DocumentWriteError) as e:
		print(f"Error syncing changelog: {e}", file=sys.stderr)
		if isinstance(e, GithubAuthError):
			print(AUTH_HINT, file=sys.stderr)
		return 1
	finally:
		if sync:
			sync.close()


if __name__ == "__main__":
	sys.exit(main())
