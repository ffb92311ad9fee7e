import os
from typing import Dict, Any

class Config:
	"""Configuration for the documentation sync jobs."""

	# Source repository
	CSC_REPO = os.getenv("CSC_REPO", "dr5hn/countries-states-cities-database")
	README_URL = os.getenv(
		"README_URL",
		"https://raw.githubusercontent.com/dr5hn/countries-states-cities-database/master/README.md",
	)

	# GitHub REST configuration
	GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip('/')
	GITHUB_TOKEN = os.getenv("GITHUB_TOKEN") or os.getenv("GITHUB_PAT")
	HTTP_TIMEOUT_S = int(os.getenv("HTTP_TIMEOUT_S", "30"))
	USER_AGENT = os.getenv("USER_AGENT", "CSC-Docs-Sync/1.0")
	RELEASES_PER_PAGE = int(os.getenv("RELEASES_PER_PAGE", "100"))
	RELEASES_MAX_PAGES = int(os.getenv("RELEASES_MAX_PAGES", "10"))

	# Documentation files
	DOCS_ROOT = os.getenv("DOCS_ROOT", ".")
	CHANGELOG_PATH = os.getenv("CHANGELOG_PATH", "changelog.mdx")
	OVERVIEW_PATH = os.getenv("OVERVIEW_PATH", os.path.join("database", "overview.mdx"))
	BACKUP_SUFFIX = os.getenv("BACKUP_SUFFIX", ".backup")

	# Rendering
	CHANGELOG_MAX_ITEMS = int(os.getenv("CHANGELOG_MAX_ITEMS", "8"))

	# Empty means the whole README is searched
	STATS_SECTION_HEADING = os.getenv("STATS_SECTION_HEADING", "")
	README_PREVIEW_CHARS = int(os.getenv("README_PREVIEW_CHARS", "500"))

	@classmethod
	def repo_parts(cls) -> tuple:
		"""Split CSC_REPO into (owner, repo)."""
		owner, _, repo = cls.CSC_REPO.partition("/")
		return owner, repo

	@classmethod
	def get_github_config(cls) -> Dict[str, Any]:
		"""Get GitHub configuration for the REST client."""
		return {
			"base_url": cls.GITHUB_API_URL,
			"token": cls.GITHUB_TOKEN,
			"timeout_s": cls.HTTP_TIMEOUT_S,
			"user_agent": cls.USER_AGENT,
		}

	@classmethod
	def get_paths(cls) -> Dict[str, str]:
		"""Get absolute destination paths for the generated documents."""
		return {
			"changelog": os.path.join(cls.DOCS_ROOT, cls.CHANGELOG_PATH),
			"overview": os.path.join(cls.DOCS_ROOT, cls.OVERVIEW_PATH),
		}
