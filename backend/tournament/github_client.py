"""
GitHub API client for fetching tournament round files.
"""
import requests
import os
import time
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class GitHubClient:
    """Client for reading raw files from a repository via the contents API."""

    BASE_URL = "https://api.github.com"
    TIMEOUT = 30

    def __init__(self, token: Optional[str] = None):
        """
        Initialize the GitHub API client.

        Args:
            token: Optional access token; defaults to the GITHUB_TOKEN env var
        """
        self.session = requests.Session()
        self.session.headers.update({
            'Accept': 'application/vnd.github.v3.raw',
            'User-Agent': 'ChessRoundStandings/1.0'
        })
        token = token or os.getenv("GITHUB_TOKEN")
        if token:
            self.session.headers['Authorization'] = f"Bearer {token}"

    def _make_request(self, url: str, params: dict = None) -> Optional[str]:
        """Make API request returning the raw body, or None when unavailable."""
        try:
            response = self.session.get(url, params=params, timeout=self.TIMEOUT)
            response.raise_for_status()
            return response.text
        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                logger.warning(f"File not found: {url}")
                return None
            logger.error(f"HTTP error fetching {url}: {str(e)}")
            return None
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error fetching {url}: {str(e)}")
            return None

    def fetch_round(self, repo: str, filename: str, branch: str = "data", path: str = "data") -> Optional[str]:
        """
        Fetch the PGN text of one round file.

        Args:
            repo: Repository as "owner/name"
            filename: Round filename inside the data directory
            branch: Branch holding the round files
            path: Directory of the round files within the repository

        Returns:
            Raw PGN text, or None if the file could not be fetched
        """
        url = f"{self.BASE_URL}/repos/{repo}/contents/{path}/{filename}"
        params = {
            'ref': branch,
            't': int(time.time() * 1000),  # Bypass intermediate caches
        }
        return self._make_request(url, params)
