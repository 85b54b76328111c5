#!/usr/bin/env python3
"""Script for interactively archiving your own GitHub repositories."""

import argparse
import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from gh_archiver.infrastructure.github_client import (
    API_BASE_URL,
    ConfigurationError,
    GitHubClientError,
    GitHubRESTClient,
)
from gh_archiver.infrastructure.terminal import confirm_archive, prompt_for_token
from gh_archiver.application.archive_service import ArchiveService

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="A CLI program for interactively archiving your own GitHub repos"
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-t", "--token", help="GitHub token (prompted for if not given)")
    return parser.parse_args(argv)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(message)s'
    )


def main(argv=None):
    """Archive the repositories the user confirms."""
    args = parse_args(argv)
    configure_logging(args.debug)

    try:
        logger.debug("Determining token")
        # GITHUB_TOKEN is used when no --token flag is given
        token = args.token or os.getenv("GITHUB_TOKEN")
        if not token:
            try:
                token = prompt_for_token()
            except ConfigurationError as e:
                print(e, file=sys.stderr)
                return 1

        logger.debug("Setting up GitHub client")
        try:
            github_client = GitHubRESTClient(
                token=token,
                base_url=os.getenv("GITHUB_API_URL", API_BASE_URL)
            )
        except GitHubClientError as e:
            print(f"Could not access GitHub: {e}", file=sys.stderr)
            return 1

        archiver = ArchiveService(github_client, confirm_archive)
        try:
            archiver.review_repositories()
        except GitHubClientError as e:
            print(f"Could not get your repos: {e}", file=sys.stderr)
            return 1

        return 0

    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
