"""Application service for reviewing and archiving a user's repositories."""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from gh_archiver.infrastructure.github_client import (
    GitHubClientError,
    GitHubRESTClient,
    RemoteError,
    TransportError,
)
from gh_archiver.domain.repository import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveOutcome:
    """Result of handling a single repository."""

    repository: Repository
    archived: bool = False
    error: Optional[GitHubClientError] = None

    @property
    def succeeded(self) -> bool:
        return self.archived and self.error is None


class ArchiveService:
    """Service that walks the user's active repositories and archives the chosen ones."""

    def __init__(
        self,
        github_client: GitHubRESTClient,
        confirm: Callable[[Repository], bool]
    ):
        """
        Initialize archive service.

        Args:
            github_client: Authenticated GitHub REST client
            confirm: Called once per repository; returns True to archive it
        """
        self.github_client = github_client
        self.confirm = confirm

    def review_repositories(self) -> List[ArchiveOutcome]:
        """
        List the user's active repositories and ask about each one.

        Listing errors propagate, since acting on a partial listing is unsafe.
        Archive errors are recorded on the outcome for that repository and
        the review moves on to the next one.

        Returns:
            One outcome per listed repository, in listing order
        """
        logger.debug("Getting repos")
        repositories = self.github_client.list_owned_repositories()
        logger.info(f"Found {len(repositories)} repositories that are not archived")

        outcomes = []
        for repo in repositories:
            if self.confirm(repo):
                outcomes.append(self._archive(repo))
            else:
                outcomes.append(ArchiveOutcome(repository=repo))

        self._log_summary(outcomes)
        return outcomes

    def archive_repositories(self, repositories: Iterable[Repository]) -> List[ArchiveOutcome]:
        """
        Archive every given repository without prompting.

        A failure on one repository does not stop the rest of the batch.
        """
        outcomes = [self._archive(repo) for repo in repositories]
        self._log_summary(outcomes)
        return outcomes

    def _archive(self, repo: Repository) -> ArchiveOutcome:
        try:
            self.github_client.archive_repository(repo.name)
        except (RemoteError, TransportError) as e:
            logger.error(f"Error archiving {repo.name}: {e}")
            return ArchiveOutcome(repository=repo, error=e)

        logger.info(f"Archived {repo.full_name}")
        return ArchiveOutcome(repository=repo, archived=True)

    @staticmethod
    def _log_summary(outcomes: List[ArchiveOutcome]) -> None:
        archived = sum(1 for o in outcomes if o.succeeded)
        failed = sum(1 for o in outcomes if o.error is not None)
        skipped = len(outcomes) - archived - failed
        logger.info(f"Done. {archived} archived, {skipped} skipped, {failed} failed")
