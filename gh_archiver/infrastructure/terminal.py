"""Terminal prompts for the interactive archive script."""

from getpass import getpass

from gh_archiver.domain.repository import Repository
from gh_archiver.infrastructure.github_client import ConfigurationError

YES_ANSWERS = ("y", "yes")


def prompt_for_token() -> str:
    """
    Ask for a GitHub token without echoing it to the terminal.

    Raises:
        ConfigurationError: If nothing was entered
    """
    token = getpass("GitHub token: ").strip()
    if not token:
        raise ConfigurationError("No token supplied")
    return token


def confirm_archive(repository: Repository) -> bool:
    """Ask whether to archive the repository. Anything but yes means no."""
    answer = input(
        f"Do you want to archive {repository.name}? "
        f"Last update: {repository.pushed_at} [y/N] "
    )
    return answer.strip().lower() in YES_ANSWERS
