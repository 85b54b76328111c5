"""GitHub REST API client for listing and archiving a user's repositories."""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import requests
from requests.exceptions import InvalidHeader
from requests.utils import check_header_validity

from gh_archiver.domain.repository import Repository

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.github.com"
REQUEST_TIMEOUT_SECONDS = 30
USER_AGENT = "gh-archiver/0.1.0"


class GitHubClientError(Exception):
    """Base class for errors raised by the GitHub client."""
    pass


class ConfigurationError(GitHubClientError):
    """Raised when the credential cannot be placed into a request header."""
    pass


class TransportError(GitHubClientError):
    """Raised on connection, DNS or timeout failures."""
    pass


class AuthenticationError(GitHubClientError):
    """Raised when GitHub rejects the credential during identity lookup."""

    def __init__(self, status_code: int):
        super().__init__(f"Could not authenticate - likely incorrect token (status {status_code})")
        self.status_code = status_code


class ProtocolError(GitHubClientError):
    """Raised when a response does not have the expected shape."""
    pass


class RemoteError(GitHubClientError):
    """Raised when GitHub rejects a well-formed request."""

    def __init__(self, status_code: int, name: Optional[str] = None):
        if name:
            message = f"Status code {status_code} for repository '{name}'"
        else:
            message = f"Status code {status_code}"
        super().__init__(message)
        self.status_code = status_code
        self.name = name


def build_session(token: str, user_agent: str = USER_AGENT) -> requests.Session:
    """
    Build an HTTP session that authenticates every request with the token.

    Args:
        token: GitHub personal access token
        user_agent: Client-identifying User-Agent header value

    Returns:
        Configured requests session

    Raises:
        ConfigurationError: If the token cannot be used as a header value
    """
    if not token:
        raise ConfigurationError("No token supplied")

    authorization = f"token {token}"
    try:
        check_header_validity(("Authorization", authorization))
        authorization.encode("latin-1")
    except (InvalidHeader, UnicodeEncodeError) as e:
        # Never echo the token
        raise ConfigurationError("Token contains characters not allowed in an HTTP header") from e

    session = requests.Session()
    session.headers.update({
        "Authorization": authorization,
        "User-Agent": user_agent,
        "Accept": "application/vnd.github+json",
    })
    return session


def _is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def _send(session: requests.Session, method: str, url: str, timeout: float, **kwargs) -> requests.Response:
    """Issue a single request, translating transport failures."""
    try:
        return session.request(method, url, timeout=timeout, **kwargs)
    except requests.exceptions.RequestException as e:
        raise TransportError(f"{method} {url} failed: {e}") from e


def resolve_identity(
    session: requests.Session,
    base_url: str = API_BASE_URL,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
) -> str:
    """
    Get the login of the account that owns the session's credential.

    Args:
        session: Session built with build_session
        base_url: GitHub API root
        timeout: Request timeout in seconds

    Returns:
        The authenticated username

    Raises:
        AuthenticationError: If GitHub does not answer with a success status
        ProtocolError: If the body does not carry a string 'login' field
        TransportError: If the request could not be completed
    """
    response = _send(session, "GET", f"{base_url.rstrip('/')}/user", timeout)
    logger.debug(f"Get username response status: {response.status_code}")

    if not _is_success(response):
        raise AuthenticationError(response.status_code)

    try:
        data = response.json()
    except ValueError as e:
        raise ProtocolError("could not extract identity from response body") from e

    login = data.get("login") if isinstance(data, dict) else None
    if not isinstance(login, str):
        raise ProtocolError("could not extract identity from response body")
    return login


def parse_repository(node: Any) -> Repository:
    """
    Build a Repository from one element of the repos listing.

    Raises:
        ProtocolError: If a required field is missing or has the wrong type
    """
    if not isinstance(node, dict):
        raise ProtocolError(f"Expected a repository object, got {type(node).__name__}")

    for field_name, expected in (("name", str), ("full_name", str), ("pushed_at", str), ("archived", bool)):
        if not isinstance(node.get(field_name), expected):
            raise ProtocolError(f"Repository field '{field_name}' is missing or not a {expected.__name__}")

    try:
        pushed_at = datetime.fromisoformat(node["pushed_at"].replace("Z", "+00:00"))
    except ValueError as e:
        raise ProtocolError(f"Invalid pushed_at timestamp: {node['pushed_at']!r}") from e

    return Repository(
        name=node["name"],
        full_name=node["full_name"],
        pushed_at=pushed_at,
        archived=node["archived"],
    )


def filter_active_repositories(repositories: Iterable[Repository]) -> List[Repository]:
    """Drop archived repositories, keeping the original order."""
    return [repo for repo in repositories if not repo.archived]


class GitHubRESTClient:
    """Client for the GitHub REST API scoped to the authenticated user."""

    def __init__(
        self,
        token: str,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client and resolve the authenticated username.

        The username lookup doubles as a credential check, so a client
        that constructs successfully is known to hold a usable token.

        Args:
            token: GitHub personal access token
            base_url: GitHub API root
            timeout: Request timeout in seconds
            session: Preconfigured session. If None, one is built from the token.

        Raises:
            ConfigurationError: If the token cannot be used as a header value
            AuthenticationError: If GitHub rejects the token
            ProtocolError: If the identity response is malformed
            TransportError: If GitHub could not be reached
        """
        if session is None:
            session = build_session(token)

        base_url = base_url.rstrip("/")
        username = resolve_identity(session, base_url, timeout)
        logger.debug(f"Authenticated as {username}")

        self._token = token
        self.base_url = base_url
        self.timeout = timeout
        self.session = session
        self.username = username

    def __repr__(self) -> str:
        return f"{type(self).__name__}(username={self.username!r}, base_url={self.base_url!r})"

    def _request(self, method: str, path: str, json_payload: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}/{path}"
        kwargs = {} if json_payload is None else {"json": json_payload}
        return _send(self.session, method, url, self.timeout, **kwargs)

    def list_owned_repositories(self) -> List[Repository]:
        """
        Fetch the first page of repositories owned by the user.

        Returns:
            Repositories that are not archived, in the order GitHub returned them

        Raises:
            RemoteError: If GitHub answers with a non-success status
            ProtocolError: If any repository in the body cannot be parsed
            TransportError: If the request could not be completed
        """
        response = self._request("GET", f"users/{self.username}/repos")
        logger.debug(f"Repos get call response status: {response.status_code}")

        if not _is_success(response):
            raise RemoteError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ProtocolError("Repository listing is not valid JSON") from e

        if not isinstance(data, list):
            raise ProtocolError(f"Expected a list of repositories, got {type(data).__name__}")

        repositories = [parse_repository(node) for node in data]
        active = filter_active_repositories(repositories)
        logger.debug(f"Found {len(repositories)} repositories, {len(active)} not archived")
        return active

    def archive_repository(self, name: str) -> None:
        """
        Archive a single repository owned by the user.

        Args:
            name: Short repository name, without the owner prefix

        Raises:
            ValueError: If name is empty
            RemoteError: If GitHub answers with a non-success status
            TransportError: If the request could not be completed
        """
        if not name:
            raise ValueError("Repository name is required")

        logger.debug(f"Archiving {self.username}/{name}")
        response = self._request("PATCH", f"repos/{self.username}/{name}", json_payload={"archived": True})
        logger.debug(f"Repo patch call response status: {response.status_code}")

        if not _is_success(response):
            raise RemoteError(response.status_code, name)
