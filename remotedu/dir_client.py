"""
Directory server clients.
Provides the listing and glob operations the disk usage engine walks with.
"""
import logging
from typing import Iterable, List, Optional

import requests

from .config import Config, GLOB_ENDPOINT, LIST_ENDPOINT, USER_HEADER
from .errors import ListingError
from .models import DirEntry


# Configure logger
logger = logging.getLogger(__name__)


class DirClient:
    """Interface to a remote directory namespace."""
    
    def list_children(self, path: str) -> List[DirEntry]:
        """
        List the direct children of a directory.
        
        Args:
            path: Directory path name
            
        Returns:
            Child entries in server order
            
        Raises:
            ListingError: The server could not list the directory
        """
        raise NotImplementedError
    
    def glob(self, pattern: str) -> List[DirEntry]:
        """
        Resolve a glob pattern against the namespace.
        
        Args:
            pattern: Path pattern, possibly containing ``*``, ``?`` or ``[...]``
            
        Returns:
            Matching entries in server order
            
        Raises:
            ListingError: The server could not evaluate the pattern
        """
        raise NotImplementedError
    
    def close(self) -> None:
        """Release any held resources."""


class HTTPDirClient(DirClient):
    """Directory client for a JSON-over-HTTP directory server."""
    
    def __init__(
        self,
        endpoint: str,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        username: Optional[str] = None,
    ):
        """
        Initialize the client.
        
        Args:
            endpoint: Base URL of the directory server
            token: Bearer token, or None for anonymous access
            timeout: Per-request timeout in seconds; None waits forever
            username: User the requests are made on behalf of
        """
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers["Accept"] = "application/json"
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        if username:
            self.session.headers[USER_HEADER] = username
    
    @classmethod
    def from_config(cls, config: Config) -> "HTTPDirClient":
        return cls(
            config.endpoint, token=config.token, timeout=config.timeout, username=config.username
        )
    
    def list_children(self, path: str) -> List[DirEntry]:
        return self._fetch_entries(LIST_ENDPOINT, {"path": path}, path)
    
    def glob(self, pattern: str) -> List[DirEntry]:
        return self._fetch_entries(GLOB_ENDPOINT, {"pattern": pattern}, pattern)
    
    def _fetch_entries(self, operation: str, params: dict, path: str) -> List[DirEntry]:
        """Issue one request and decode the ``entries`` array of the reply."""
        url = f"{self.endpoint}/{operation}"
        logger.debug(f"GET {url} {params}")
        
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.HTTPError as e:
            raise ListingError(f"{operation} {path}: {_server_message(e.response)}", path=path) from e
        except requests.exceptions.JSONDecodeError as e:
            raise ListingError(f"{operation} {path}: malformed reply: {e}", path=path) from e
        except requests.exceptions.RequestException as e:
            raise ListingError(f"{operation} {path}: {e}", path=path) from e
        
        if not isinstance(payload, dict) or not isinstance(payload.get("entries"), list):
            raise ListingError(f"{operation} {path}: malformed reply: no entries array", path=path)
        
        try:
            entries = [DirEntry.from_dict(item) for item in payload["entries"]]
        except (AttributeError, ValueError) as e:
            raise ListingError(f"{operation} {path}: malformed entry: {e}", path=path) from e
        
        logger.debug(f"{operation} {path}: {len(entries)} entries")
        return entries
    
    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()


def _server_message(response: Optional[requests.Response]) -> str:
    """Best error text from a failed reply: its JSON ``error`` field or the status line."""
    if response is None:
        return "request failed"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"{response.status_code} {response.reason}"


def glob_all(client: DirClient, patterns: Iterable[str]) -> List[DirEntry]:
    """
    Resolve every pattern before any traversal starts.
    
    Args:
        client: Directory client
        patterns: Path patterns in argument order
        
    Returns:
        All matches, grouped by pattern in argument order
        
    Raises:
        ListingError: A pattern failed or matched nothing
    """
    entries: List[DirEntry] = []
    for pattern in patterns:
        matches = client.glob(pattern)
        if not matches:
            raise ListingError(f"no path matches {pattern!r}", path=pattern)
        entries.extend(matches)
    return entries
