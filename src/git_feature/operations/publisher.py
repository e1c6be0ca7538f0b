"""Pull request creation against the GitHub REST API."""

import re
from dataclasses import dataclass
from typing import Any

import httpx

from git_feature.errors import PublishError
from git_feature.log import logger
from git_feature.operations.config import DEFAULT_API_URL, DEFAULT_TIMEOUT

_REMOTE_PATTERNS = (
    re.compile(r"^https?://[^/]+/(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$"),
    re.compile(r"^(?:ssh://)?[^@]+@[^:/]+[:/](?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$"),
)


@dataclass(frozen=True, slots=True)
class PullRequestRequest:
    """Everything needed to open one pull request."""

    owner: str
    repo: str
    head: str
    base: str
    title: str
    body: str
    token: str


@dataclass(frozen=True, slots=True)
class PullRequestRecord:
    """A pull request as reported back by the API."""

    number: int
    url: str
    html_url: str
    state: str
    head: str
    base: str
    title: str


def parse_remote_url(url: str) -> tuple[str, str] | None:
    """Extract (owner, repo) from an https or ssh remote URL."""
    for pattern in _REMOTE_PATTERNS:
        match = pattern.match(url.strip())
        if match:
            return match.group("owner"), match.group("repo")
    return None


def _api_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip()
    if not isinstance(payload, dict):
        return response.text.strip()
    message = str(payload.get("message", "")).strip()
    errors = payload.get("errors")
    if isinstance(errors, list):
        details = [
            str(e.get("message") or e.get("code") or e) if isinstance(e, dict) else str(e)
            for e in errors
        ]
        message = "; ".join([message, *details]) if message else "; ".join(details)
    return message


def _parse_record(payload: Any) -> PullRequestRecord:
    if not isinstance(payload, dict):
        raise PublishError("Unexpected pull request payload")
    try:
        return PullRequestRecord(
            number=int(payload["number"]),
            url=str(payload.get("url", "")),
            html_url=str(payload.get("html_url", "")),
            state=str(payload.get("state", "")),
            head=str((payload.get("head") or {}).get("ref", "")),
            base=str((payload.get("base") or {}).get("ref", "")),
            title=str(payload.get("title", "")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise PublishError(f"Unexpected pull request payload: {e}", cause=e) from e


class PullRequestPublisher:
    """Create pull requests with a single authenticated POST.

    There is no retry: any transport failure or non-2xx answer raises
    PublishError and the caller decides what to do.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def publish(self, request: PullRequestRequest) -> PullRequestRecord:
        url = f"{self.api_url}/repos/{request.owner}/{request.repo}/pulls"
        headers = {
            "Authorization": f"Bearer {request.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        payload = {
            "title": request.title,
            "head": request.head,
            "base": request.base,
            "body": request.body,
        }

        logger.debug("POST %s (%s -> %s)", url, request.head, request.base)
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(url, json=payload, headers=headers)
        except httpx.TransportError as e:
            raise PublishError(f"Error creating pull request: {e}", cause=e) from e

        if not response.is_success:
            detail = _api_message(response) or response.reason_phrase
            raise PublishError(
                f"Error creating pull request: HTTP {response.status_code}: {detail}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise PublishError(f"Invalid JSON in pull request response: {e}", cause=e) from e
        return _parse_record(data)

    def create_pull_request(
        self,
        owner: str,
        repo: str,
        head: str,
        base: str,
        title: str,
        body: str,
        token: str,
    ) -> PullRequestRecord:
        """Open a pull request from ``head`` into ``base``."""
        return self.publish(
            PullRequestRequest(
                owner=owner,
                repo=repo,
                head=head,
                base=base,
                title=title,
                body=body,
                token=token,
            )
        )
