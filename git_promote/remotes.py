"""Remote selection and remote URL parsing."""

from __future__ import annotations

import re
from urllib.parse import quote, urlparse

from .exceptions import NoRemoteConfigured
from .git import Git
from .models import ParsedRemote, Provider

_SCP_RE = re.compile(r"^(?P<user>[^@/]+)@(?P<host>[^:/]+):(?P<path>.+)$")
_URL_SCHEMES = ("ssh", "git", "http", "https")


def preferred_remote(git: Git) -> str:
    """Pick the remote to operate against.

    Order: the remote of the current branch's upstream, then ``origin``, then
    the first listed remote.
    """

    upstream = git.upstream_ref()
    if upstream is not None:
        return upstream.remote
    names = git.list_remotes()
    if "origin" in names:
        return "origin"
    if names:
        return names[0]
    raise NoRemoteConfigured()


def detect_provider(host: str) -> Provider:
    lowered = host.lower()
    if "github" in lowered:
        return "github"
    if "gitlab" in lowered:
        return "gitlab"
    return "unknown"


def parse_remote_url(remote_url: str) -> ParsedRemote | None:
    """Extract host, owner path and repository name from a remote URL.

    Supports ``git@host:owner/repo.git``, ``ssh://git@host/owner/repo.git``
    and ``https://host/owner/repo.git``. Returns None for anything else.
    """

    trimmed = remote_url.strip()
    if not trimmed:
        return None

    host: str | None
    parsed = urlparse(trimmed)
    if parsed.scheme in _URL_SCHEMES and parsed.netloc:
        host = parsed.hostname
        if host and parsed.port and parsed.scheme in ("http", "https"):
            host = f"{host}:{parsed.port}"
        path = parsed.path
    else:
        match = _SCP_RE.match(trimmed)
        if not match:
            return None
        host = match.group("host")
        path = match.group("path")

    if not host or not path:
        return None
    normalized = path.strip("/")
    if normalized.endswith(".git"):
        normalized = normalized[: -len(".git")]
    parts = [part for part in normalized.split("/") if part]
    if len(parts) < 2:
        return None
    return ParsedRemote(
        host=host,
        owner_path="/".join(parts[:-1]),
        repo=parts[-1],
        provider=detect_provider(host),
    )


def build_merge_request_url(parsed: ParsedRemote, source_branch: str, target_branch: str) -> str:
    """Compose the web page that opens a new MR/PR from source into target.

    GitHub gets a compare URL; GitLab and unrecognized hosts get a GitLab
    style new-merge-request URL.
    """

    source = quote(source_branch, safe="")
    target = quote(target_branch, safe="")
    if parsed.provider == "github":
        return f"{parsed.web_base}/compare/{target}...{source}?expand=1"
    return (
        f"{parsed.web_base}/-/merge_requests/new"
        f"?merge_request[source_branch]={source}&merge_request[target_branch]={target}"
    )
