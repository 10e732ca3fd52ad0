"""
Feed Client — fetches the two raw dashboard datasets.

Two independent sources:
    active-dev series  — JSON object {ISO date: count}
    commit ledger      — CSV text (see ledger_parser)

A source may be an http(s) URL or a local file path. Failures never raise:
each fetch returns a FeedResult whose `error` is set, so one broken feed
cannot take the other one down with it.

Uses only Python stdlib (urllib.request).
"""
import json
import logging
import os
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

USER_AGENT = "algo-devboard/0.1 (+https://github.com/algorand)"


@dataclass
class FeedResult:
    """Outcome of fetching one feed.

    Exactly one of `data` / `error` is meaningful: on failure `data` is None
    and `error` holds a user-facing message.
    """

    source: Optional[str]
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_source(source: str, timeout: float) -> bytes:
    """Read raw bytes from a URL or a local path. Raises on failure."""
    if _is_url(source):
        req = urllib.request.Request(
            source,
            headers={"User-Agent": USER_AGENT, "Accept": "*/*"},
        )
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.read()
    with open(os.path.expanduser(source), "rb") as fh:
        return fh.read()


def fetch_text(source: Optional[str], timeout: float = 30.0) -> FeedResult:
    """Fetch a feed as decoded text.

    Handles:
    - missing source: error "No source configured"
    - HTTP errors (non-2xx): logged at WARNING with the status code
    - network / filesystem errors: logged at WARNING

    Args:
        source: http(s) URL or filesystem path.
        timeout: Socket timeout in seconds for URL sources.

    Returns:
        FeedResult with `data` set to the text body, or `error` on failure.
    """
    if not source:
        return FeedResult(source=source, error="No source configured")

    try:
        body = _read_source(source, timeout)
    except urllib.error.HTTPError as exc:
        logger.warning("HTTP %d error fetching %s: %s", exc.code, source, exc.reason)
        return FeedResult(source=source, error=f"HTTP {exc.code} fetching {source}")
    except urllib.error.URLError as exc:
        logger.warning("Network error fetching %s: %s", source, exc.reason)
        return FeedResult(source=source, error=f"Network error fetching {source}")
    except OSError as exc:
        logger.warning("Could not read %s: %s", source, exc)
        return FeedResult(source=source, error=f"Could not read {source}")

    text = body.decode("utf-8-sig", errors="replace")
    logger.debug("Fetched %d bytes from %s", len(body), source)
    return FeedResult(source=source, data=text)


def fetch_json(source: Optional[str], timeout: float = 30.0) -> FeedResult:
    """Fetch a feed and decode it as JSON.

    Returns:
        FeedResult with `data` set to the decoded object, or `error` when the
        fetch failed or the body is not valid JSON.
    """
    result = fetch_text(source, timeout=timeout)
    if not result.ok:
        return result
    try:
        payload = json.loads(result.data) if result.data.strip() else {}
    except json.JSONDecodeError as exc:
        logger.warning("Invalid JSON from %s: %s", source, exc)
        return FeedResult(source=source, error=f"Invalid JSON from {source}")
    return FeedResult(source=source, data=payload)
