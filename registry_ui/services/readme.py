"""README lookup for images whose source repository is on GitHub."""

import re
from typing import Optional

import httpx
from markdown_it import MarkdownIt

from registry_ui.utils.logging import get_logger

logger = get_logger(__name__)

_GITHUB_PREFIX = "https://github.com/"
_RAW_PREFIX = "https://raw.githubusercontent.com/"
_HTML_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL | re.IGNORECASE)

# Raw HTML in READMEs is escaped
_markdown = MarkdownIt("gfm-like", {"html": False})


def readme_url(source_url: Optional[str]) -> Optional[str]:
    """
    Map a GitHub repository URL to the raw URL of its README.

    "https://github.com/owner/repo" becomes
    "https://raw.githubusercontent.com/owner/repo/master/README.md".
    Other hosts have no known README location and yield None.
    """
    if not source_url:
        return None

    url = source_url.strip().rstrip("/")
    if url.startswith("http://github.com/"):
        url = "https://" + url[len("http://"):]
    if not url.startswith(_GITHUB_PREFIX):
        return None

    path = url[len(_GITHUB_PREFIX):]
    if path.endswith(".git"):
        path = path[:-len(".git")]
    if path.count("/") < 1:
        return None

    owner, repo = path.split("/")[:2]
    return f"{_RAW_PREFIX}{owner}/{repo}/master/README.md"


def strip_html_comments(content: str) -> str:
    return _HTML_COMMENT.sub("", content)


def render_readme(content: str) -> str:
    """Render README markdown to HTML with tables, strikethrough and autolinks."""
    return _markdown.render(content)


async def fetch_readme(
    source_url: Optional[str],
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[str]:
    """
    Download the README of an image's source repository.

    Returns:
        The README text without HTML comments, or None when the source is
        not on GitHub or the download fails.
    """
    url = readme_url(source_url)
    if url is None:
        return None

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
            response = await client.get(url)
    except httpx.HTTPError as e:
        logger.warning(f"Could not fetch README from {url}: {e}")
        return None

    if not response.is_success:
        logger.info(f"README not available at {url} (status {response.status_code})")
        return None

    return strip_html_comments(response.text)
