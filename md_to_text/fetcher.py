"""Remote markdown retrieval over HTTP."""

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .processing.errors import NetworkError
from .security import SecurityValidator


logger = logging.getLogger(__name__)

# Bytes read per chunk of a streamed response
CHUNK_SIZE = 64 * 1024

DEFAULT_HEADERS = {
    "User-Agent": "md-to-text/1.0.0",
    "Accept": "text/markdown, text/plain, text/html, */*",
    "Accept-Encoding": "gzip, deflate",
}


def _session_with_retries() -> requests.Session:
    """Create a session that retries transient server errors."""
    session = requests.Session()
    retry = Retry(
        total=2,
        backoff_factor=0.3,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    session.mount("http://", HTTPAdapter(max_retries=retry))
    session.mount("https://", HTTPAdapter(max_retries=retry))
    session.headers.update(DEFAULT_HEADERS)
    return session


def html_to_text(html: str) -> str:
    """Reduce an HTML page to its visible text.

    Args:
        html: HTML document.

    Returns:
        Whitespace-collapsed text without scripts, styles or frames.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(["script", "style", "iframe", "noscript"]):
        tag.decompose()
    return " ".join(soup.get_text(separator=" ").split())


def _read_body(response: requests.Response, validator: SecurityValidator) -> bytes:
    """Read a streamed body, stopping as soon as it exceeds the size limit."""
    declared = response.headers.get("Content-Length", "")
    if declared.isdigit():
        validator.validate_file_size(int(declared))

    chunks = []
    size = 0
    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
        size += len(chunk)
        validator.validate_file_size(size)
        chunks.append(chunk)
    return b"".join(chunks)


def fetch_url_content(
    url: str,
    validator: Optional[SecurityValidator] = None,
    session: Optional[requests.Session] = None
) -> str:
    """Download markdown (or HTML) text from ``url``.

    The URL itself must already be validated; this only enforces the
    timeout and the payload size limit. The body is streamed, so an
    oversized reply is refused from its Content-Length or while reading.

    Args:
        url: Remote document URL.
        validator: Supplies the timeout and size limit.
        session: HTTP session to reuse; a retrying one is created otherwise.

    Returns:
        Document text. HTML pages are reduced to their visible text.

    Raises:
        NetworkError: On timeouts, connection failures and non-2xx replies.
        SecurityError: If the body exceeds the size limit.
    """
    validator = validator or SecurityValidator()
    session = session or _session_with_retries()
    timeout = validator.config.url_timeout

    logger.info(f"Fetching {url}")
    try:
        response = session.get(url, timeout=timeout, allow_redirects=True, stream=True)
    except requests.Timeout as e:
        raise NetworkError("Request timed out") from e
    except requests.RequestException as e:
        raise NetworkError(f"Network error: {e}") from e

    try:
        if not response.ok:
            raise NetworkError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
            )
        try:
            body = _read_body(response, validator)
        except requests.RequestException as e:
            raise NetworkError(f"Network error: {e}") from e
    finally:
        response.close()

    content_type = response.headers.get("Content-Type", "")
    # requests assumes ISO-8859-1 for text/* without a charset; markdown is UTF-8
    encoding = response.encoding if "charset=" in content_type.lower() else "utf-8"
    try:
        text = body.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        logger.warning(f"Unknown charset {encoding!r} from {url}, decoding as UTF-8")
        text = body.decode("utf-8", errors="replace")

    if "text/html" in content_type:
        logger.debug(f"Extracting text from HTML response of {url}")
        return html_to_text(text)
    return text
