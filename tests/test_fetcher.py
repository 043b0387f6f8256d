from unittest.mock import MagicMock

import pytest
import requests

from md_to_text.fetcher import fetch_url_content, html_to_text
from md_to_text.processing.errors import NetworkError, SecurityError
from md_to_text.security import SecurityConfig, SecurityValidator


def make_session(text="", content_type="text/markdown", status=200, reason="OK", headers=None, encoding=None):
    body = text.encode("utf-8")
    response = MagicMock()
    response.ok = status < 400
    response.status_code = status
    response.reason = reason
    response.encoding = encoding
    response.headers = {"Content-Type": content_type, **(headers or {})}
    response.iter_content.return_value = [body[i:i + 4] for i in range(0, len(body), 4)]
    session = MagicMock()
    session.get.return_value = response
    return session


def test_returns_markdown_body():
    session = make_session("# Remote\n\nBody")
    assert fetch_url_content("https://example.com/a.md", session=session) == "# Remote\n\nBody"

    _, kwargs = session.get.call_args
    assert kwargs["timeout"] == 30.0
    assert kwargs["allow_redirects"] is True
    assert kwargs["stream"] is True
    session.get.return_value.close.assert_called_once()


def test_html_reduced_to_text():
    html = "<html><head><script>evil()</script><style>p{}</style></head><body><p>Hello</p> <p>world</p></body></html>"
    session = make_session(html, content_type="text/html; charset=utf-8", encoding="utf-8")
    assert fetch_url_content("https://example.com/", session=session) == "Hello world"


def test_html_to_text_drops_iframes():
    assert html_to_text("<div>a<iframe src='x'>b</iframe>c</div>") == "a c"


def test_http_error_status():
    session = make_session(status=404, reason="Not Found")
    with pytest.raises(NetworkError, match="HTTP 404") as exc_info:
        fetch_url_content("https://example.com/missing.md", session=session)
    assert exc_info.value.status_code == 404


def test_timeout():
    session = MagicMock()
    session.get.side_effect = requests.Timeout("slow")
    with pytest.raises(NetworkError, match="timed out"):
        fetch_url_content("https://example.com/a.md", session=session)


def test_connection_error():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("refused")
    with pytest.raises(NetworkError, match="refused"):
        fetch_url_content("https://example.com/a.md", session=session)


def test_body_size_limit():
    validator = SecurityValidator(SecurityConfig(max_file_size=10))
    session = make_session("x" * 11)
    with pytest.raises(SecurityError):
        fetch_url_content("https://example.com/a.md", validator=validator, session=session)


def test_declared_length_refused_before_reading():
    validator = SecurityValidator(SecurityConfig(max_file_size=10))
    session = make_session("short", headers={"Content-Length": "5000"})
    with pytest.raises(SecurityError):
        fetch_url_content("https://example.com/a.md", validator=validator, session=session)

    response = session.get.return_value
    response.iter_content.assert_not_called()
    response.close.assert_called_once()


def test_oversized_stream_stops_early():
    validator = SecurityValidator(SecurityConfig(max_file_size=10))
    session = make_session()
    chunks = iter([b"x" * 8, b"x" * 8, b"x" * 8])
    session.get.return_value.iter_content.return_value = chunks
    with pytest.raises(SecurityError):
        fetch_url_content("https://example.com/a.md", validator=validator, session=session)
    # The third chunk is never read
    assert next(chunks) == b"x" * 8


def test_utf8_body_without_charset():
    session = make_session("# Café", encoding="ISO-8859-1")
    assert fetch_url_content("https://example.com/a.md", session=session) == "# Café"
