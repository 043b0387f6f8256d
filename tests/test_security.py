import pytest

from md_to_text.processing.errors import SecurityError
from md_to_text.security import SecurityConfig, SecurityValidator


@pytest.mark.parametrize("path", ["notes.md", "docs/guide.markdown", "/tmp/readme.txt", "docs"])
def test_accepts_ordinary_paths(path):
    SecurityValidator().validate_file_path(path)


@pytest.mark.parametrize(
    "path, message",
    [
        ("", "non-empty"),
        ("../secret.md", "traversal"),
        ("/etc/passwd", "blocked"),
        ("/root/notes.md", "blocked"),
        ("payload.exe", "extension"),
        ("bad|name.md", "invalid characters"),
        (".hidden.md", "invalid characters"),
    ],
)
def test_rejects_dangerous_paths(path, message):
    with pytest.raises(SecurityError, match=message):
        SecurityValidator().validate_file_path(path)


def test_blocked_prefix_needs_path_boundary():
    validator = SecurityValidator(SecurityConfig(blocked_paths=("/data",)))
    validator.validate_file_path("/database/notes.md")
    with pytest.raises(SecurityError):
        validator.validate_file_path("/data/notes.md")


def test_file_size_limit():
    validator = SecurityValidator(SecurityConfig(max_file_size=100))
    validator.validate_file_size(100)
    with pytest.raises(SecurityError, match="exceeds"):
        validator.validate_file_size(101)


@pytest.mark.parametrize(
    "url",
    ["https://example.com/readme.md", "http://raw.githubusercontent.com/a/b/main/README.md", "https://8.8.8.8/x.md"],
)
def test_accepts_public_urls(url):
    SecurityValidator().validate_url(url)


@pytest.mark.parametrize(
    "url, message",
    [
        ("", "non-empty"),
        ("not a url", "Invalid URL"),
        ("ftp://example.com/file.md", "Protocol"),
        ("javascript:alert(1)", "Invalid URL"),
        ("http://localhost:3000/x.md", "local"),
        ("http://127.0.0.1/x.md", "local"),
        ("http://10.1.2.3/x.md", "private"),
        ("http://192.168.0.10/x.md", "private"),
        ("http://169.254.169.254/latest", "private"),
        ("http://[fe80::1]/x.md", "private"),
        ("http://intranet/x.md", "Invalid URL"),
    ],
)
def test_rejects_unsafe_urls(url, message):
    with pytest.raises(SecurityError, match=message):
        SecurityValidator().validate_url(url)
