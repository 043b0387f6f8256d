import pytest
from md_to_text.post_processing.sanitizer import OutputSanitizer
from md_to_text.post_processing.whitespace_normalizer import WhitespaceNormalizer, WhitespaceConfig

def test_whitespace_normalization():
    normalizer = WhitespaceNormalizer(WhitespaceConfig())

    # Test collapsing 3+ newlines to 2
    assert normalizer.normalize("Line 1\n\n\nLine 2") == "Line 1\n\nLine 2"
    assert normalizer.normalize("Line 1\n\n\n\n\nLine 2") == "Line 1\n\nLine 2"

    # Test preserving 2 newlines
    assert normalizer.normalize("Line 1\n\nLine 2") == "Line 1\n\nLine 2"

    # Whitespace-only lines count as blank
    assert normalizer.normalize("a\n  \n\t\n \nb") == "a\n\nb"

def test_line_trimming():
    normalizer = WhitespaceNormalizer()
    assert normalizer.normalize("  indented  \n\ttabbed\t\n") == "indented\ntabbed"
    assert normalizer.normalize("") == ""

    keep_indent = WhitespaceNormalizer(WhitespaceConfig(strip_leading_whitespace=False))
    assert keep_indent.normalize("x\n    code  ") == "x\n    code"

def test_script_and_iframe_removal():
    sanitizer = OutputSanitizer()

    assert sanitizer.sanitize("a<script>alert(1)</script>b") == "ab"
    assert sanitizer.sanitize("a<SCRIPT type='x'>\nbad()\n</Script>b") == "ab"
    assert sanitizer.sanitize("x<iframe src='y'></iframe>z") == "xz"

    # Unclosed tags are dropped too
    assert "<script" not in sanitizer.sanitize("text <script src=evil.js>").lower()

    # Tag names that merely start with script or iframe
    assert sanitizer.sanitize("<scriptx>alert(1)</scriptx>") == "alert(1)"
    assert sanitizer.sanitize("a<script_a>b") == "ab"
    assert sanitizer.sanitize("<iframes src='y'>z</IFRAMES>") == "z"

def test_uri_neutralization():
    sanitizer = OutputSanitizer()

    assert sanitizer.sanitize("go JavaScript:alert(1)") == "go alert(1)"
    assert "base64" not in sanitizer.sanitize("img data:image/png;base64,AAAA")

def test_reassembled_payloads():
    sanitizer = OutputSanitizer()

    result = sanitizer.sanitize("<scr<script></script>ipt>alert(1)</script>")
    assert "<script" not in result.lower()

    result = sanitizer.sanitize("javajavascript:script:alert(1)")
    assert "javascript:" not in result.lower()

@pytest.mark.parametrize("text", [
    "plain text",
    "<script>x</script>",
    "<scr<script></script>ipt>",
    "javajavascript:script:",
    "data:data:xbase64base64",
    "<iframe>a</iframe><script>b",
    "<scriptx>a</scriptx><iframes>",
])
def test_sanitize_is_idempotent(text):
    sanitizer = OutputSanitizer()
    once = sanitizer.sanitize(text)
    assert sanitizer.sanitize(once) == once

def test_sanitize_non_text():
    sanitizer = OutputSanitizer()
    assert sanitizer.sanitize("") == ""
    assert sanitizer.sanitize(None) == ""
