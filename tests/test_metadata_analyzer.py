from md_to_text.post_processing.metadata_analyzer import MetadataAnalyzer
from md_to_text.processing.models import ElementKind

SAMPLE = """# Guide

Intro with [a link](http://e.com) and ![pic](p.png).

- item
1. first

> quote

```
code
```

Use `cmd` here. **bold** *italic* ~~old~~

| a | b |
|---|---|
| 1 | 2 |

---
"""


def test_basic_scenario():
    found = MetadataAnalyzer().analyze("# Title\n\n[link](http://e.com)\n\n**bold**")
    assert {ElementKind.HEADINGS, ElementKind.LINKS, ElementKind.BOLD} <= found
    assert ElementKind.ITALIC not in found
    assert ElementKind.IMAGES not in found


def test_all_kinds_detected():
    assert MetadataAnalyzer().analyze(SAMPLE) == frozenset(ElementKind)


def test_heading_detected_after_first_line():
    found = MetadataAnalyzer().analyze("intro\n\n## Later")
    assert ElementKind.HEADINGS in found


def test_image_is_not_a_link():
    found = MetadataAnalyzer().analyze("![alt](x.png)")
    assert ElementKind.IMAGES in found
    assert ElementKind.LINKS not in found


def test_pipe_without_separator_is_not_table():
    found = MetadataAnalyzer().analyze("a | b\nc | d")
    assert ElementKind.TABLES not in found


def test_underscore_emphasis():
    found = MetadataAnalyzer().analyze("__strong__ and _em_ but not snake_case")
    assert ElementKind.BOLD in found
    assert ElementKind.ITALIC in found


def test_plain_text_and_empty():
    assert MetadataAnalyzer().analyze("just words") == frozenset()
    assert MetadataAnalyzer().analyze("") == frozenset()
