"""Change-type classifier.

Tags the nature of a push from its commit message, falling back to the
changed paths when the message carries no conventional-commit marker.

Marker positions are the start of the message and the point after every
``:``, which covers ``feat: ...``, ``feat(api)!: ...`` and ticket-prefixed
messages like ``PAY-12: fix rounding``.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from pushrisk.models import ChangeType

# Evaluated in this order; first match decides a tag's position in the output.
MESSAGE_MARKERS: tuple[tuple[ChangeType, frozenset[str]], ...] = (
    (ChangeType.FEATURE, frozenset({"feat"})),
    (ChangeType.FIX, frozenset({"fix"})),
    (ChangeType.DOCS, frozenset({"docs"})),
    (ChangeType.TESTS, frozenset({"test", "tests"})),
    (ChangeType.REFACTOR, frozenset({"refactor"})),
    (ChangeType.CHORE, frozenset({"chore"})),
    (ChangeType.PERFORMANCE, frozenset({"perf"})),
)

_LEADING_WORD = re.compile(r"\s*([a-z]+)")

# Substrings, so `tests.py`, `testing/` and `__tests__/` all count.
_TEST_MARKERS: tuple[str, ...] = ("test", "spec", "__tests__")

_DOC_SEGMENTS = frozenset({"docs", "doc"})
_DOC_EXTENSIONS = frozenset({".md", ".mdx", ".rst", ".adoc"})


def message_words(message: str) -> list[str]:
    """Leading words at each marker position of a commit message."""
    text = message.lower()
    starts = [0] + [i + 1 for i, ch in enumerate(text) if ch == ":"]

    words: list[str] = []
    for start in starts:
        m = _LEADING_WORD.match(text, start)
        if m:
            words.append(m.group(1))
    return words


def is_test_path(path: str) -> bool:
    p = path.lower().replace("\\", "/")
    return any(marker in p for marker in _TEST_MARKERS)


def is_doc_path(path: str) -> bool:
    p = PurePosixPath(path.lower().replace("\\", "/"))
    if any(part in _DOC_SEGMENTS for part in p.parts[:-1]):
        return True
    if p.name.startswith("readme"):
        return True
    return p.suffix in _DOC_EXTENSIONS


def _tags_from_message(message: str) -> list[ChangeType]:
    words = set(message_words(message))
    return [tag for tag, markers in MESSAGE_MARKERS if words & markers]


def _tags_from_paths(files: list[str], additions: int, deletions: int) -> list[ChangeType]:
    if not files:
        return []

    tags: list[ChangeType] = []
    test_flags = [is_test_path(f) for f in files]
    doc_flags = [is_doc_path(f) for f in files]

    if any(test_flags):
        tags.append(ChangeType.TESTS)
    if all(doc_flags):
        tags.append(ChangeType.DOCS)

    # Paths that are neither tests nor docs carry the default tag.
    if not all(t or d for t, d in zip(test_flags, doc_flags)):
        tags.append(ChangeType.FEATURE if additions > deletions else ChangeType.FIX)

    return tags


def classify_change_type(
    message: str,
    files: list[str],
    additions: int = 0,
    deletions: int = 0,
) -> list[ChangeType]:
    """Tag the nature of a push.

    Message markers win outright; paths are only consulted when none match.
    """
    tags = _tags_from_message(message)
    if tags:
        return tags
    return _tags_from_paths(files, additions, deletions)
