"""Normalisation of text extracted from article markup.

Some component-based pages render their stylesheets inline, so naive text
extraction returns CSS as if it were prose. The rules below strip the patterns
seen in practice. They are a denylist and will never be complete, so they are
kept as plain data: callers can pass their own rule tuples to
:func:`clean_text` to extend or replace them.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Iterable, Pattern, Sequence

__all__ = [
    "CSS_CLEANUP_RULES",
    "CSS_LINE_PATTERNS",
    "CleanupRule",
    "clean_text",
    "looks_like_css",
]


@dataclass(frozen=True, slots=True)
class CleanupRule:
    """A regex substitution applied to the whole text."""

    name: str
    pattern: Pattern[str]
    replacement: str = " "

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _rule(name: str, pattern: str, flags: int = 0) -> CleanupRule:
    return CleanupRule(name=name, pattern=re.compile(pattern, flags))


CSS_CLEANUP_RULES: tuple[CleanupRule, ...] = (
    # @media (...) { .a { color: red } } and @import url(...);
    _rule(
        "at-rule",
        r"@(?:media|import|font-face|keyframes|-webkit-keyframes|supports|charset|layer|container|page)"
        r"\b[^{};]*(?:\{(?:[^{}]*\{[^{}]*\})*[^{}]*\}|;)",
        re.IGNORECASE,
    ),
    # Selector tokens only, so prose sharing the line with a leaked block survives.
    _rule(
        "selector-block",
        r"(?<![\w-])(?:[.#]|::?)?[\w-]+(?:\s*[>+~,]?\s*(?:[.#]|::?)?[\w-]+){0,6}"
        r"\s*\{[^{}]*:[^{}]*\}",
    ),
    _rule("custom-property", r"--[\w-]+\s*:\s*[^;{}\n]*;?"),
    _rule(
        "css-function",
        r"\b(?:rgba?|hsla?|calc|var|url|min|max|clamp|linear-gradient|radial-gradient)"
        r"\((?:[^()]|\([^()]*\))*\)",
        re.IGNORECASE,
    ),
    _rule("shadow-pseudo", r"::?(?:host|slotted|part|deep|global)\b(?:\([^)]*\))?", re.IGNORECASE),
    # Only when CSS punctuation follows, so "issue #123" and "commit #deadbeef" survive.
    _rule(
        "hex-color",
        r"(?<![\w&])#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{3,4})\b(?=\s*[;)}])",
    ),
)

# A line matching any of these after the substitutions is style residue, not prose.
CSS_LINE_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r"^[\s{}();,]+$"),
    re.compile(r"^(?:[a-z-]+\s*:\s*[^;:]{1,60};\s*)+$"),
    re.compile(r"^[.#:][\w-]+(?:\s*[,>+~]?\s*[.#:]?[\w-]+)*\s*\{?\s*$"),
    re.compile(r"^[^{}]*\{$"),
)

_HORIZONTAL_WS_RE = re.compile(r"[^\S\n]+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")


def looks_like_css(line: str, patterns: Iterable[Pattern[str]] = CSS_LINE_PATTERNS) -> bool:
    """Return ``True`` when ``line`` consists only of CSS syntax."""

    stripped = line.strip()
    if not stripped:
        return False
    if not any(char in stripped for char in "{};:"):
        return False
    return any(pattern.match(stripped) for pattern in patterns)


def clean_text(
    text: str,
    rules: Sequence[CleanupRule] = CSS_CLEANUP_RULES,
    line_patterns: Sequence[Pattern[str]] = CSS_LINE_PATTERNS,
) -> str:
    """Normalise whitespace, decode entities and strip leaked stylesheet text."""

    text = html.unescape(text).replace("\xa0", " ")

    for rule in rules:
        text = rule.apply(text)

    lines = []
    for raw_line in text.splitlines():
        line = _HORIZONTAL_WS_RE.sub(" ", raw_line).strip()
        if not line or looks_like_css(line, line_patterns):
            continue
        lines.append(line)

    return _BLANK_LINES_RE.sub("\n", "\n".join(lines)).strip()
