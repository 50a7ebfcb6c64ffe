"""Fenced code block extraction for generated responses."""

from __future__ import annotations

import re

_FENCE_PATTERN = re.compile(
    r"^[ \t]*(?P<fence>`{3,})[ \t]*[\w.+#-]*[ \t]*\r?\n(?P<body>.*?)^[ \t]*(?P=fence)[ \t]*\r?$",
    re.MULTILINE | re.DOTALL,
)


class ResponseExtractor:
    """Pulls the first fenced code block out of model output."""

    def extract(self, text: str) -> str:
        """Return the trimmed body of the first fenced block, or `text` unchanged."""
        match = _FENCE_PATTERN.search(text)
        if match is None:
            return text
        return match.group("body").strip()


__all__ = ["ResponseExtractor"]
