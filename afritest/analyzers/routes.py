"""Express route detection."""

from __future__ import annotations

import re
from typing import List

from ..models import Route

_ROUTE_PATTERN = re.compile(r"""\b(?:app|router)\.(get|post|put|patch|delete)\(\s*['"`]([^'"`]+)['"`]""")


class RouteParser:
    """Finds `app.get('/path', ...)` style registrations in module source."""

    def parse(self, content: str) -> List[Route]:
        return [
            Route(method=match.group(1), path=match.group(2))
            for match in _ROUTE_PATTERN.finditer(content)
        ]


__all__ = ["RouteParser"]
