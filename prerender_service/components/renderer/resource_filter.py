"""
Sub-resource blocking for browsing contexts.

Page scripts and XHR/fetch traffic must still run to build the final DOM, but
images, stylesheets, fonts and media only affect layout and are dropped for speed.
"""
from typing import FrozenSet, Iterable, Optional

from playwright.async_api import Route

BLOCKED_RESOURCE_TYPES: FrozenSet[str] = frozenset({"image", "stylesheet", "font", "media"})


def should_block(resource_type: Optional[str], blocked: Iterable[str] = BLOCKED_RESOURCE_TYPES) -> bool:
    """
    Returns True when a request of the given Playwright resource type must be aborted.

    Unknown or missing types are allowed. Matching is case-insensitive on both sides.
    """
    if not resource_type:
        return False
    return resource_type.lower() in {t.lower() for t in blocked}


class ResourceFilter:
    """
    Route handler installed on a page before navigation.

    One instance is created per browsing context; the decision for each request
    depends only on its resource type. The counters are for logging only.
    """
    def __init__(self, blocked_resource_types: Optional[Iterable[str]] = None):
        self.blocked_resource_types: FrozenSet[str] = frozenset(
            t.lower() for t in (blocked_resource_types if blocked_resource_types is not None else BLOCKED_RESOURCE_TYPES)
        )
        self.blocked_count = 0
        self.allowed_count = 0

    async def handle_route(self, route: Route) -> None:
        request = route.request
        if should_block(request.resource_type, self.blocked_resource_types):
            self.blocked_count += 1
            await route.abort()
        else:
            self.allowed_count += 1
            await route.continue_()
