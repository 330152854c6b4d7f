"""
Renderer component for the Prerender Service.

This sub-package owns the shared headless browser and the per-request
browsing contexts that execute page JavaScript and produce the final DOM.
"""
from .browser_supervisor import BrowserSupervisor
from .context_manager import BrowsingContextManager
from .resource_filter import ResourceFilter, should_block, BLOCKED_RESOURCE_TYPES

__all__ = [
    "BrowserSupervisor",
    "BrowsingContextManager",
    "ResourceFilter",
    "should_block",
    "BLOCKED_RESOURCE_TYPES",
]
