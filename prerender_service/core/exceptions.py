"""
Custom exception classes for the Prerender Service.

The hierarchy has two branches that the API layer maps to HTTP status codes:
`InvalidRenderRequestError` for client-caused problems (400) and
`ComponentError` subclasses for failures inside the render pipeline (500).
"""
from typing import Optional


class PrerenderServiceError(Exception):
    """
    Base class for all custom exceptions in the Prerender Service.

    Attributes:
        message (str): A human-readable description of the error.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


# --- Request Validation Exceptions ---
class InvalidRenderRequestError(PrerenderServiceError):
    """
    Raised when an inbound render request is malformed (missing URL, unparsable URL,
    or a scheme other than http/https). The message is safe to return to the client.
    """
    def __init__(self, message: str):
        super().__init__(message)


# --- Configuration Related Exceptions ---
class ConfigurationError(PrerenderServiceError):
    """
    Raised for errors related to application configuration.
    This could include issues with loading, accessing, or validating configuration data.
    """
    def __init__(self, message: str):
        super().__init__(message)


# --- Component Related Exceptions ---
class ComponentError(PrerenderServiceError):
    """
    A general base class for errors originating from within a pipeline component
    (Renderer, Extractor, Converter).

    Attributes:
        component_name (str): Name of the component where the error originated.
    """
    def __init__(self, component_name: str, message: str):
        full_message = f"Error in component '{component_name}': {message}"
        super().__init__(full_message)
        self.component_name = component_name


class RendererError(ComponentError):
    """Raised for errors specific to the Renderer component (browser lifecycle, page rendering)."""
    def __init__(self, message: str):
        super().__init__(component_name="Renderer", message=message)


class BrowserLaunchError(RendererError):
    """
    Raised when the headless browser cannot be started.

    Attributes:
        original_exception (Optional[Exception]): The underlying Playwright exception, if any.
    """
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        self.original_exception = original_exception
        super().__init__(message)


class NavigationError(RendererError):
    """Raised when navigating a browsing context to the target URL fails."""
    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Navigation to '{url}' failed: {message}")


class NavigationTimeoutError(NavigationError):
    """Raised when the page does not reach network quiescence before the navigation deadline."""
    def __init__(self, url: str, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(url, f"page did not settle within {timeout_ms}ms")


class ExtractorError(ComponentError):
    """Raised for errors specific to the Extractor component (e.g., no main content found)."""
    def __init__(self, message: str):
        super().__init__(component_name="Extractor", message=message)


class ConverterError(ComponentError):
    """Raised for errors specific to the Converter component (HTML to Markdown)."""
    def __init__(self, message: str):
        super().__init__(component_name="Converter", message=message)
