from .config import get_config, config_manager, ConfigurationManager, ConfigError, ConfigFileNotFoundError, InvalidYamlError
from .exceptions import (
    PrerenderServiceError,
    InvalidRenderRequestError,
    ConfigurationError,
    ComponentError,
    RendererError,
    BrowserLaunchError,
    NavigationError,
    NavigationTimeoutError,
    ExtractorError,
    ConverterError,
)
from .logger import setup_logging, get_logger
from .models import OutputFormat, ExtractionMode, RenderRequest, RenderedPage, Article, RenderResult

__all__ = [
    # Config
    "get_config",
    "config_manager",
    "ConfigurationManager",
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidYamlError",
    # Logger
    "setup_logging",
    "get_logger",
    # Exceptions
    "PrerenderServiceError",
    "InvalidRenderRequestError",
    "ConfigurationError",
    "ComponentError",
    "RendererError",
    "BrowserLaunchError",
    "NavigationError",
    "NavigationTimeoutError",
    "ExtractorError",
    "ConverterError",
    # Models
    "OutputFormat",
    "ExtractionMode",
    "RenderRequest",
    "RenderedPage",
    "Article",
    "RenderResult",
]
