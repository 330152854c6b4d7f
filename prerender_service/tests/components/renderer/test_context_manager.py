import pytest
from unittest.mock import AsyncMock, MagicMock

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from prerender_service.components.renderer.browser_supervisor import BrowserSupervisor
from prerender_service.components.renderer.context_manager import (
    DEFAULT_NAVIGATION_TIMEOUT_MS,
    DEFAULT_WAIT_UNTIL,
    BrowsingContextManager,
)
from prerender_service.core.exceptions import (
    BrowserLaunchError,
    NavigationError,
    NavigationTimeoutError,
    RendererError,
)

RENDERED_DOCUMENT = """
<html>
  <head>
    <title>Rendered Page</title>
    <meta charset="utf-8">
    <link rel="stylesheet" href="/site.css">
    <style>body { color: red; }</style>
  </head>
  <body>
    <h1>Hello</h1>
    <div id="app"><p>Built by JavaScript</p></div>
    <script>document.getElementById('app').innerHTML = '<p>Built by JavaScript</p>';</script>
    <noscript>Enable JavaScript</noscript>
  </body>
</html>
"""


class MockConfigurationManager:
    def __init__(self, settings=None):
        self.settings = settings if settings is not None else {}

    def get(self, key, default=None):
        value = self.settings
        for k_part in key.split('.'):
            if not isinstance(value, dict) or k_part not in value:
                return default
            value = value[k_part]
        return value


def make_fake_browser(calls=None, goto_error=None, content=RENDERED_DOCUMENT, final_url="https://example.com/final"):
    """Builds a MagicMock browser -> context -> page chain recording call order into `calls`."""
    calls = calls if calls is not None else []

    page = MagicMock()
    page.url = final_url
    page.route = AsyncMock(side_effect=lambda *args, **kwargs: calls.append("route"))

    async def goto(*args, **kwargs):
        calls.append("goto")
        if goto_error:
            raise goto_error
    page.goto = AsyncMock(side_effect=goto)
    page.content = AsyncMock(return_value=content)
    page.title = AsyncMock(return_value="Rendered Page")

    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock(side_effect=lambda: calls.append("close"))

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    return browser, context, page


def test_defaults():
    manager = BrowsingContextManager(config=None)
    assert manager.navigation_timeout_ms == DEFAULT_NAVIGATION_TIMEOUT_MS == 20000
    assert manager.wait_until == DEFAULT_WAIT_UNTIL == "networkidle"
    assert manager.blocked_resource_types == {"image", "stylesheet", "font", "media"}


def test_config_overrides():
    config = MockConfigurationManager({"components": {"browsing_context": {
        "navigation_timeout_ms": 5000, "wait_until": "load", "blocked_resource_types": ["image"],
    }}})
    manager = BrowsingContextManager(config=config)
    assert manager.navigation_timeout_ms == 5000
    assert manager.wait_until == "load"
    assert manager.blocked_resource_types == {"image"}


@pytest.mark.asyncio
async def test_render_success_returns_cleaned_page():
    browser, context, page = make_fake_browser()
    manager = BrowsingContextManager(config=None)

    rendered = await manager.render(browser, "https://example.com")

    page.goto.assert_awaited_once_with("https://example.com", wait_until="networkidle", timeout=20000)
    assert rendered.url == "https://example.com"
    assert rendered.final_url == "https://example.com/final"
    assert rendered.title == "Rendered Page"
    assert "<h1>Hello</h1>" in rendered.html
    assert "Built by JavaScript" in rendered.html
    for tag in ("<script", "<style", "<head", "<meta", "<link", "<noscript", "<title"):
        assert tag not in rendered.html
    context.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_filter_is_installed_before_navigation():
    calls = []
    browser, context, page = make_fake_browser(calls=calls)
    manager = BrowsingContextManager(config=None)

    await manager.render(browser, "https://example.com")

    assert calls == ["route", "goto", "close"]
    pattern, handler = page.route.await_args.args
    assert pattern == "**/*"
    assert callable(handler)


@pytest.mark.asyncio
async def test_each_render_uses_a_new_context():
    browser, context, page = make_fake_browser()
    manager = BrowsingContextManager(config=None)

    await manager.render(browser, "https://example.com/a")
    await manager.render(browser, "https://example.com/b")

    assert browser.new_context.await_count == 2
    assert context.close.await_count == 2


@pytest.mark.asyncio
async def test_navigation_timeout_disposes_context():
    calls = []
    browser, context, page = make_fake_browser(calls=calls, goto_error=PlaywrightTimeoutError("Timeout 20000ms exceeded."))
    manager = BrowsingContextManager(config=None)

    with pytest.raises(NavigationTimeoutError) as excinfo:
        await manager.render(browser, "https://slow.example.com")

    assert excinfo.value.timeout_ms == 20000
    assert "did not settle within 20000ms" in str(excinfo.value)
    assert calls[-1] == "close"
    context.close.assert_awaited_once()
    page.content.assert_not_awaited()


@pytest.mark.asyncio
async def test_navigation_failure_disposes_context():
    browser, context, page = make_fake_browser(goto_error=PlaywrightError("net::ERR_NAME_NOT_RESOLVED"))
    manager = BrowsingContextManager(config=None)

    with pytest.raises(NavigationError) as excinfo:
        await manager.render(browser, "http://nonexistentdomain123.invalid")

    assert not isinstance(excinfo.value, NavigationTimeoutError)
    assert "ERR_NAME_NOT_RESOLVED" in str(excinfo.value)
    context.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_dom_read_failure_disposes_context():
    browser, context, page = make_fake_browser()
    page.content = AsyncMock(side_effect=PlaywrightError("Target page, context or browser has been closed"))
    manager = BrowsingContextManager(config=None)

    with pytest.raises(RendererError) as excinfo:
        await manager.render(browser, "https://example.com")

    assert "Failed to read rendered DOM" in str(excinfo.value)
    context.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_unexpected_error_still_disposes_context():
    browser, context, page = make_fake_browser(goto_error=RuntimeError("boom"))
    manager = BrowsingContextManager(config=None)

    with pytest.raises(RuntimeError):
        await manager.render(browser, "https://example.com")

    context.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_context_creation_failure_is_renderer_error():
    browser = MagicMock()
    browser.new_context = AsyncMock(side_effect=PlaywrightError("Browser has been closed"))
    manager = BrowsingContextManager(config=None)

    with pytest.raises(RendererError) as excinfo:
        await manager.render(browser, "https://example.com")
    assert "Failed to open browsing context" in str(excinfo.value)


@pytest.mark.asyncio
async def test_close_error_does_not_mask_result():
    browser, context, page = make_fake_browser()
    context.close = AsyncMock(side_effect=PlaywrightError("Target closed"))
    manager = BrowsingContextManager(config=None)

    rendered = await manager.render(browser, "https://example.com")

    assert "<h1>Hello</h1>" in rendered.html


@pytest.mark.integration
@pytest.mark.asyncio
async def test_render_data_url_with_real_browser():
    """Runs page JavaScript in a real Chromium (requires `playwright install chromium`)."""
    html = (
        "<html><head><title>Integration</title></head><body>"
        "<div id='target'></div><img src='https://example.invalid/x.png'>"
        "<script>document.getElementById('target').innerHTML = '<p>Injected by script</p>';</script>"
        "</body></html>"
    )
    supervisor = BrowserSupervisor(config=None)
    manager = BrowsingContextManager(config=None)
    try:
        browser = await supervisor.ensure_running()
    except BrowserLaunchError as e:
        pytest.skip(f"Chromium not available: {e}")

    try:
        rendered = await manager.render(browser, "data:text/html," + html)
        assert "Injected by script" in rendered.html
        assert "<script" not in rendered.html
        assert rendered.title == "Integration"
    finally:
        await supervisor.shutdown()
