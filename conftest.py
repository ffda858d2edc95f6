"""Root conftest.py - Register step definitions and provide browser fixtures for pytest-bdd."""

from pathlib import Path
from typing import Iterator, List

import pytest
from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from tests.step_defs.helpers import ScenarioContext
from tests.ui_helpers.about_page import AboutPage
from tests.ui_helpers.base_page import BasePage
from tests.ui_helpers.cart_page import CartPage
from tests.ui_helpers.contact_page import ContactPage
from tests.ui_helpers.gallery_page import GalleryPage
from tests.ui_helpers.home_page import HomePage
from tests.ui_helpers.installations_page import InstallationsPage
from tests.ui_helpers.page_monitor import PageMonitor
from tests.ui_helpers.products_page import ProductsPage
from tests.ui_helpers.site_config import VIEWPORTS, SiteSettings

STEP_DEFS_DIR = Path(__file__).parent / "tests" / "step_defs"


def _discover_step_modules() -> List[str]:
    """Dotted names of every step definition module in tests/step_defs/.

    helpers.py holds shared functions, not steps, and is skipped.
    """
    return [
        f"tests.step_defs.{f.stem}"
        for f in sorted(STEP_DEFS_DIR.glob("*.py"))
        if f.stem not in ("__init__", "helpers")
    ]


# Loading the step modules as plugins makes their steps visible to every
# feature file, whichever test module collects it
pytest_plugins = _discover_step_modules()


# ============================================================================
# Command Line Options
# ============================================================================

def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("pinecrest", "Pinecrest Home Goods site under test")
    group.addoption(
        "--site-url",
        action="store",
        default=None,
        help="Base URL of the deployment to test (env: BASE_URL)",
    )
    group.addoption(
        "--site-browser",
        action="store",
        default=None,
        choices=("chromium", "firefox", "webkit"),
        help="Browser engine to drive (env: BROWSER)",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=None,
        help="Show the browser window (env: HEADLESS=0)",
    )
    group.addoption(
        "--slow-mo",
        action="store",
        type=int,
        default=None,
        help="Delay every browser action by this many milliseconds (env: SLOW_MO)",
    )
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=None,
        help="Run scenarios tagged @e2e against the live site (env: RUN_E2E=1)",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "e2e: scenario drives a real browser against the live site")


def _settings_from_config(config: pytest.Config) -> SiteSettings:
    headed = config.getoption("--headed")
    return SiteSettings.from_env(
        {
            "base_url": config.getoption("--site-url"),
            "browser_name": config.getoption("--site-browser"),
            "headless": False if headed else None,
            "slow_mo": config.getoption("--slow-mo"),
            "run_e2e": config.getoption("--run-e2e"),
        }
    )


def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    """Skip live scenarios unless they were asked for."""
    if _settings_from_config(config).run_e2e:
        return
    skip_e2e = pytest.mark.skip(reason="live site scenario, use --run-e2e or RUN_E2E=1 to run")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


# ============================================================================
# Browser Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def site_settings(pytestconfig: pytest.Config) -> SiteSettings:
    """Runtime settings: command line first, then environment, then defaults."""
    return _settings_from_config(pytestconfig)


@pytest.fixture(scope="session")
def playwright_instance() -> Iterator[Playwright]:
    with sync_playwright() as playwright:
        yield playwright


@pytest.fixture(scope="session")
def browser(playwright_instance: Playwright, site_settings: SiteSettings) -> Iterator[Browser]:
    """One browser for the whole session."""
    launcher = getattr(playwright_instance, site_settings.browser_name)
    browser = launcher.launch(headless=site_settings.headless, slow_mo=site_settings.slow_mo)
    print(f"✓ Launched {site_settings.browser_name} (headless={site_settings.headless})")
    yield browser
    browser.close()


@pytest.fixture
def browser_context(browser: Browser, site_settings: SiteSettings) -> Iterator[BrowserContext]:
    """Fresh context per scenario, so cookies and the cart never leak between scenarios."""
    context = browser.new_context(
        base_url=site_settings.base_url,
        viewport=VIEWPORTS["default"],
        accept_downloads=True,
    )
    yield context
    context.close()


@pytest.fixture
def page(browser_context: BrowserContext) -> Page:
    return browser_context.new_page()


@pytest.fixture
def page_monitor(page: Page) -> PageMonitor:
    """Failed requests and console errors seen by the scenario's page."""
    return PageMonitor(page)


@pytest.fixture
def site_context() -> ScenarioContext:
    """Values handed from one step to the next within a scenario."""
    return ScenarioContext()


# ============================================================================
# Page Object Fixtures
# ============================================================================

@pytest.fixture
def home_page(page: Page, site_settings: SiteSettings) -> HomePage:
    return HomePage(page, site_settings)


@pytest.fixture
def about_page(page: Page, site_settings: SiteSettings) -> AboutPage:
    return AboutPage(page, site_settings)


@pytest.fixture
def products_page(page: Page, site_settings: SiteSettings) -> ProductsPage:
    return ProductsPage(page, site_settings)


@pytest.fixture
def installations_page(page: Page, site_settings: SiteSettings) -> InstallationsPage:
    return InstallationsPage(page, site_settings)


@pytest.fixture
def gallery_page(page: Page, site_settings: SiteSettings) -> GalleryPage:
    return GalleryPage(page, site_settings)


@pytest.fixture
def contact_page(page: Page, site_settings: SiteSettings) -> ContactPage:
    return ContactPage(page, site_settings)


@pytest.fixture
def cart_page(page: Page, site_settings: SiteSettings) -> CartPage:
    return CartPage(page, site_settings)


# ============================================================================
# Failure Screenshots
# ============================================================================

def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    """Save a full-page screenshot of the page a step failed on."""
    if "page" not in request.fixturenames:
        return
    page = request.getfixturevalue("page")
    if page.is_closed():
        return
    settings = request.getfixturevalue("site_settings")
    name = "".join(c if c.isalnum() else "-" for c in scenario.name.lower()).strip("-")
    path = BasePage(page, settings).take_screenshot(f"failed-{name}")
    print(f"⚠ Step '{step.name}' failed, screenshot saved to {path}")
