"""Site Keywords for Robot Framework.

Owns the Playwright browser for a suite and provides navigation, title and
page health keywords. The page returned by ``Open browser to site`` is
passed to the cart and contact keyword libraries.

Mirrors: tests/step_defs/common_steps.py, homepage_steps.py
"""

import re
from typing import Dict, Optional, Type

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, expect, sync_playwright
from robot.api.deco import keyword, library

from tests.step_defs.common_steps import (
    no_console_errors,
    no_critical_network_failures,
    no_failed_network_requests,
)
from tests.ui_helpers.about_page import AboutPage
from tests.ui_helpers.base_page import BasePage
from tests.ui_helpers.cart_page import CartPage
from tests.ui_helpers.contact_page import ContactPage
from tests.ui_helpers.gallery_page import GalleryPage
from tests.ui_helpers.home_page import HomePage
from tests.ui_helpers.installations_page import InstallationsPage
from tests.ui_helpers.page_monitor import PageMonitor
from tests.ui_helpers.products_page import ProductsPage
from tests.ui_helpers.site_config import PINECREST_CONFIG, VIEWPORTS, SiteSettings, get_page_title

PAGE_OBJECTS: Dict[str, Type[BasePage]] = {
    "HOME": HomePage,
    "ABOUT": AboutPage,
    "PRODUCTS": ProductsPage,
    "INSTALLATIONS": InstallationsPage,
    "GALLERY": GalleryPage,
    "CONTACT": ContactPage,
    "CART": CartPage,
}


@library(scope="SUITE", doc_format="TEXT")
class SiteKeywords:
    """Keywords for the browser session and site-wide checks."""

    def __init__(self, base_url: Optional[str] = None, browser: Optional[str] = None) -> None:
        """Initialize SiteKeywords.

        Arguments:
            base_url: Deployment to test, overrides BASE_URL
            browser: chromium, firefox or webkit, overrides BROWSER
        """
        self.settings = SiteSettings.from_env({"base_url": base_url, "browser_name": browser})
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self._monitor: Optional[PageMonitor] = None

    # =========================================================================
    # Browser Lifecycle Keywords
    # =========================================================================

    @keyword("Open browser to site")
    def open_browser_to_site(self) -> Page:
        """Launch the browser, open the site root and start monitoring.

        Maps to scenario step:
        - "Given I am on the Pinecrest Home Goods website"

        Returns:
            The Playwright page, for the other keyword libraries
        """
        if self._page is None:
            self._playwright = sync_playwright().start()
            launcher = getattr(self._playwright, self.settings.browser_name)
            self._browser = launcher.launch(
                headless=self.settings.headless, slow_mo=self.settings.slow_mo
            )
            self._context = self._browser.new_context(
                base_url=self.settings.base_url, viewport=VIEWPORTS["default"], accept_downloads=True
            )
            self._page = self._context.new_page()
            self._monitor = PageMonitor(self._page)
        self._monitor.reset()
        self._page.goto(self.settings.base_url, wait_until="domcontentloaded")
        print(f"✓ Opened {self.settings.base_url} in {self.settings.browser_name}")
        return self._page

    @keyword("I am on the Pinecrest Home Goods website")
    def on_pinecrest_website(self) -> Page:
        """Maps to scenario step: "Given I am on the Pinecrest Home Goods website"."""
        return self.open_browser_to_site()

    @keyword("Close site browser")
    def close_site_browser(self) -> None:
        """Close the context and browser and stop Playwright."""
        if self._context is not None:
            self._context.close()
        if self._browser is not None:
            self._browser.close()
        if self._playwright is not None:
            self._playwright.stop()
        self._playwright = self._browser = self._context = self._page = None
        self._monitor = None

    @keyword("Get page")
    def get_page(self) -> Page:
        """Return the open page.

        Raises:
            RuntimeError: If no browser has been opened yet
        """
        if self._page is None:
            raise RuntimeError("No browser open, call 'Open browser to site' first")
        return self._page

    # =========================================================================
    # Navigation Keywords
    # =========================================================================

    @keyword("Go to site page")
    def go_to_site_page(self, page_key: str) -> BasePage:
        """Open one of the named site pages.

        Maps to scenario steps:
        - "When I navigate to the Contact page"
        - "When I navigate to the Gallery page"

        Arguments:
            page_key: HOME, ABOUT, PRODUCTS, INSTALLATIONS, GALLERY, CONTACT or CART

        Returns:
            The page object for that page
        """
        key = page_key.upper()
        if key not in PAGE_OBJECTS:
            raise ValueError(f"Unknown page '{page_key}'. Choose one of: {', '.join(PAGE_OBJECTS)}")
        page_object = PAGE_OBJECTS[key](self.get_page(), self.settings)
        self._monitor.reset()
        page_object.goto(wait_until="domcontentloaded")
        return page_object

    @keyword("I navigate to the ${page_key} page")
    def navigate_to_named_page(self, page_key: str) -> BasePage:
        """Maps to scenario steps such as "When I navigate to the Gallery page"."""
        return self.go_to_site_page(page_key)

    @keyword("Set viewport")
    def set_viewport(self, viewport: str) -> None:
        """Resize the page to a named viewport (mobile, tablet, desktop, default)."""
        self.get_page().set_viewport_size(VIEWPORTS[viewport.lower()])

    # =========================================================================
    # Verification Keywords
    # =========================================================================

    @keyword("Page title should be")
    def page_title_should_be(self, expected_title: str) -> None:
        expect(self.get_page()).to_have_title(expected_title)

    @keyword("Page title should match")
    def page_title_should_match(self, title_pattern: str) -> None:
        expect(self.get_page()).to_have_title(re.compile(title_pattern))

    @keyword("Page title should be correct for")
    def page_title_correct_for(self, page_key: str) -> None:
        """Compare the title with the configured title of a named page."""
        self.page_title_should_be(get_page_title(page_key))

    @keyword("URL should contain")
    def url_should_contain(self, fragment: str) -> None:
        BasePage(self.get_page(), self.settings).verify_url_contains(fragment)

    @keyword("There should be no console errors")
    def there_should_be_no_console_errors(self) -> None:
        """Maps to scenario step: "Then there should be no console errors"."""
        no_console_errors(self._monitor)

    @keyword("There should be no critical network failures")
    def there_should_be_no_critical_network_failures(self) -> None:
        no_critical_network_failures(self._monitor)

    @keyword("There should be no failed network requests")
    def there_should_be_no_failed_network_requests(self) -> None:
        no_failed_network_requests(self._monitor)

    @keyword("Page load time should be under")
    def page_load_time_should_be_under(self, milliseconds: int) -> float:
        """Fail if the last navigation took longer than ``milliseconds``.

        Returns:
            The measured load time in milliseconds
        """
        metrics = BasePage(self.get_page(), self.settings).get_performance_metrics()
        load_time = metrics["load_time"]
        if load_time > int(milliseconds):
            raise AssertionError(f"Page took {load_time:.0f}ms to load, limit is {milliseconds}ms")
        print(f"✓ Page loaded in {load_time:.0f}ms")
        return load_time

    @keyword("Page title length should be within SEO limits")
    def page_title_length_within_seo_limits(self) -> int:
        """Fail unless the document title length is in the configured range.

        Returns:
            The title length in characters
        """
        limits = PINECREST_CONFIG["seo"]
        title = self.get_page().title()
        if not limits["TITLE_MIN_LENGTH"] <= len(title) <= limits["TITLE_MAX_LENGTH"]:
            raise AssertionError(
                f"Title {title!r} is {len(title)} characters, expected "
                f"{limits['TITLE_MIN_LENGTH']} to {limits['TITLE_MAX_LENGTH']}"
            )
        return len(title)

    @keyword("Meta description length should be within SEO limits")
    def meta_description_length_within_seo_limits(self) -> int:
        """Fail unless the meta description exists with a length in the configured range."""
        limits = PINECREST_CONFIG["seo"]
        description = self.get_page().locator('meta[name="description"]').first
        content = (description.get_attribute("content") or "").strip()
        low = limits["META_DESCRIPTION_MIN_LENGTH"]
        high = limits["META_DESCRIPTION_MAX_LENGTH"]
        if not low <= len(content) <= high:
            raise AssertionError(
                f"Meta description is {len(content)} characters, expected {low} to {high}"
            )
        return len(content)

    # =========================================================================
    # Page Content Keywords
    # =========================================================================

    @keyword("Homepage should be fully loaded")
    def homepage_should_be_fully_loaded(self) -> None:
        """Every homepage section from header to footer is rendered."""
        HomePage(self.get_page(), self.settings).verify_home_page_loaded()

    @keyword("Open customer photo")
    def open_customer_photo(self, photo_index: int = 0) -> None:
        HomePage(self.get_page(), self.settings).click_customer_photo(int(photo_index))

    @keyword("Products page should be complete")
    def products_page_should_be_complete(self) -> None:
        """Heading, breadcrumbs, grid, featured products, prices and buttons."""
        ProductsPage(self.get_page(), self.settings).verify_all_products_elements()

    @keyword("Go to gallery via menu")
    def go_to_gallery_via_menu(self) -> None:
        GalleryPage(self.get_page(), self.settings).navigate_to_gallery_via_link()

    @keyword("Show installation videos")
    def show_installation_videos(self) -> bool:
        """Open the installations guide if needed and press the videos button.

        Raises:
            AssertionError: If the browser is not on the Pinecrest site

        Returns:
            Whether any embedded video is present
        """
        installations = InstallationsPage(self.get_page(), self.settings)
        installations.ensure_on_installations_page()
        installations.click_see_videos_button()
        return installations.videos_present()

    # =========================================================================
    # Diagnostics Keywords
    # =========================================================================

    @keyword("Take site screenshot")
    def take_site_screenshot(self, name: str = "robot") -> str:
        """Save a full-page screenshot and return its path."""
        path = BasePage(self.get_page(), self.settings).take_screenshot(name)
        print(f"✓ Screenshot saved to {path}")
        return str(path)

    @keyword("I take a screenshot")
    def take_screenshot_step(self) -> str:
        """Maps to scenario step: "And I take a screenshot"."""
        return self.take_site_screenshot()
