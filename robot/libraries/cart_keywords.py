"""Cart Keywords for Robot Framework.

Keywords for cart contents, coupons and checkout, aligned with BDD scenario
steps. Every keyword takes the page returned by ``Open browser to site``.

Mirrors: tests/step_defs/cart_steps.py
"""

from typing import List

from playwright.sync_api import Page
from robot.api.deco import keyword, library

from tests.step_defs.cart_steps import cart_total_is
from tests.step_defs.helpers import parse_amount
from tests.ui_helpers.cart_page import DEFAULT_BILLING, BillingDetails, CartPage
from tests.ui_helpers.site_config import SiteSettings


@library(scope="SUITE", doc_format="TEXT")
class CartKeywords:
    """Keywords for the shopping cart matching BDD scenario steps."""

    def __init__(self) -> None:
        """Initialize CartKeywords."""
        self.settings = SiteSettings.from_env()
        self._total_before_coupon: str = ""

    def _cart(self, page: Page) -> CartPage:
        return CartPage(page, self.settings)

    # =========================================================================
    # Cart Setup Keywords
    # =========================================================================

    @keyword("Clear the cart")
    def clear_the_cart(self, page: Page) -> None:
        """Remove every line item."""
        self._cart(page).clear_cart()

    @keyword("Add products to cart")
    def add_products_to_cart(self, page: Page, count: int = 1) -> List[str]:
        """Add simple products by their add-to-cart links.

        Maps to scenario step:
        - "Given I have multiple items in my cart" (count 2)

        Arguments:
            page: Page returned by Open browser to site
            count: Number of products to add

        Returns:
            The add-to-cart URLs that were followed
        """
        added = self._cart(page).add_simple_products(int(count))
        print(f"✓ Added {len(added)} product(s)")
        return added

    @keyword("I have items in my cart")
    def have_items_in_cart(self, page: Page) -> List[str]:
        """Maps to scenario step: "Given I have items in my cart"."""
        return self.add_products_to_cart(page)

    @keyword("Set up cart with items")
    def set_up_cart_with_items(self, page: Page) -> None:
        """Empty the cart, then add one product.

        Falls back to the first listed product when the shop has no simple
        products with add-to-cart links.
        """
        self._cart(page).setup_cart_with_items()

    @keyword("I navigate to the cart page")
    def navigate_to_cart(self, page: Page) -> None:
        self._cart(page).navigate_to_cart()

    # =========================================================================
    # Cart Verification Keywords
    # =========================================================================

    @keyword("Cart item count should be")
    def cart_item_count_should_be(self, page: Page, count: int) -> None:
        """Maps to scenario step: "Then I should see 1 item in the cart"."""
        cart = self._cart(page)
        cart.navigate_to_cart()
        actual = cart.get_cart_item_count()
        if actual != int(count):
            raise AssertionError(f"Expected {count} cart item(s), found {actual}")

    @keyword("Cart total should be")
    def cart_total_should_be(self, page: Page, expected_total: str) -> None:
        """Maps to scenario step: 'Then the cart total should be "$0.00"'."""
        cart_total_is(self._cart(page), expected_total)

    @keyword("Get cart total")
    def get_cart_total(self, page: Page) -> str:
        return self._cart(page).get_cart_total()

    @keyword("Cart should be empty")
    def cart_should_be_empty(self, page: Page) -> None:
        if not self._cart(page).is_cart_empty():
            raise AssertionError("Cart is not empty")

    @keyword("Cart should contain item")
    def cart_should_contain_item(self, page: Page, product_name: str) -> None:
        """Fail unless a cart row mentions ``product_name``."""
        if not self._cart(page).verify_cart_contains_item(product_name):
            raise AssertionError(f"Cart does not contain '{product_name}'")

    @keyword("Continue shopping")
    def continue_shopping(self, page: Page) -> None:
        self._cart(page).continue_shopping()

    # =========================================================================
    # Coupon Keywords
    # =========================================================================

    @keyword("Apply coupon")
    def apply_coupon(self, page: Page, coupon_code: str) -> None:
        """Remember the total, then apply a coupon code.

        Maps to scenario steps:
        - 'When I enter an invalid coupon code "INVALID123"'
        - "And I apply the coupon"
        """
        cart = self._cart(page)
        self._total_before_coupon = cart.get_cart_total()
        cart.apply_coupon(coupon_code)

    @keyword("Coupon should be rejected")
    def coupon_should_be_rejected(self, page: Page) -> None:
        """The store shows a coupon error and the total did not move."""
        cart = self._cart(page)
        if not cart.is_visible_safely(cart.coupon_error, timeout=5000):
            raise AssertionError("No coupon error shown")
        total = cart.get_cart_total()
        if self._total_before_coupon and parse_amount(total) != parse_amount(
            self._total_before_coupon
        ):
            raise AssertionError(f"Total changed from {self._total_before_coupon} to {total}")

    # =========================================================================
    # Checkout Keywords
    # =========================================================================

    @keyword("Proceed to checkout")
    def proceed_to_checkout(self, page: Page) -> None:
        self._cart(page).proceed_to_checkout()

    @keyword("I proceed to checkout")
    def proceed_to_checkout_step(self, page: Page) -> None:
        """Maps to scenario step: "When I proceed to checkout"."""
        self.proceed_to_checkout(page)

    @keyword("Fill billing information")
    def fill_billing_information(self, page: Page, **fields: str) -> None:
        """Fill the billing form.

        Without named arguments the complete default test customer is used.

        Arguments:
            page: Page returned by Open browser to site
            fields: first_name, last_name, email, phone, address, city, state, zip_code
        """
        billing = BillingDetails(**fields) if fields else DEFAULT_BILLING
        self._cart(page).fill_billing_information(billing)

    @keyword("Payment options should be visible")
    def payment_options_should_be_visible(self, page: Page) -> None:
        if not self._cart(page).are_payment_methods_visible():
            raise AssertionError("No payment methods shown on checkout")
