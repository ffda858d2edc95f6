"""Contact Keywords for Robot Framework.

Keywords for the contact details and the contact form, aligned with BDD
scenario steps. Every keyword takes the page returned by
``Open browser to site``.

Mirrors: tests/step_defs/contact_steps.py
"""

from playwright.sync_api import Page
from robot.api.deco import keyword, library

from tests.step_defs.contact_steps import DEFAULT_SUBJECT, keyboard_tab_order
from tests.ui_helpers.contact_page import ContactPage
from tests.ui_helpers.site_config import SiteSettings


@library(scope="SUITE", doc_format="TEXT")
class ContactKeywords:
    """Keywords for the contact page matching BDD scenario steps."""

    def __init__(self) -> None:
        """Initialize ContactKeywords."""
        self.settings = SiteSettings.from_env()

    def _contact(self, page: Page) -> ContactPage:
        return ContactPage(page, self.settings)

    @keyword("Open contact page")
    def open_contact_page(self, page: Page) -> None:
        """Open the contact page and confirm its title."""
        contact = self._contact(page)
        contact.navigate_to_contact()
        contact.verify_page_title()

    @keyword("I am on the Contact page")
    def on_contact_page(self, page: Page) -> None:
        """Maps to scenario step: "Given I am on the Contact page"."""
        self.open_contact_page(page)

    @keyword("Contact information should be visible")
    def contact_information_should_be_visible(self, page: Page) -> None:
        """Maps to scenario step: "Then I should see the contact information section"."""
        self._contact(page).verify_contact_information()

    @keyword("Contact form should be complete")
    def contact_form_should_be_complete(self, page: Page) -> None:
        """Form, required fields and an enabled submit button are shown."""
        self._contact(page).verify_contact_form()

    @keyword("Contact page should be complete")
    def contact_page_should_be_complete(self, page: Page) -> None:
        """Heading, contact details, form and social links are all shown."""
        self._contact(page).verify_all_contact_elements()

    @keyword("Fill contact form")
    def fill_contact_form(self, page: Page, **fields: str) -> None:
        """Fill the form; a subject is always chosen.

        Maps to scenario step:
        - "When I fill out the contact form with valid information:"

        Arguments:
            page: Page returned by Open browser to site
            fields: first_name, last_name (or name), email, phone, subject, message
        """
        fields.setdefault("subject", DEFAULT_SUBJECT)
        self._contact(page).fill_contact_form(fields)

    @keyword("Submit contact form")
    def submit_contact_form(self, page: Page) -> None:
        self._contact(page).submit_contact_form()

    @keyword("Send contact form")
    def send_contact_form(self, page: Page, **fields: str) -> None:
        """Fill the form and submit it in one go.

        Arguments:
            page: Page returned by Open browser to site
            fields: Same names as Fill contact form
        """
        fields.setdefault("subject", DEFAULT_SUBJECT)
        self._contact(page).fill_and_submit_contact_form(fields)

    @keyword("Contact form should show success")
    def contact_form_should_show_success(self, page: Page) -> None:
        self._contact(page).verify_form_submission_success()

    @keyword("Contact form should show validation errors")
    def contact_form_should_show_validation_errors(self, page: Page) -> None:
        self._contact(page).verify_form_validation_errors()

    @keyword("Contact form should be keyboard accessible")
    def contact_form_should_be_keyboard_accessible(self, page: Page) -> None:
        """Tab walks through the form fields in order and ends on submit."""
        keyboard_tab_order(self._contact(page))
