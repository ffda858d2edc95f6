"""Robot Framework keyword libraries for the Pinecrest BDD suite.

These libraries mirror the pytest-bdd step definitions in tests/step_defs/
and drive the same page objects from tests/ui_helpers/. Each library uses
the @keyword decorator to map clean Python function names to scenario step
text.

Libraries:
    SiteKeywords: Browser lifecycle, page navigation, titles and monitoring
    CartKeywords: Cart contents, coupons and checkout
    ContactKeywords: Contact details and the contact form

Usage:
    robot --pythonpath . robot/tests

    *** Settings ***
    Library    ../libraries/site_keywords.py
    Library    ../libraries/cart_keywords.py

    *** Test Cases ***
    Example Test
        ${page}=    Open browser to site
        Add products to cart    ${page}    1
        Cart item count should be    ${page}    1
"""
