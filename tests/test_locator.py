"""Unit tests for the element locator."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error, TimeoutError

from navbot.browser.errors import ElementNotFound, InvalidLocator, ValidationError
from navbot.browser.locator import find_element, resolve_target, text_query, xpath_literal


class TestXPathLiteral:
    """Tests for XPath string quoting."""

    def test_plain_text_uses_single_quotes(self) -> None:
        assert xpath_literal("Sign in") == "'Sign in'"

    def test_apostrophe_switches_to_double_quotes(self) -> None:
        assert xpath_literal("Don't") == '"Don\'t"'

    def test_both_quotes_use_concat(self) -> None:
        """Test text mixing quote styles cannot break out of the literal."""
        assert xpath_literal("it's \"x\"") == "concat('it', \"'\", 's \"x\"')"

    def test_leading_apostrophe(self) -> None:
        assert xpath_literal("'a\"") == "concat(\"'\", 'a\"')"


class TestResolveTarget:
    """Tests for choosing the addressing strategy."""

    def test_selector_wins(self) -> None:
        """Test the selector is used when both hints are given."""
        target = resolve_target("#submit", "Submit")

        assert target.strategy == "selector"
        assert target.query == "#submit"

    def test_text_builds_xpath(self) -> None:
        target = resolve_target(text="Sign in")

        assert target.strategy == "text"
        assert target.query == "xpath=//*[contains(text(), 'Sign in')]"
        assert target.query == text_query("Sign in")

    def test_neither_is_rejected(self) -> None:
        """Test a missing hint is a validation failure."""
        with pytest.raises(ValidationError, match="Must provide selector or text"):
            resolve_target()


class TestFindElement:
    """Tests for element lookup against a stub page."""

    def test_returns_attached_element(self) -> None:
        page = MagicMock()
        element = MagicMock()
        page.wait_for_selector.return_value = element

        assert find_element(page, resolve_target("#go"), timeout_ms=100) is element
        page.wait_for_selector.assert_called_once_with("#go", state="attached", timeout=100)

    def test_timeout_means_not_found(self) -> None:
        page = MagicMock()
        page.wait_for_selector.side_effect = TimeoutError("Timeout 30000ms exceeded.")

        with pytest.raises(ElementNotFound, match="Timeout"):
            find_element(page, resolve_target("#missing"))

    def test_driver_error_means_invalid(self) -> None:
        page = MagicMock()
        page.wait_for_selector.side_effect = Error("Unexpected token")

        with pytest.raises(InvalidLocator, match="Unexpected token"):
            find_element(page, resolve_target("div[["))

    def test_none_means_not_found(self) -> None:
        page = MagicMock()
        page.wait_for_selector.return_value = None

        with pytest.raises(ElementNotFound):
            find_element(page, resolve_target(text="Nope"))
