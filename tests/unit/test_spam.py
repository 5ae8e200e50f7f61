"""Honeypot screening shared by newsletter and job forms."""

import pytest

from abtech.components import newsletter
from abtech.core.spam import is_spam


class TestIsSpam:
    @pytest.mark.parametrize("value", ["bot", 1, True, ["x"], {"a": 1}])
    def test_filled_values(self, value) -> None:
        assert is_spam(value)

    @pytest.mark.parametrize("value", [None, "", "   ", 0, False])
    def test_blank_values(self, value) -> None:
        assert not is_spam(value)

    def test_newsletter_reexports_shared_helper(self) -> None:
        assert newsletter.is_spam is is_spam
