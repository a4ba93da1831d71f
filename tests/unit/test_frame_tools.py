import pytest

from bottomup.frame_tools import ANONYMOUS_FUNCTION_NAME
from bottomup.frame_tools import CallSite
from bottomup.frame_tools import call_site_for
from bottomup.frame_tools import is_native_url


class TestCallSite:
    def test_call_sites_with_equal_fields_are_equal(self):
        # GIVEN
        first = call_site_for("fib", "12", 3)
        second = call_site_for("fib", "12", 3)

        # WHEN / THEN
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    @pytest.mark.parametrize(
        "other",
        [
            ("fibonacci", "12", 3),
            ("fib", "13", 3),
            ("fib", "12", 4),
        ],
    )
    def test_call_sites_differing_in_one_field_are_different(self, other):
        # GIVEN/WHEN/THEN
        assert call_site_for("fib", "12", 3) != call_site_for(*other)

    def test_separator_characters_do_not_collide(self):
        # GIVEN
        first = call_site_for("a@1", "2", 3)
        second = call_site_for("a", "1@2", 3)

        # WHEN / THEN
        assert str(first) == "a@1@2:3"
        assert str(second) == "a@1@2:3"
        assert first != second

    def test_anonymous_functions_get_a_placeholder_name(self):
        # GIVEN/WHEN
        call_site = call_site_for("", "7", 10)

        # THEN
        assert call_site == CallSite(ANONYMOUS_FUNCTION_NAME, "7", 10)
        assert call_site.function_name == "(anonymous function)"


class TestNativeFrames:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ["native array.js", True],
            ["native v8natives.js", True],
            ["", False],
            ["file:///home/user/app.js", False],
            ["nativescript.js", False],
            ["/src/native array.js", False],
        ],
    )
    def test_is_native_url(self, url, expected):
        # GIVEN/WHEN/THEN
        assert is_native_url(url) is expected
