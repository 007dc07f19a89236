"""Unit tests for directive parsing."""

import pytest

from calculagraph.directive import Directive, default_format, parse_directive
from calculagraph.exceptions import InvalidFormatLiteral, InvalidTimeUnit, TooManyArguments
from calculagraph.units import TimeUnit


class TestParseDirective:
    """Tests for parse_directive with runtime values."""

    def test_no_arguments_defaults_to_millis(self) -> None:
        """No arguments gives milliseconds and the default format."""
        assert parse_directive([], "f") == Directive(TimeUnit.MS, "fn:f cost {}ms")

    @pytest.mark.parametrize("unit", list(TimeUnit))
    def test_default_format_per_unit(self, unit: TimeUnit) -> None:
        """One argument gives the default format for that unit."""
        directive = parse_directive([unit], "f")

        assert directive.unit is unit
        assert directive.output_format == "fn:f cost {}" + unit.short_name

    def test_text_unit_token(self) -> None:
        """Unit tokens in text are case-insensitive."""
        assert parse_directive(["US"], "work") == Directive(TimeUnit.US, "fn:work cost {}us")

    def test_custom_format_used_verbatim(self) -> None:
        """A second argument is used as the format as is."""
        directive = parse_directive([TimeUnit.NS, "took {} nanoseconds"], "g")

        assert directive == Directive(TimeUnit.NS, "took {} nanoseconds")

    @pytest.mark.parametrize(
        "args",
        [
            ["ms", "{}", "extra"],
            [1, 2, 3],
            ["nope", None, object(), "x"],
        ],
    )
    def test_three_or_more_arguments_rejected(self, args) -> None:
        """Three or more arguments fail regardless of type."""
        with pytest.raises(TooManyArguments, match=r"usage: \[\(TimeUnit\[, OutputFormatString\]\)\]"):
            parse_directive(args, "f")

    @pytest.mark.parametrize("first", ["minutes", "", 10, None, 1.5])
    def test_bad_first_argument(self, first) -> None:
        """A first argument outside s, ms, us, ns fails."""
        with pytest.raises(InvalidTimeUnit):
            parse_directive([first], "f")

    def test_bad_first_argument_checked_before_format(self) -> None:
        """The unit is checked before the format."""
        with pytest.raises(InvalidTimeUnit):
            parse_directive(["hours", 42], "f")

    @pytest.mark.parametrize("second", [42, None, b"{}", TimeUnit.MS])
    def test_non_text_format_rejected(self, second) -> None:
        """A non-text format fails."""
        with pytest.raises(InvalidFormatLiteral):
            parse_directive(["ms", second], "f")

    def test_location_prefixes_message(self) -> None:
        """The location is kept and prefixed to the message."""
        with pytest.raises(TooManyArguments) as excinfo:
            parse_directive(["a", "b", "c"], "f", location="f (app.py:12)")

        assert excinfo.value.location == "f (app.py:12)"
        assert str(excinfo.value).startswith("f (app.py:12): ")

    def test_placeholder_count_not_validated(self) -> None:
        """Formats without a placeholder are accepted."""
        directive = parse_directive(["ms", "no placeholder here"], "f")

        assert directive.output_format == "no placeholder here"


class TestDirectiveRender:
    """Tests for Directive.render."""

    def test_render_default_format(self) -> None:
        """The default format renders whole milliseconds."""
        directive = Directive(TimeUnit.MS, default_format("main", TimeUnit.MS))

        assert directive.render(10_400_000) == "fn:main cost 10ms"

    def test_render_without_placeholder_is_verbatim(self) -> None:
        """A format without a placeholder renders verbatim."""
        assert Directive(TimeUnit.S, "done").render(3_000_000_000) == "done"

    def test_render_with_format_spec(self) -> None:
        """Format specs apply to the elapsed value."""
        assert Directive(TimeUnit.US, "{:>6}us").render(1_500) == "     1us"

    def test_render_extra_placeholder_fails(self) -> None:
        """A second positional placeholder raises IndexError."""
        with pytest.raises(IndexError):
            Directive(TimeUnit.MS, "{} and {}").render(1)
