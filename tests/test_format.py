"""Tests for formatting values with format programs."""

from datetime import date, datetime, timedelta, timezone

import pytest
from dateutil import tz

import chronoform
from chronoform.core.directive import Directive, Kind
from chronoform.core.program import FormatProgram
from chronoform.errors import FormatError


@pytest.fixture
def sample(utc):
    return datetime(2024, 1, 15, 14, 30, 45, tzinfo=utc)


class TestCompoundFormats:
    """Tests for the named compound formats."""

    def test_iso_z_epoch(self, epoch):
        """The epoch in ISO Zulu form."""
        assert chronoform.format(epoch, "{ISOz}") == "1970-01-01T00:00:00Z"

    def test_strftime_iso_epoch(self, epoch):
        """%F and %T render the same text as the ISO Zulu format."""
        assert chronoform.format(epoch, "%FT%TZ", syntax="strftime") == "1970-01-01T00:00:00Z"

    def test_iso_with_offset(self, epoch):
        """The ISO format ends with a +HHMM offset."""
        assert chronoform.format(epoch, "{ISO}") == "1970-01-01T00:00:00+0000"

    def test_rfc1123(self, sample):
        """RFC 1123 with a zone name."""
        assert chronoform.format(sample, "{RFC1123}") == "Mon, 15 Jan 2024 14:30:45 UTC"

    def test_rfc3339_offset(self):
        """RFC 3339 uses a colon in the offset."""
        value = datetime(2024, 1, 15, 10, 30, tzinfo=tz.tzoffset(None, -5 * 3600))
        assert chronoform.format(value, "{RFC3339}") == "2024-01-15T10:30:00-05:00"

    def test_ansic_space_padded_day(self, utc):
        """ANSIC pads single digit days with a space."""
        value = datetime(2006, 1, 2, 15, 4, 5, tzinfo=utc)
        assert chronoform.format(value, "{ANSIC}") == "Mon Jan  2 15:04:05 2006"

    def test_kitchen(self, utc):
        """The kitchen clock format."""
        assert chronoform.format(datetime(2024, 1, 1, 15, 4, tzinfo=utc), "{kitchen}") == "3:04PM"
        assert chronoform.format(datetime(2024, 1, 1, 0, 0, tzinfo=utc), "{kitchen}") == "12:00AM"

    def test_iso_week_date(self, utc):
        """ISO week dates use the ISO year."""
        value = datetime(2024, 12, 30, tzinfo=utc)
        assert chronoform.format(value, "{ISOweek-day}") == "2025-W01-1"

    def test_ordinal_date(self):
        """Ordinal dates pad the day of year to three digits."""
        assert chronoform.format(date(2024, 2, 29), "{ISOord}") == "2024-060"


class TestZulu:
    """Tests for zulu compounds."""

    def test_converted_to_utc(self):
        """Zulu formats render the instant in UTC."""
        value = datetime(2024, 1, 15, 10, 0, tzinfo=tz.tzoffset(None, 3600))
        assert chronoform.format(value, "{ISOz}") == "2024-01-15T09:00:00Z"

    def test_value_not_modified(self):
        """The caller's value keeps its zone."""
        zone = tz.tzoffset(None, 3600)
        value = datetime(2024, 1, 15, 10, 0, tzinfo=zone)
        chronoform.format(value, "{RFC822z}")
        assert value.tzinfo is zone
        assert value.hour == 10

    def test_rfc822z(self):
        """RFC 822 Zulu ends with UT."""
        value = datetime(2024, 1, 15, 10, 0, tzinfo=tz.tzoffset(None, 3600))
        assert chronoform.format(value, "{RFC822z}") == "Mon, 15 Jan 24 09:00:00 UT"

    def test_naive_is_utc(self):
        """Naive datetimes are taken to be UTC."""
        assert chronoform.format(datetime(1970, 1, 2), "{s-epoch} {Z}") == "86400 +0000"


class TestPadding:
    """Tests for padding rules."""

    def test_strftime_year_zero_padded(self):
        """%Y pads to four digits."""
        assert chronoform.format(date(5, 1, 1), "%Y", syntax="strftime") == "0005"

    def test_unpadded_flag(self):
        """%-d drops padding."""
        assert chronoform.format(date(2024, 1, 5), "%-d", syntax="strftime") == "5"

    def test_space_padded_day(self):
        """%e pads with a space."""
        assert chronoform.format(date(2024, 1, 5), "%e", syntax="strftime") == " 5"

    def test_explicit_width(self):
        """%6Y widens the field."""
        assert chronoform.format(date(2024, 1, 5), "%6Y", syntax="strftime") == "002024"

    def test_padding_capped_at_max_width(self):
        """Padding never exceeds the directive's maximum width."""
        assert chronoform.format(date(2024, 1, 5), "{0000000M}") == "01"

    def test_long_value_not_truncated(self):
        """Values wider than the padded width are kept whole."""
        assert chronoform.format(date(2024, 1, 15), "{0D}") == "15"

    def test_two_digit_year(self):
        """YY renders the last two digits."""
        assert chronoform.format(date(2005, 3, 1), "{0YY}") == "05"

    def test_default_syntax_unpadded(self):
        """Default syntax directives are unpadded unless marked."""
        assert chronoform.format(date(2024, 1, 5), "{M}/{D}") == "1/5"

    def test_zone_offset_space_padding(self, sample):
        """Offsets can only be zero padded."""
        with pytest.raises(FormatError, match="only be zero padded"):
            chronoform.format(sample, "{_Z}")

    def test_zone_offset_zero_padding_allowed(self, sample):
        """Zero padding an offset leaves it unchanged."""
        assert chronoform.format(sample, "{0Z}") == "+0000"

    def test_epoch_padding(self, sample):
        """Epoch seconds cannot be padded."""
        with pytest.raises(FormatError, match="cannot be padded"):
            chronoform.format(sample, "{0s-epoch}")

    def test_epoch_unpadded_flag_allowed(self, epoch):
        """%-s asks for no padding, which is allowed."""
        assert chronoform.format(epoch, "%-s", syntax="strftime") == "0"


class TestFields:
    """Tests for individual field renderers."""

    def test_fraction_omitted_when_zero(self, sample):
        """Whole seconds have no fraction."""
        assert chronoform.format(sample, "{ss}") == ""

    def test_fraction_milliseconds(self, utc):
        """Whole milliseconds render three digits."""
        value = datetime(2024, 1, 1, 0, 0, 0, 123_000, tzinfo=utc)
        assert chronoform.format(value, "{ISOtime}") == "00:00:00.123"

    def test_fraction_microseconds(self, utc):
        """Other fractions render six digits."""
        value = datetime(2024, 1, 1, 0, 0, 0, 123_456, tzinfo=utc)
        assert chronoform.format(value, "{ISOtime}") == "00:00:00.123456"

    def test_microseconds_padded(self, utc):
        """%f pads to six digits."""
        value = datetime(2024, 1, 1, 0, 0, 0, 123, tzinfo=utc)
        assert chronoform.format(value, "%f", syntax="strftime") == "000123"

    def test_week_numbers(self):
        """%U and %W differ before the first Sunday."""
        assert chronoform.format(date(2024, 1, 6), "%U %W", syntax="strftime") == "00 01"

    def test_century(self):
        """%C is the century."""
        assert chronoform.format(date(2024, 1, 1), "%C", syntax="strftime") == "20"

    def test_names(self):
        """Month and weekday names are English."""
        result = chronoform.format(date(2024, 9, 1), "{WDfull} {Mfull} {WDshort} {Mshort}")
        assert result == "Sunday September Sun Sep"

    def test_weekday_numbers(self):
        """Monday-first and Sunday-first weekday numbers."""
        assert chronoform.format(date(2024, 9, 1), "{WDmon} {WDsun}") == "7 0"

    def test_zone_name_iana(self):
        """IANA zones render an abbreviation that reads back."""
        value = datetime(2024, 7, 1, tzinfo=tz.gettz("America/New_York"))
        assert chronoform.format(value, "{Zname}") == "EDT"

    def test_zone_name_unresolvable(self):
        """Names that do not read back render as an offset."""
        value = datetime(2024, 7, 1, tzinfo=tz.tzoffset("XYZ", 3600))
        assert chronoform.format(value, "{Zname}") == "+01:00"

    def test_zone_name_stdlib_offset(self):
        """Standard library offsets render something the parser reads back."""
        value = datetime(2024, 1, 15, 14, 30, tzinfo=timezone(timedelta(hours=5)))
        text = chronoform.format(value, "{RFC1123}")
        parsed = chronoform.parse(text, "{RFC1123}")
        assert parsed == value
        assert parsed.utcoffset() == timedelta(hours=5)

    def test_offset_with_seconds(self, sample):
        """Z:: renders seconds."""
        assert chronoform.format(sample, "{Z::}") == "+00:00:00"

    @pytest.mark.parametrize(
        "fmt",
        ["%Y-%m-%d %H:%M:%S", "%j %a %b %A %B", "%I %p %y", "%U %W %u %w"],
    )
    def test_matches_builtin_strftime(self, fmt):
        """Common directives agree with datetime.strftime."""
        value = datetime(2024, 3, 9, 7, 5, 3)
        assert chronoform.format(value, fmt, syntax="strftime") == value.strftime(fmt)


class TestErrors:
    """Tests for formatting failures."""

    def test_date_with_time_token(self):
        """Time directives need a datetime."""
        with pytest.raises(FormatError, match="no time of day"):
            chronoform.format(date(2024, 1, 15), "{h24}")

    def test_date_with_zone_token(self):
        """Zone directives need a datetime."""
        with pytest.raises(FormatError):
            chronoform.format(date(2024, 1, 15), "{ISOdate}{Z}")

    def test_non_date_value(self):
        """Values must be dates or datetimes."""
        with pytest.raises(TypeError):
            chronoform.format("2024-01-15", "{YYYY}")

    def test_custom_token_without_render(self, sample):
        """Custom tokens need the syntax's render callback."""
        program = FormatProgram((Directive(token="mystery", kind=Kind.CUSTOM),), "default", "<test>")
        with pytest.raises(FormatError, match="cannot be formatted"):
            chronoform.format(sample, program)


class TestRoundTrip:
    """Tests that formatted text parses back."""

    @pytest.mark.parametrize(
        "fmt",
        ["{ISOz}", "{ISO}", "{RFC3339}", "{RFC1123}", "{ASN1:GeneralizedTime:TZ}", "{UNIX}"],
    )
    def test_parse_back(self, sample, fmt):
        """parse(format(v)) gives back v."""
        assert chronoform.parse(chronoform.format(sample, fmt), fmt) == sample


_ROUND_TRIP_VALUES = (
    # A Sunday at midnight
    datetime(2023, 1, 1, 0, 0, 0, tzinfo=tz.tzutc()),
    # The last day of a leap year, in ISO week 1 of the next year
    datetime(2024, 12, 31, 23, 59, 59, 123_000, tzinfo=tz.tzoffset(None, 19800)),
    # ISO week 53
    datetime(2020, 12, 31, 12, 5, 9, 250, tzinfo=timezone(timedelta(hours=-3))),
)

_DEFAULT_FIELDS = (
    "{YYYY}", "{YY}", "{C}", "{WYYYY}", "{WYY}",
    "{M}", "{Mshort}", "{Mfull}", "{D}", "{YYYY} {Dord}",
    "{WYYYY} {Wiso}", "{WYY} {Wiso}", "{YYYY} {Wmon}", "{YYYY} {Wsun}",
    "{WDmon}", "{WDsun}", "{WDshort}", "{WDfull}",
    "{h24}", "{h12}", "{m}", "{s}", "{s-epoch}", "{am}", "{AM}",
    "{Z}", "{Z:}", "{Z::}", "{Zname}",
)

_STRFTIME_FIELDS = (
    "%Y", "%y", "%C", "%G", "%g", "%m", "%B", "%b", "%h", "%d", "%e",
    "%Y %j", "%G %V", "%Y %W", "%Y %U", "%u", "%w", "%a", "%A",
    "%H", "%k", "%I", "%l", "%M", "%S", "%L", "%f", "%s", "%P", "%p",
    "%Z", "%z", "%:z", "%::z", "%D", "%F", "%R", "%T", "%r", "%v",
)


class TestFieldRoundTrip:
    """Tests that every field reads back the text it was written as."""

    @pytest.mark.parametrize("value", _ROUND_TRIP_VALUES)
    @pytest.mark.parametrize("fmt", _DEFAULT_FIELDS)
    def test_default_syntax(self, fmt, value):
        """format(parse(format(v))) is format(v) for brace directives."""
        text = chronoform.format(value, fmt)
        assert chronoform.format(chronoform.parse(text, fmt), fmt) == text

    @pytest.mark.parametrize("value", _ROUND_TRIP_VALUES)
    @pytest.mark.parametrize("fmt", _STRFTIME_FIELDS)
    def test_strftime_syntax(self, fmt, value):
        """format(parse(format(v))) is format(v) for strftime letters."""
        text = chronoform.format(value, fmt, syntax="strftime")
        parsed = chronoform.parse(text, fmt, syntax="strftime")
        assert chronoform.format(parsed, fmt, syntax="strftime") == text

    @pytest.mark.parametrize("value", _ROUND_TRIP_VALUES)
    def test_zone_name_keeps_instant(self, value):
        """A rendered zone name reads back as the same offset."""
        text = chronoform.format(value, "{RFC1123}")
        parsed = chronoform.parse(text, "{RFC1123}")
        assert parsed == value
        assert parsed.utcoffset() == value.utcoffset()
