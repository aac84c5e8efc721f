import pytest

from profile_audit.core.date_grammar import is_date, is_date_line, month_index, parse_date_range


@pytest.mark.parametrize(
    "line, expected",
    [
        ("Jan 2020 - Present", ("Jan 2020", "Present")),
        ("2018 – 2022", ("2018", "2022")),
        ("2018—2022", ("2018", "2022")),
        ("September 2019 - current", ("September 2019", "Present")),
        ("March 2021 - now (1 year 2 months)", ("March 2021", "Present")),
        ("2020-01-15 - 2021-06-30", ("2020-01-15", "2021-06-30")),
        ("01/02/2019 - 03/04/2020", ("01/02/2019", "03/04/2020")),
        ("(2019 - 2021)", ("2019", "2021")),
        ("2019", ("2019", None)),
        ("Software Engineer", (None, None)),
        ("", (None, None)),
        (None, (None, None)),
    ],
)
def test_parse_date_range(line, expected):
    assert parse_date_range(line) == expected


def test_is_date():
    assert is_date("Jan. 2020")
    assert is_date("PRESENT")
    assert not is_date("Acme Corp")
    assert not is_date("")


def test_is_date_line():
    assert is_date_line("2015 - 2019")
    assert is_date_line("2019")
    assert not is_date_line("Bachelor of Science, Physics")


def test_month_index_numeric_forms():
    assert month_index("2022-03") == 2022 * 12 + 3
    assert month_index("2022") == 2022 * 12
    assert month_index("2022-03-15") == 2022 * 12 + 3


def test_month_index_non_numeric_maps_to_zero():
    """Month names, Present and garbage all sort as 0."""
    assert month_index("Present") == 0
    assert month_index("Jan 2020") == 0
    assert month_index("") == 0
    assert month_index(None) == 0
