from app.utils import (
    coerce_float,
    coerce_int,
    extract_year,
    format_release_date,
    format_runtime,
)


def test_extract_year():
    assert extract_year("2008-07-18") == 2008
    assert extract_year("") is None
    assert extract_year(None) is None
    assert extract_year("unknown") is None


def test_format_runtime():
    assert format_runtime(142) == "2h 22m"
    assert format_runtime(45) == "45m"
    assert format_runtime(None) == "N/A"


def test_format_release_date():
    assert format_release_date("2008-07-18") == "July 18, 2008"
    assert format_release_date(None) == "N/A"
    assert format_release_date("someday") == "N/A"


def test_coercion_helpers():
    assert coerce_int("12") == 12
    assert coerce_int(3.5) is None
    assert coerce_int(True) is None
    assert coerce_float("7.5") == 7.5
    assert coerce_float("nan") is None
