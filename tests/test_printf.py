import pytest

from dokit.printf import check_printf


@pytest.mark.parametrize(
    ("format_string", "want_ok", "want_arg_num"),
    [
        ("I am", False, 0),
        ("I am %%", True, 0),
        ("I am %s", True, 1),
        ("I am %*s", True, 2),
        ("I am %s%s", True, 2),
        ("I am %v", True, 1),
        ("I am %#v", True, 1),
        ("I am %#v %#v", True, 2),
        ("I am %2d %1d %+d %-d", True, 4),
        ("I am %2.0f %0.1f %+f %-f %%", True, 4),
        ("I am %Y%m%%d", True, 0),
    ],
)
def test_check_printf_source_cases(format_string, want_ok, want_arg_num):
    assert check_printf(format_string) == (want_ok, want_arg_num)


def test_indexed_argument_is_not_a_plain_format():
    assert check_printf("%[1]d") == (False, 1)


def test_unclosed_index_is_rejected():
    assert check_printf("abc %[1") == (False, 0)


def test_trailing_percent_is_rejected():
    assert check_printf("100%") == (False, 0)


def test_unknown_flag_for_verb_is_skipped():
    assert check_printf("%#s") == (True, 0)


def test_precision_star_consumes_argument():
    assert check_printf("%.*f") == (True, 2)