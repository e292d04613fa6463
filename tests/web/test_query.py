import pytest

from tokenveil.web.query import get_query_params_ci, get_query_param


@pytest.mark.unit
def test_keys_are_lowercased():
    params = get_query_params_ci("?Token=ABC&Mode=view")
    assert params == {"token": "ABC", "mode": "view"}


@pytest.mark.unit
def test_accepts_full_url_and_bare_query():
    url = "https://example.com/page?TOKEN=KQMZ2VQ&x=1#frag"
    assert get_query_params_ci(url) == {"token": "KQMZ2VQ", "x": "1"}
    assert get_query_params_ci("a=1&b=2") == {"a": "1", "b": "2"}
    assert get_query_params_ci("/page?a=1") == {"a": "1"}


@pytest.mark.unit
def test_bare_query_may_carry_url_values():
    assert get_query_params_ci("next=https://example.com/a&Token=KQABC") == {
        "next": "https://example.com/a",
        "token": "KQABC",
    }
    assert get_query_params_ci("?next=https://example.com/a?b=1&Token=KQABC")["token"] == "KQABC"


@pytest.mark.unit
@pytest.mark.parametrize(
    "query",
    [
        "/view?Token=KQABC#top",
        "?Token=KQABC#top",
        "Token=KQABC#top",
        "https://example.com/view?Token=KQABC#top",
    ],
)
def test_fragment_is_not_part_of_the_value(query):
    assert get_query_params_ci(query) == {"token": "KQABC"}


@pytest.mark.unit
def test_blank_values_and_percent_decoding_are_kept():
    assert get_query_params_ci("empty=&name=J%C3%BCrgen+S") == {
        "empty": "",
        "name": "Jürgen S",
    }


@pytest.mark.unit
def test_last_duplicate_wins_regardless_of_case():
    assert get_query_params_ci("id=1&ID=2&Id=3") == {"id": "3"}


@pytest.mark.unit
def test_empty_query():
    assert get_query_params_ci("") == {}
    assert get_query_params_ci("https://example.com/") == {}


@pytest.mark.unit
def test_get_query_param_ignores_case():
    assert get_query_param("?Token=ABC", "TOKEN") == "ABC"
    assert get_query_param("?Token=ABC", "missing") is None
    assert get_query_param("?Token=ABC", "missing", default="") == ""
