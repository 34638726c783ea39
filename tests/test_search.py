"""Tests for SearchEngine: normalization, paste handling and filtering."""

import pytest

from advanced_datatable.transform.search import SearchEngine


def _ids(rows):
    return [r["Id"] for r in rows]


@pytest.fixture
def directory():
    return [
        {"Id": 1, "Name": "Acme Industries", "Phone": "555-1234", "Number": "001"},
        {"Id": 2, "Name": "Beta", "Phone": "555-9999", "Number": "002"},
        {"Id": 3, "Name": "Gamma acme", "Phone": None, "Number": "003"},
        {"Id": 4, "Name": "Delta", "Number": "0042", "Employees": 42},
        {"Id": 5, "Name": "", "Phone": "555-1234,Acme"},
    ]


class TestNormalize:
    def test_collapses_whitespace_around_commas(self):
        assert SearchEngine.normalize("a ,  b,\tc") == "a,b,c"

    def test_trims_ends(self):
        assert SearchEngine.normalize(" a , b ") == "a,b"

    def test_inner_spaces_kept(self):
        assert SearchEngine.normalize("acme industries, beta") == "acme industries,beta"

    def test_empty(self):
        assert SearchEngine.normalize("") == ""
        assert SearchEngine.normalize(None) == ""

    def test_terms(self):
        assert SearchEngine.terms(" Foo , BAR ") == ["foo", "bar"]


class TestNormalizePaste:
    def test_line_breaks_become_commas(self):
        assert SearchEngine.normalize_paste("001\n002\n003") == "001,002,003"

    def test_mixed_separators_and_blank_lines(self):
        assert SearchEngine.normalize_paste("001\r\n\r\n002\r003,004\n") == "001,002,003,004"

    def test_single_segment_unchanged(self):
        assert SearchEngine.normalize_paste("acme\n") == "acme\n"
        assert SearchEngine.normalize_paste("acme") == "acme"


class TestFilter:
    def test_substring_match(self, directory):
        result = SearchEngine.filter("acme", ["Name"], directory)
        assert _ids(result) == [1, 3]

    def test_case_insensitive(self, directory):
        assert _ids(SearchEngine.filter("BETA", ["Name"], directory)) == [2]

    def test_exact_term_list(self, directory):
        result = SearchEngine.filter("001,003", ["Number"], directory)
        assert _ids(result) == [1, 3]

    def test_terms_are_exact_not_substring(self, directory):
        # "004" is a substring of "0042" but not an exact term match
        assert SearchEngine.filter("004,999", ["Number"], directory) == []

    def test_exact_phone_with_other_term(self, directory):
        result = SearchEngine.filter("555-1234,Acme", ["Name", "Phone"], directory)
        assert 1 in _ids(result)

    def test_full_query_substring_still_applies(self, directory):
        result = SearchEngine.filter("555-1234, acme", ["Phone"], directory)
        assert _ids(result) == [1, 5]

    def test_missing_and_null_fields_never_match(self, directory):
        result = SearchEngine.filter("555", ["Phone", "Nope"], directory)
        assert _ids(result) == [1, 2, 5]

    def test_non_text_values(self, directory):
        assert _ids(SearchEngine.filter("42", ["Employees"], directory)) == [4]

    def test_empty_query_returns_all(self, directory):
        assert SearchEngine.filter("  ", ["Name"], directory) == directory

    def test_trailing_comma_does_not_match_empty_fields(self, directory):
        assert _ids(SearchEngine.filter("beta,", ["Name"], directory)) == [2]

    def test_nested_field_path(self):
        rows = [{"Id": 1, "Owner": {"Name": "Zoe"}}, {"Id": 2, "Owner": None}]
        assert _ids(SearchEngine.filter("zoe", ["Owner.Name"], rows)) == [1]

    def test_normalize_roundtrip(self, directory):
        fields = ["Name", "Number"]
        assert SearchEngine.filter(
            SearchEngine.normalize(" beta , 001 "), fields, directory
        ) == SearchEngine.filter("beta,001", fields, directory)

    def test_does_not_mutate(self, directory):
        before = list(directory)
        SearchEngine.filter("acme", ["Name"], directory)
        assert directory == before
