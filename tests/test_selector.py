"""Tests for the main-script heuristic."""

import pytest

from requirejs.selector import levenshtein, select_main


class TestLevenshtein:
    """Edit distance sanity checks."""

    @pytest.mark.parametrize("left,right,expected", [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("", "abc", 3),
        ("abc", "", 3),
        ("same", "same", 0),
        ("foo", "foo.js", 3),
    ])
    def test_distance(self, left, right, expected):
        assert levenshtein(left, right) == expected

    def test_symmetric(self):
        assert levenshtein("angular", "angular-route") == levenshtein("angular-route", "angular")


class TestSelectMain:
    """select_main() is total, deterministic and order-stable."""

    def test_single_candidate_returned_unchanged(self):
        assert select_main(["styles/main.css"], "anything") == "styles/main.css"

    def test_empty_candidates_rejected(self):
        with pytest.raises(ValueError):
            select_main([], "foo")

    def test_prefers_scripts_over_other_files(self):
        assert select_main(["jquery.css", "jquery.js"], "jquery") == "jquery.js"

    def test_script_filter_is_case_insensitive(self):
        assert select_main(["Foo.JS", "bar.js"], "foo") == "Foo.JS"

    def test_falls_back_to_all_candidates_without_scripts(self):
        assert select_main(["fonts/x.woff", "lib.css"], "lib") == "lib.css"

    def test_closest_name_wins(self):
        assert select_main(["foo.js", "foo.min.js"], "foo") == "foo.js"

    def test_ties_go_to_first_candidate(self):
        assert levenshtein("zz", "ab.js") == levenshtein("zz", "ba.js")
        assert select_main(["ab.js", "ba.js"], "zz") == "ab.js"
        assert select_main(["ba.js", "ab.js"], "zz") == "ba.js"

    def test_whole_path_is_compared(self):
        candidates = ["dist/schema-form.js", "dist/bootstrap-decorator.js"]
        assert select_main(candidates, "angular-schema-form") == "dist/schema-form.js"

    def test_deterministic(self):
        candidates = ["a/one.js", "b/two.js", "c/three.js", "one.css"]
        results = {select_main(candidates, "two") for _ in range(10)}
        assert results == {"b/two.js"}

    def test_duplicates_allowed(self):
        assert select_main(["x.js", "x.js"], "x") == "x.js"
