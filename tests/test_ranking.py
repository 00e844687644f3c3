import itertools

import pytest

from lang_rank.domain.errors import FetchError, NoRepositoriesError
from lang_rank.domain.ranking import (
    OTHER_LABEL,
    aggregate_languages,
    apply_excludes,
    collapse_others,
    rank_languages,
)
from lang_rank.domain.repository import LanguageStat, Repository


def make_repo(name, **kwargs):
    return Repository(name=name, full_name=f"octo/{name}", **kwargs)


LANGUAGES = {
    "octo/api": {"Go": 200, "Shell": 10},
    "octo/web": {"TypeScript": 500, "CSS": 40, "HTML": 30},
    "octo/tools": {"Go": 100, "Python": 70},
}


def lookup(repo):
    return LANGUAGES[repo.full_name]


class TestAggregateLanguages:
    def test_sums_bytes_across_repositories(self):
        repos = [make_repo("api"), make_repo("web"), make_repo("tools")]

        totals = aggregate_languages(repos, lookup)

        assert totals == {
            "Go": 300,
            "Shell": 10,
            "TypeScript": 500,
            "CSS": 40,
            "HTML": 30,
            "Python": 70,
        }

    def test_order_of_repositories_does_not_matter(self):
        repos = [make_repo("api"), make_repo("web"), make_repo("tools")]
        expected = aggregate_languages(repos, lookup)

        for permutation in itertools.permutations(repos):
            assert aggregate_languages(list(permutation), lookup) == expected

    def test_empty_repository_list_is_an_error(self):
        with pytest.raises(NoRepositoriesError, match="no repositories after filtering"):
            aggregate_languages([], lookup)

    def test_lookup_failure_aborts_and_names_repository(self):
        calls = []

        def failing_lookup(repo):
            calls.append(repo.full_name)
            if repo.name == "web":
                raise FetchError("request failed: 500 Server Error: boom", url="https://x", status_code=500)
            return LANGUAGES[repo.full_name]

        repos = [make_repo("api"), make_repo("web"), make_repo("tools")]
        with pytest.raises(FetchError) as excinfo:
            aggregate_languages(repos, failing_lookup)

        assert "languages for octo/web" in str(excinfo.value)
        assert excinfo.value.status_code == 500
        assert calls == ["octo/api", "octo/web"]

    def test_repository_without_languages_contributes_nothing(self):
        totals = aggregate_languages([make_repo("empty")], lambda repo: {})
        assert totals == {}


class TestApplyExcludes:
    def test_removes_matching_language(self):
        totals = {"Go": 300, "TeX": 50}

        removed = apply_excludes(totals, ["TeX"])

        assert totals == {"Go": 300}
        assert removed == ["TeX"]

    def test_match_is_case_insensitive_and_reports_terms_as_given(self):
        totals = {"Go": 300, "TeX": 50, "HTML": 20}

        removed = apply_excludes(totals, ["tex", "html"])

        assert totals == {"Go": 300}
        assert removed == ["html", "tex"]

    def test_last_of_duplicate_terms_is_reported(self):
        totals = {"Go": 300, "TeX": 50}

        removed = apply_excludes(totals, ["tex", "TEX"])

        assert totals == {"Go": 300}
        assert removed == ["TEX"]

    def test_unknown_terms_are_ignored(self):
        totals = {"Go": 300}

        removed = apply_excludes(totals, ["Cobol"])

        assert totals == {"Go": 300}
        assert removed == []

    def test_no_terms_leaves_mapping_untouched(self):
        totals = {"Go": 300}
        assert apply_excludes(totals, []) == []
        assert totals == {"Go": 300}


class TestRankLanguages:
    def test_orders_by_bytes_descending(self):
        ranked = rank_languages({"Python": 100, "TeX": 50, "Go": 300})

        assert ranked == [
            LanguageStat("Go", 300),
            LanguageStat("Python", 100),
            LanguageStat("TeX", 50),
        ]

    def test_ties_are_broken_alphabetically(self):
        ranked = rank_languages({"Rust": 10, "C": 10, "Go": 10, "Zig": 99})

        assert [item.language for item in ranked] == ["Zig", "C", "Go", "Rust"]

    def test_result_is_a_strict_total_order(self):
        totals = {"A": 5, "b": 5, "C": 7, "d": 0, "E": 7, "F": 1}

        ranked = rank_languages(totals)

        for current, following in zip(ranked, ranked[1:]):
            assert current.bytes >= following.bytes
            if current.bytes == following.bytes:
                assert current.language < following.language

    def test_insertion_order_does_not_affect_ranking(self):
        forward = {"Go": 1, "C": 1, "Rust": 2}
        backward = dict(reversed(list(forward.items())))

        assert rank_languages(forward) == rank_languages(backward)


class TestCollapseOthers:
    RANKED = [
        LanguageStat("Go", 300),
        LanguageStat("Python", 100),
        LanguageStat("TeX", 50),
        LanguageStat("HTML", 10),
    ]

    def test_folds_tail_into_other(self):
        result = collapse_others(self.RANKED, top=2, show_other=True)

        assert result == [
            LanguageStat("Go", 300),
            LanguageStat("Python", 100),
            LanguageStat(OTHER_LABEL, 60),
        ]

    def test_bytes_are_preserved_with_other(self):
        result = collapse_others(self.RANKED, top=1, show_other=True)
        assert sum(item.bytes for item in result) == sum(item.bytes for item in self.RANKED)

    def test_other_is_last_even_when_largest(self):
        ranked = [LanguageStat("A", 100), LanguageStat("B", 90), LanguageStat("C", 80)]

        result = collapse_others(ranked, top=1, show_other=True)

        assert result == [LanguageStat("A", 100), LanguageStat(OTHER_LABEL, 170)]
        assert result[-1].bytes > result[0].bytes

    def test_tail_is_dropped_without_show_other(self):
        result = collapse_others(self.RANKED, top=2, show_other=False)
        assert result == self.RANKED[:2]

    def test_zero_remainder_adds_no_other(self):
        ranked = [LanguageStat("Go", 300), LanguageStat("Python", 0)]

        result = collapse_others(ranked, top=1, show_other=True)

        assert result == [LanguageStat("Go", 300)]

    @pytest.mark.parametrize("top", [0, -1, 4, 10])
    def test_passthrough_when_top_does_not_cut(self, top):
        assert collapse_others(self.RANKED, top=top, show_other=True) == self.RANKED
