import pytest

from factories import NOW, days_ago, make_profile, make_repo
from portfolio_analyzer.domain.entities import (
    DimensionScore,
    Rating,
    Repository,
    ScoreBreakdown,
    rating_for,
)
from portfolio_analyzer.services.dimension_scorers import (
    build_score_breakdown,
    filter_forks,
    round_half_up,
    score_activity,
    score_code_quality,
    score_documentation,
    score_impact,
    score_organization,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.5, 1), (1.49, 1), (2.5, 3), (14.5, 15), (16.6667, 17), (0.0, 0)],
    )
    def test_rounds_halves_up(self, value, expected):
        assert round_half_up(value) == expected


class TestFilterForks:
    def test_drops_names_containing_fork(self):
        repos = [make_repo("my-fork"), make_repo("forklift-app"), make_repo("keeper")]
        assert [r.name for r in filter_forks(repos)] == ["keeper"]

    def test_substring_match_is_case_sensitive(self):
        assert [r.name for r in filter_forks([make_repo("Forked")])] == ["Forked"]

    def test_fork_flag_ignored_by_default(self):
        repos = [make_repo("upstream-copy", is_fork=True)]
        assert filter_forks(repos) == repos

    def test_fork_flag_honoured_when_enabled(self):
        repos = [make_repo("upstream-copy", is_fork=True), make_repo("mine"), make_repo("a-fork")]
        assert [r.name for r in filter_forks(repos, use_fork_flag=True)] == ["mine"]


class TestDocumentation:
    def test_presence_and_quality(self):
        repos = [
            make_repo("one", has_readme=True, readme_quality=8),
            make_repo("two", has_readme=True, readme_quality=6),
            make_repo("three"),
            make_repo("four"),
        ]
        result = score_documentation(repos)
        # presence 5.0 + quality 3.5
        assert result.score == 9
        assert result.breakdown == {
            "presence": 5,
            "quality": 4,
            "repos_with_readme": 2,
            "total_repos": 4,
        }

    def test_perfect_documentation(self):
        repos = [make_repo(f"repo{i}", has_readme=True, readme_quality=10) for i in range(3)]
        assert score_documentation(repos).score == 20


class TestCodeQuality:
    def test_all_components(self):
        repos = [
            make_repo("alpha", language="Python", size=200, description=None, topics=("x",),
                      pushed_at=days_ago(10)),
            make_repo("beta", language="Python", size=100, topics=(), pushed_at=days_ago(89)),
            make_repo("gamma", language="Go", size=30, description="short", topics=(),
                      pushed_at=days_ago(100)),
        ]
        result = score_code_quality(repos, NOW)
        # 4 + 4.67 + 5 + 3.33
        assert result.score == 17
        assert result.breakdown == {"diversity": 4, "structure": 5, "size": 5, "recency": 3}

    def test_diversity_is_capped(self):
        repos = [make_repo(f"r{i}", language=lang) for i, lang in enumerate("ABCDEF")]
        assert score_code_quality(repos, NOW).breakdown["diversity"] == 8

    @pytest.mark.parametrize(("size", "expected"), [(101, 5), (100, 3), (51, 3), (50, 1)])
    def test_size_tiers(self, size, expected):
        assert score_code_quality([make_repo(size=size)], NOW).breakdown["size"] == expected

    def test_never_pushed_repository_is_not_recent(self):
        result = score_code_quality([make_repo(pushed_at=None)], NOW)
        assert result.breakdown["recency"] == 0


class TestActivity:
    def test_all_components(self):
        profile = make_profile(created_at=days_ago(400), public_repos=12)
        repos = [
            make_repo("one", pushed_at=days_ago(2)),
            make_repo("two", pushed_at=days_ago(29)),
            make_repo("three", pushed_at=days_ago(31)),
        ]
        result = score_activity(profile, repos, NOW)
        # 5 + 2.4 + 6.67
        assert result.score == 14
        assert result.breakdown == {"age": 5, "repo_count": 2, "recency": 7}

    @pytest.mark.parametrize(("age_days", "expected"), [(366, 5), (365, 3), (181, 3), (180, 1)])
    def test_account_age_tiers(self, age_days, expected):
        profile = make_profile(created_at=days_ago(age_days))
        assert score_activity(profile, [], NOW).breakdown["age"] == expected

    def test_caps(self):
        profile = make_profile(public_repos=200)
        repos = [make_repo(f"r{i}", pushed_at=days_ago(1)) for i in range(9)]
        result = score_activity(profile, repos, NOW)
        assert result.breakdown["repo_count"] == 5
        assert result.breakdown["recency"] == 10
        assert result.score == 20


class TestImpact:
    def test_rounds_half_up_at_assignment(self):
        profile = make_profile(followers=25)
        repos = [
            make_repo("popular", stars=45, forks=1),
            make_repo("widely-copied", stars=5, forks=3),
            make_repo("big", stars=0, size=1500),
        ]
        result = score_impact(profile, repos)
        # stars capped at 8, followers 2.5, complexity 6
        assert result.score == 17
        assert result.breakdown == {"stars": 8, "followers": 3, "complexity": 6}

    def test_large_repository_counts_as_complex(self):
        result = score_impact(make_profile(followers=0), [make_repo(size=1001)])
        assert result.breakdown["complexity"] == 2


class TestOrganization:
    def test_all_components(self):
        repos = [
            make_repo("test-app", topics=()),
            make_repo("tmp", description=None),
            make_repo("good-name", description="too short"),
        ]
        result = score_organization(repos)
        # descriptions 1/3*5, topics 2/3*5, naming 1/3*5
        assert result.score == 7
        assert result.breakdown == {"descriptions": 2, "topics": 3, "naming": 2}

    def test_temp_in_name_is_penalised(self):
        assert score_organization([make_repo("my-temp-project")]).breakdown["naming"] == 0


class TestEmptyRepositorySet:
    def test_every_scorer_handles_no_repositories(self):
        profile = make_profile(public_repos=0, followers=0, created_at=days_ago(1000))
        score = build_score_breakdown(profile, [], NOW)

        assert score.documentation == DimensionScore(
            0, {"presence": 0, "quality": 0, "repos_with_readme": 0, "total_repos": 0}
        )
        assert score.code_quality.score == 1  # size tier floor
        assert score.activity.score == 5  # account age only
        assert score.impact.score == 0
        assert score.organization.score == 0
        assert score.overall == 6
        assert score.rating is Rating.NEEDS_IMPROVEMENT


class TestScoreBreakdown:
    def _repos(self) -> list[Repository]:
        return [
            make_repo(f"project-{i}", language=lang, stars=i * 3, forks=i, size=50 * i,
                      has_readme=i % 2 == 0, readme_quality=7 if i % 2 == 0 else 0,
                      pushed_at=days_ago(i * 40))
            for i, lang in enumerate(["Python", "Go", "Rust", "Python", "TypeScript"], start=1)
        ]

    def test_overall_is_sum_of_sub_scores_and_within_bounds(self):
        score = build_score_breakdown(make_profile(), self._repos(), NOW)
        subs = [
            score.documentation.score,
            score.code_quality.score,
            score.activity.score,
            score.impact.score,
            score.organization.score,
        ]
        assert score.overall == round(sum(subs))
        assert 0 <= score.documentation.score <= 20
        assert 0 <= score.code_quality.score <= 25
        assert 0 <= score.activity.score <= 20
        assert 0 <= score.impact.score <= 20
        assert 0 <= score.organization.score <= 15
        assert score.rating is rating_for(score.overall)

    def test_is_deterministic_for_a_fixed_clock(self):
        repos = self._repos()
        assert build_score_breakdown(make_profile(), repos, NOW) == build_score_breakdown(
            make_profile(), repos, NOW
        )

    def test_maximum_score(self):
        profile = make_profile(public_repos=50, followers=100)
        repos = [
            make_repo(f"project-{lang.lower()}", language=lang, stars=20, size=2000,
                      has_readme=True, readme_quality=10, pushed_at=days_ago(1))
            for lang in ["Python", "Go", "Rust", "Java"]
        ]
        score = build_score_breakdown(profile, repos, NOW)
        assert score.overall == 100
        assert score.rating is Rating.EXCELLENT


class TestRating:
    @pytest.mark.parametrize(
        ("overall", "expected"),
        [
            (100, Rating.EXCELLENT),
            (85, Rating.EXCELLENT),
            (84, Rating.GOOD),
            (70, Rating.GOOD),
            (69, Rating.AVERAGE),
            (50, Rating.AVERAGE),
            (49, Rating.NEEDS_IMPROVEMENT),
            (0, Rating.NEEDS_IMPROVEMENT),
        ],
    )
    def test_thresholds(self, overall, expected):
        assert rating_for(overall) is expected

    def test_breakdown_rating_follows_overall(self):
        score = ScoreBreakdown(
            documentation=DimensionScore(20),
            code_quality=DimensionScore(25),
            activity=DimensionScore(20),
            impact=DimensionScore(10),
            organization=DimensionScore(10),
        )
        assert score.overall == 85
        assert score.rating is Rating.EXCELLENT


class TestRepositoryInvariant:
    def test_quality_without_readme_is_rejected(self):
        with pytest.raises(ValueError):
            make_repo(has_readme=False, readme_quality=3)

    def test_quality_out_of_range_is_rejected(self):
        with pytest.raises(ValueError):
            make_repo(has_readme=True, readme_quality=11)


class TestReadOnlyMappings:
    def test_breakdown_cannot_be_modified(self):
        source = {"quality": 4}
        dimension = DimensionScore(score=4, breakdown=source)

        with pytest.raises(TypeError):
            dimension.breakdown["quality"] = 10
        source["quality"] = 10
        assert dimension.breakdown == {"quality": 4}

    def test_scored_breakdown_is_read_only(self):
        score = build_score_breakdown(make_profile(), [make_repo()], NOW)
        with pytest.raises(TypeError):
            score.documentation.breakdown["quality"] = 10

    def test_languages_cannot_be_modified(self):
        repo = make_repo(languages={"Python": 1200})

        with pytest.raises(TypeError):
            repo.languages["Python"] = 0
        assert repo.languages == {"Python": 1200}
