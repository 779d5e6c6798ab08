"""Tests for the batch comment runner."""

import random

import pytest
from github.GithubException import RateLimitExceededException

from gh_commenter.commenter.runner import (
    CommenterRunError,
    CommenterSearchError,
    RunOutcome,
    run_commenter,
)
from gh_commenter.commenter.templates import make_commenter
from gh_commenter.github_client.search import build_search_query

LITERAL = make_commenter("Is this still relevant?")


def _run(client, commenter=LITERAL, ceiling=0, randomize=False, rng=None):
    return run_commenter(
        client,
        "test-org",
        "is:issue",
        "updated",
        True,
        randomize,
        commenter,
        ceiling,
        rng=rng,
    )


class TestSearch:
    """Test the search step."""

    def test_search_arguments(self, fake_client) -> None:
        """Test the search is made once with the given parameters."""
        run_commenter(fake_client, "org", "q", "updated", True, False, LITERAL, 3)
        assert fake_client.searches == [("org", "q", "updated", True)]

    def test_search_failure_is_fatal(self, fake_client, make_issue) -> None:
        """Test a failing search aborts before any comment is posted."""
        fake_client.issues = [make_issue(1)]
        fake_client.search_error = RuntimeError("502 Bad Gateway")

        with pytest.raises(CommenterSearchError, match="search failed: 502 Bad Gateway"):
            _run(fake_client)

        assert fake_client.comments == []

    def test_no_matches(self, fake_client) -> None:
        """Test an empty result set is a success."""
        outcome = _run(fake_client)
        assert outcome == RunOutcome()
        assert outcome.succeeded


class TestCeiling:
    """Test the ceiling on processed issues."""

    def test_stops_at_ceiling(self, fake_client, make_issue) -> None:
        """Test exactly ceiling issues are processed when more match."""
        fake_client.issues = [make_issue(n) for n in range(1, 6)]

        outcome = _run(fake_client, ceiling=2)

        assert [c[2] for c in fake_client.comments] == [1, 2]
        assert outcome.matched == 5
        assert outcome.visited == 2
        assert outcome.commented == 2

    def test_zero_is_unlimited(self, fake_client, make_issue) -> None:
        """Test a ceiling of zero processes every match."""
        fake_client.issues = [make_issue(n) for n in range(1, 6)]

        outcome = _run(fake_client, ceiling=0)

        assert len(fake_client.comments) == 5
        assert outcome.visited == 5

    def test_ceiling_above_matches(self, fake_client, make_issue) -> None:
        """Test a ceiling larger than the result set processes everything."""
        fake_client.issues = [make_issue(1), make_issue(2)]

        outcome = _run(fake_client, ceiling=10)

        assert outcome.visited == 2

    def test_failures_count_towards_ceiling(self, fake_client, make_issue) -> None:
        """Test the ceiling bounds visited issues, not successful ones."""
        fake_client.issues = [
            make_issue(1, html_url="https://github.com/test-org/test-repo/issues"),
            make_issue(2),
            make_issue(3),
        ]

        with pytest.raises(CommenterRunError) as exc_info:
            _run(fake_client, ceiling=2)

        assert exc_info.value.outcome.visited == 2
        assert [c[2] for c in fake_client.comments] == [2]


class TestRandomize:
    """Test randomized selection."""

    def test_shuffles_before_ceiling(self, fake_client, make_issue) -> None:
        """Test the ceiling applies to the shuffled order."""
        issues = [make_issue(n) for n in range(1, 11)]
        fake_client.issues = issues
        expected = [issue.number for issue in issues]
        random.Random(7).shuffle(expected)

        _run(fake_client, ceiling=3, randomize=True, rng=random.Random(7))

        assert [c[2] for c in fake_client.comments] == expected[:3]

    def test_no_duplicates_or_drops(self, fake_client, make_issue) -> None:
        """Test every visited issue is distinct and comes from the results."""
        fake_client.issues = [make_issue(n) for n in range(1, 21)]

        for seed in range(5):
            fake_client.comments.clear()
            _run(fake_client, ceiling=8, randomize=True, rng=random.Random(seed))
            numbers = [c[2] for c in fake_client.comments]
            assert len(numbers) == 8
            assert len(set(numbers)) == 8
            assert set(numbers) <= set(range(1, 21))

    def test_all_visited_without_ceiling(self, fake_client, make_issue) -> None:
        """Test shuffling without a ceiling still visits every issue once."""
        fake_client.issues = [make_issue(n) for n in range(1, 11)]

        _run(fake_client, randomize=True, rng=random.Random(3))

        assert sorted(c[2] for c in fake_client.comments) == list(range(1, 11))

    def test_order_kept_without_randomize(self, fake_client, make_issue) -> None:
        """Test search order is preserved by default."""
        fake_client.issues = [make_issue(n) for n in (5, 3, 9)]

        _run(fake_client)

        assert [c[2] for c in fake_client.comments] == [5, 3, 9]


class TestPerIssueFailures:
    """Test per-issue failures are recorded without aborting the batch."""

    def test_malformed_url(self, fake_client, make_issue) -> None:
        """Test a URL without a number is skipped and reported."""
        bad_url = "https://github.com/test-org/test-repo/issues/"
        fake_client.issues = [make_issue(1, html_url=bad_url), make_issue(2)]
        produced = []

        def commenter(context):
            produced.append(context.number)
            return "hello"

        with pytest.raises(CommenterRunError) as exc_info:
            _run(fake_client, commenter=commenter)

        problems = exc_info.value.outcome.problems
        assert problems == [f"Failed to parse {bad_url}: failed to parse: {bad_url}"]
        assert produced == [2]
        assert fake_client.comments == [("test-org", "test-repo", 2, "hello")]

    def test_commenter_failure(self, fake_client, make_issue) -> None:
        """Test a failing comment producer skips only that issue."""
        fake_client.issues = [make_issue(1), make_issue(2)]

        def commenter(context):
            if context.number == 1:
                raise ValueError("undefined field")
            return "ok"

        with pytest.raises(CommenterRunError) as exc_info:
            _run(fake_client, commenter=commenter)

        assert exc_info.value.outcome.problems == [
            "Failed to create comment for test-org/test-repo#1: undefined field"
        ]
        assert [c[2] for c in fake_client.comments] == [2]

    def test_rate_limited_comment_recorded(self, fake_client, make_issue) -> None:
        """Test a rate-limited submission is one failure and is not retried."""
        fake_client.issues = [make_issue(1), make_issue(2)]
        attempts = []

        def create_comment(org, repo, number, comment):
            attempts.append(number)
            if number == 1:
                raise RateLimitExceededException(403, "API rate limit exceeded", {})

        fake_client.create_comment = create_comment

        with pytest.raises(CommenterRunError) as exc_info:
            _run(fake_client)

        problems = exc_info.value.outcome.problems
        assert len(problems) == 1
        assert problems[0].startswith("Failed to apply comment to test-org/test-repo#1")
        assert attempts == [1, 2]

    def test_submission_failure(self, fake_client, make_issue) -> None:
        """Test a rejected comment is reported and later issues still run."""
        fake_client.issues = [make_issue(1), make_issue(2), make_issue(3)]
        fake_client.failing_numbers = {2}

        with pytest.raises(CommenterRunError) as exc_info:
            _run(fake_client)

        outcome = exc_info.value.outcome
        assert outcome.problems == [
            "Failed to apply comment to test-org/test-repo#2: 403 Forbidden"
        ]
        assert outcome.commented == 2
        assert [c[2] for c in fake_client.comments] == [1, 3]

    def test_error_summarizes_failures(self, fake_client, make_issue) -> None:
        """Test the aggregate error counts and lists every failure."""
        fake_client.issues = [make_issue(1), make_issue(2)]
        fake_client.failing_numbers = {1, 2}

        with pytest.raises(CommenterRunError) as exc_info:
            _run(fake_client)

        message = str(exc_info.value)
        assert message.startswith("encountered 2 failures: ")
        assert "test-org/test-repo#1" in message
        assert "test-org/test-repo#2" in message

    def test_context_passed_to_commenter(self, fake_client, make_issue) -> None:
        """Test the commenter receives the parsed location and the issue."""
        issue = make_issue(
            12, html_url="https://github.com/other-org/other-repo/pull/12"
        )
        fake_client.issues = [issue]
        contexts = []

        def commenter(context):
            contexts.append(context)
            return "text"

        _run(fake_client, commenter=commenter)

        assert len(contexts) == 1
        assert contexts[0].org == "other-org"
        assert contexts[0].repo == "other-repo"
        assert contexts[0].number == 12
        assert contexts[0].issue == issue
        assert fake_client.comments == [("other-org", "other-repo", 12, "text")]


class TestEndToEnd:
    """Test query building and the runner together."""

    def test_literal_comment_on_two_issues(self, fake_client, make_issue) -> None:
        """Test both matches receive the literal comment."""
        query = build_search_query("is:issue label:bug", include_closed=False)
        assert query == "is:issue label:bug archived:false is:open is:unlocked"
        fake_client.issues = [make_issue(1), make_issue(2)]

        outcome = run_commenter(
            fake_client, "", query, None, False, False, LITERAL, 2
        )

        assert outcome.succeeded
        assert fake_client.searches == [("", query, None, False)]
        assert fake_client.comments == [
            ("test-org", "test-repo", 1, "Is this still relevant?"),
            ("test-org", "test-repo", 2, "Is this still relevant?"),
        ]

    def test_one_malformed_url(self, fake_client, make_issue) -> None:
        """Test one bad URL fails the run but the other issue is commented."""
        query = build_search_query("is:issue label:bug")
        fake_client.issues = [
            make_issue(1, html_url="https://github.com/test-org/test-repo/issues"),
            make_issue(2),
        ]

        with pytest.raises(CommenterRunError) as exc_info:
            run_commenter(fake_client, "", query, None, False, False, LITERAL, 2)

        assert len(exc_info.value.outcome.problems) == 1
        assert fake_client.comments == [
            ("test-org", "test-repo", 2, "Is this still relevant?")
        ]
