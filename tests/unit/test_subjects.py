"""Tests for subject classification."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from botmetrics.core.models import ClassificationRule
from botmetrics.core.subjects import classify

RULE = ClassificationRule(
    candidate_subjects=("Greeting", "Question"), default_subject="Other"
)


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.core
    def test_matching_candidate(self) -> None:
        assert classify("Greeting Flow", RULE) == "Greeting"

    @pytest.mark.core
    def test_no_match_returns_default(self) -> None:
        assert classify("Random Flow", RULE) == "Other"

    @pytest.mark.core
    def test_match_anywhere_in_name(self) -> None:
        assert classify("Ask a Question now", RULE) == "Question"

    @pytest.mark.core
    def test_is_case_sensitive(self) -> None:
        assert classify("greeting flow", RULE) == "Other"

    @pytest.mark.core
    def test_first_configured_candidate_wins(self) -> None:
        """With several matches, configured order decides."""
        assert classify("Question after Greeting", RULE) == "Greeting"

    @pytest.mark.core
    def test_empty_candidates_are_ignored(self) -> None:
        rule = ClassificationRule(candidate_subjects=("", "FAQ"), default_subject="X")
        assert classify("Pricing", rule) == "X"

    @pytest.mark.core
    def test_no_candidates_returns_default(self) -> None:
        rule = ClassificationRule(candidate_subjects=(), default_subject="Other")
        assert classify("Greeting", rule) == "Other"

    @pytest.mark.core
    @given(
        block_name=st.text(max_size=30),
        candidates=st.lists(st.text(max_size=8), max_size=5),
        default=st.text(max_size=8),
    )
    def test_result_is_a_candidate_or_default(
        self, block_name: str, candidates: list[str], default: str
    ) -> None:
        rule = ClassificationRule(tuple(candidates), default)
        assert classify(block_name, rule) in {*candidates, default}
