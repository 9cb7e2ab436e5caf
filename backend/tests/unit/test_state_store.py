"""Unit tests for GovernanceState."""
from governance_agent.models.proposal import DraftUpdate, Proposal, VotingStats
from governance_agent.models.workflow import ActiveView
from governance_agent.state.store import GovernanceState


class TestReplaceProposals:
    """Whole replacement of the proposal list."""

    def test_content_and_order_match_input(self, sample_proposals):
        state = GovernanceState()
        reversed_input = list(reversed(sample_proposals))

        state.replace_proposals(reversed_input)

        assert len(state.proposals) == len(reversed_input)
        for cached, given in zip(state.proposals, reversed_input):
            assert cached is given

    def test_replaces_not_merges(self, sample_proposals):
        state = GovernanceState()
        state.replace_proposals(sample_proposals)
        state.replace_proposals(sample_proposals[1:])

        assert [p.id for p in state.proposals] == [1]

    def test_empty_list_is_not_an_error(self, sample_proposals):
        state = GovernanceState()
        state.replace_proposals(sample_proposals)
        state.replace_proposals([])

        assert state.proposals == ()

    def test_later_mutation_of_input_list_does_not_leak(self, sample_proposals):
        state = GovernanceState()
        given = list(sample_proposals)
        state.replace_proposals(given)
        given.clear()

        assert len(state.proposals) == 2


class TestReplaceStats:
    def test_idempotent(self, sample_stats):
        state = GovernanceState()
        state.replace_stats(sample_stats)
        state.replace_stats(sample_stats)

        assert state.stats == sample_stats

    def test_initial_stats_are_zero(self):
        assert GovernanceState().stats == VotingStats()


class TestAiText:
    def test_analysis_replaced_wholesale(self):
        state = GovernanceState()
        state.set_analysis(0, "first analysis")
        state.set_analysis(1, "second analysis")

        assert state.analysis.text == "second analysis"
        assert state.analysis_subject == 1

    def test_recommendations_replaced_wholesale(self):
        state = GovernanceState()
        state.set_recommendations("one")
        state.set_recommendations("two")

        assert state.recommendations.text == "two"

    def test_no_analysis_subject_initially(self):
        assert GovernanceState().analysis_subject is None


class TestDraft:
    def test_update_and_clear(self):
        state = GovernanceState()
        state.update_draft(DraftUpdate(title="Fund audits"))
        state.update_draft(DraftUpdate(proposer="carol.icp"))

        assert state.draft.title == "Fund audits"
        assert state.draft.proposer == "carol.icp"

        state.clear_draft()
        assert state.draft.missing_fields() == ["title", "description", "proposer"]


class TestLookupAndSnapshot:
    def test_find_proposal(self, sample_proposals):
        state = GovernanceState()
        state.replace_proposals(sample_proposals)

        assert state.find_proposal(1) is sample_proposals[1]
        assert state.find_proposal(42) is None

    def test_resolve_proposal_id(self, sample_proposals):
        state = GovernanceState()
        state.replace_proposals(sample_proposals)

        assert state.resolve_proposal_id("0") == 0
        assert state.resolve_proposal_id("unknown") == "unknown"

    def test_resolve_numeric_id_with_empty_cache(self):
        state = GovernanceState()

        assert state.resolve_proposal_id("0") == 0
        assert state.resolve_proposal_id("17") == 17

    def test_resolve_keeps_cached_string_ids(self):
        state = GovernanceState()
        state.replace_proposals(
            [Proposal(id="007", title="t", description="d", proposer="p", timestamp=0)]
        )

        assert state.resolve_proposal_id("007") == "007"
        assert state.resolve_proposal_id("prop-9") == "prop-9"

    def test_snapshot_reflects_state(self, sample_proposals, sample_stats):
        state = GovernanceState()
        state.replace_proposals(sample_proposals)
        state.replace_stats(sample_stats)
        state.set_busy(True)
        state.set_active_view(ActiveView.ANALYSIS)

        snapshot = state.snapshot()

        assert snapshot.proposals == tuple(sample_proposals)
        assert snapshot.stats == sample_stats
        assert snapshot.busy is True
        assert snapshot.active_view == ActiveView.ANALYSIS
