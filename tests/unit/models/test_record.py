"""Tests for per-run state."""

from crossnegatives.models.record import NegativeRecord, RunContext, WriteFailure


class TestNegativeRecord:
    def test_pairs_stored_once(self):
        record = NegativeRecord()
        assert record.add("[a]", "X") is True
        assert record.add("[a]", "X") is False
        assert record.add("[a]", "Y") is True

        assert record.receivers("[a]") == ["X", "Y"]
        assert len(record) == 2
        assert ("[a]", "Y") in record
        assert ("[a]", "Z") not in record
        assert "[a]" not in record

    def test_entities_in_insertion_order(self):
        record = NegativeRecord()
        record.add("[a]", "Y")
        record.add("[b]", "X")
        record.add("[c]", "Y")
        assert record.entities == ["Y", "X"]
        assert list(record.keywords) == ["[a]", "[b]", "[c]"]

    def test_receivers_is_a_copy(self):
        record = NegativeRecord()
        record.add("[a]", "X")
        record.receivers("[a]").append("Y")
        assert record.receivers("[a]") == ["X"]
        assert record.receivers("[missing]") == []


class TestRunContext:
    def test_runs_do_not_share_state(self):
        first, second = RunContext(), RunContext()
        first.record.add("[a]", "X")
        first.log_lines.append("line")
        assert second.added == 0
        assert second.log_lines == []
        assert first.run_id != second.run_id

    def test_summary(self):
        context = RunContext(dry_run=True)
        context.record.add("[a]", "X")
        context.record.add("[a]", "Y")
        context.failures.append(WriteFailure("[b]", "X", "exists"))
        context.attempted = 3
        context.skipped = 1

        summary = context.summary()

        assert summary["dry_run"] is True
        assert summary["attempted"] == 3
        assert summary["added"] == 2
        assert summary["failed"] == 1
        assert summary["skipped"] == 1
        assert summary["distinct_keywords"] == 1
        assert summary["entities"] == 2
        assert summary["report_url"] is None
