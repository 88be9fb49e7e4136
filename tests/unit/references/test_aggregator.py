"""Tests for aggregate_references()."""

from regref.references.aggregator import aggregate_references
from regref.references.resolver import resolve_references


class TestAggregateReferences:
    """Partition completeness and ordering."""

    def test_partition(self, sample_index, make_candidate):
        targets = ["circA.pdf", None, "circB.pdf", "x.pdf", "circA.pdf"]
        candidates = [
            make_candidate(exact_text=str(i), matched_target=t) for i, t in enumerate(targets)
        ]
        resolved = resolve_references(candidates, sample_index, "doc.pdf")

        aggregate = aggregate_references(resolved)

        assert [r.candidate.exact_text for r in aggregate.local] == ["0", "2", "4"]
        assert [r.candidate.exact_text for r in aggregate.external] == ["1", "3"]
        assert not set(aggregate.local) & set(aggregate.external)
        assert aggregate.summary.available_locally == 3
        assert aggregate.summary.external == 2
        assert aggregate.summary.total == len(resolved) == 5

    def test_self_references_not_counted(self, sample_index, make_candidate):
        candidates = [
            make_candidate(matched_target="circA.pdf"),
            make_candidate(matched_target="circB.pdf"),
        ]

        aggregate = aggregate_references(
            resolve_references(candidates, sample_index, "circA.pdf")
        )

        assert aggregate.summary.total == 1
        assert aggregate.summary.to_dict() == {
            "total_references": 1,
            "local_references": 1,
            "external_references": 0,
        }

    def test_empty(self):
        aggregate = aggregate_references([])

        assert aggregate.local == ()
        assert aggregate.external == ()
        assert aggregate.summary.total == 0

    def test_accepts_generator(self, sample_index, make_candidate):
        resolved = resolve_references([make_candidate()], sample_index, "doc.pdf")

        aggregate = aggregate_references(r for r in resolved)

        assert aggregate.summary.external == 1
