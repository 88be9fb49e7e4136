"""Aggregator: partition resolved references for reporting."""

from typing import Iterable

from regref.references.models import ReferenceAggregate, ResolvedReference


def aggregate_references(resolved: Iterable[ResolvedReference]) -> ReferenceAggregate:
    """Split into local and external, each in arrival order."""
    items = tuple(resolved)
    return ReferenceAggregate(
        local=tuple(r for r in items if r.is_local),
        external=tuple(r for r in items if not r.is_local),
    )
