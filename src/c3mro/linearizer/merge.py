"""The C3 merge.

``merge`` repeatedly takes the first head, in argument order, that does not
appear in the tail of any input sequence, appends it to the output and
removes it from the front of every sequence it heads.  When every head is
blocked the inputs disagree about some pair of classes and the merge fails
with :class:`InconsistentHierarchyError`.

The last input passed by the linearizer is the list of direct parents;
that is what keeps parents in their declared relative order.
"""
from __future__ import annotations

from collections import Counter, deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from itertools import islice

from c3mro.linearizer.errors import InconsistentHierarchyError


@dataclass(frozen=True, slots=True)
class MergeStep:
    """One selection made by the merge.

    Parameters
    ----------
    heads:
        Distinct heads of the non-empty sequences, in argument order.
    selected:
        The head that was appended to the output.
    blocked:
        Heads examined before ``selected`` and rejected because they
        appear in some sequence's tail.
    """

    heads: tuple[str, ...]
    selected: str
    blocked: tuple[str, ...] = ()


def _distinct_heads(pending: list[deque[str]]) -> list[str]:
    return list(dict.fromkeys(seq[0] for seq in pending))


def _conflicts(pending: list[deque[str]]) -> tuple[tuple[str, str], ...]:
    pairs: dict[tuple[str, str], None] = {}
    for head in _distinct_heads(pending):
        for seq in pending:
            if head in islice(seq, 1, None):
                pairs[(seq[0], head)] = None
    return tuple(pairs)


def merge(
    sequences: Iterable[Sequence[str]],
    target: str | None = None,
    trace: list[MergeStep] | None = None,
) -> list[str]:
    """Merge linearizations with the C3 rule.

    Parameters
    ----------
    sequences:
        The parents' linearizations followed by the list of parents.
        Empty sequences are ignored.
    target:
        Class being linearized; only used in the error.
    trace:
        When given, a ``MergeStep`` is appended for every selection.

    Returns
    -------
    list[str]
        The merged order, without ``target``.

    Raises
    ------
    InconsistentHierarchyError
        If at some step no head qualifies.
    """
    pending = [deque(seq) for seq in sequences if seq]
    # Occurrences of each class outside the head position.
    in_tails: Counter[str] = Counter()
    for seq in pending:
        in_tails.update(islice(seq, 1, None))

    result: list[str] = []
    while pending:
        heads = _distinct_heads(pending)
        selected = next((head for head in heads if not in_tails[head]), None)
        if selected is None:
            raise InconsistentHierarchyError(
                target,
                _conflicts(pending),
                tuple(tuple(seq) for seq in pending),
            )
        if trace is not None:
            trace.append(
                MergeStep(
                    heads=tuple(heads),
                    selected=selected,
                    blocked=tuple(heads[: heads.index(selected)]),
                )
            )
        result.append(selected)
        for seq in pending:
            if seq[0] == selected:
                seq.popleft()
                if seq:
                    in_tails[seq[0]] -= 1
        pending = [seq for seq in pending if seq]
    return result
