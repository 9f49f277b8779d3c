"""Error raised when no C3 linearization exists."""
from __future__ import annotations


class InconsistentHierarchyError(Exception):
    """Raised when the C3 merge cannot select a next class.

    Every remaining head is blocked because it appears in the tail of some
    other input sequence, so the ordering constraints contradict each
    other.  The same hierarchy always produces the same error.

    Parameters
    ----------
    target:
        The class whose merge failed, or ``None`` for a bare merge.
    conflicts:
        Pairs ``(before, after)``: some input sequence requires ``before``
        to precede the blocked head ``after``.
    remaining:
        The unmerged remainder of each input sequence.
    """

    def __init__(
        self,
        target: str | None,
        conflicts: tuple[tuple[str, str], ...],
        remaining: tuple[tuple[str, ...], ...] = (),
    ) -> None:
        self.target = target
        self.conflicts = conflicts
        self.remaining = remaining
        subject = f" for {target!r}" if target is not None else ""
        super().__init__(
            f"Cannot create a consistent method resolution order (MRO){subject}: "
            f"{self.describe_conflicts()}"
        )

    @property
    def classes(self) -> tuple[str, ...]:
        """Every class named in a conflict, sorted."""
        return tuple(sorted({name for pair in self.conflicts for name in pair}))

    def describe_conflicts(self) -> str:
        """Return the conflicts as a readable sentence fragment."""
        return "; ".join(
            f"{before!r} must precede {after!r}" for before, after in self.conflicts
        )
