"""ConflictReport: advisory result of checking a proposed schedule against existing bookings."""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ConflictReport:
    has_conflicts: bool = False
    message: Optional[str] = None
    conflicts: Tuple[str, ...] = ()

    @classmethod
    def none(cls) -> "ConflictReport":
        return cls()

    @staticmethod
    def from_dict(data) -> "ConflictReport":
        conflicts = data.get("conflicts") or []
        return ConflictReport(
            has_conflicts=bool(data.get("hasConflicts", False)),
            message=data.get("message"),
            conflicts=tuple(str(c) for c in conflicts),
        )

    def to_dict(self):
        d = {"hasConflicts": self.has_conflicts}
        if self.message:
            d["message"] = self.message
        if self.conflicts:
            d["conflicts"] = list(self.conflicts)
        return d


__all__ = ['ConflictReport']
