"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/summary.py
One-line status for a finished search.

Note the two formulas: `wasted_bytes` sums each group's `waste`
(size * count, every copy included), while `redundant_files` counts
count - 1 per group. Both are kept as the desktop front end always showed them.
"""
from dataclasses import dataclass
from typing import List

from find_duplicates.core.models import DuplicateGroup
from find_duplicates.utils.convert_utils import ConvertUtils


@dataclass(frozen=True)
class DuplicationSummary:
    wasted_bytes: int
    redundant_files: int
    group_count: int

    @classmethod
    def from_groups(cls, groups: List[DuplicateGroup]) -> "DuplicationSummary":
        return cls(
            wasted_bytes=sum(g.waste for g in groups),
            redundant_files=sum(g.redundant_count for g in groups),
            group_count=len(groups),
        )

    def __str__(self) -> str:
        return (
            f"{ConvertUtils.format_size_decimal(self.wasted_bytes)} wasted "
            f"in {self.redundant_files} files (in {self.group_count} groups)"
        )


def duplication_status(groups: List[DuplicateGroup]) -> str:
    """e.g. '12.3 MB wasted in 8 files (in 3 groups)'."""
    return str(DuplicationSummary.from_groups(groups))
