"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure ranking logic for duplicate groups, with no dependencies outside core.
"""
from typing import List
from find_duplicates.core.models import DuplicateGroup


class Sorter:
    """
    Orders duplicate groups for display.
    Groups are ranked by waste, largest first. Python's sort is stable, so
    groups with equal waste keep the order in which the pipeline produced them.
    Files inside a group keep their discovery order.
    """

    @staticmethod
    def sort_groups_by_waste(groups: List[DuplicateGroup]) -> List[DuplicateGroup]:
        return sorted(groups, key=lambda g: g.waste, reverse=True)
