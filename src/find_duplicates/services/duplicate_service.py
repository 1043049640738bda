"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/duplicate_service.py
Review helpers over a finished search: picking which copies to act on
and keeping the group list consistent after files are deleted or renamed.
Selections are plain sets of paths, so any front end can drive them.
"""
import os
from dataclasses import replace
from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

from find_duplicates.core.exclusion import compile_glob
from find_duplicates.core.models import DuplicateGroup, FileInfo


class KeepStrategy(Enum):
    """Which file of each group stays unselected."""
    FIRST = "first"
    NEWEST = "newest"
    OLDEST = "oldest"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            KeepStrategy.FIRST: "Keep first",
            KeepStrategy.NEWEST: "Keep newest",
            KeepStrategy.OLDEST: "Keep oldest",
        }
        return mapping.get(self, self.value)


class DuplicateService:
    @staticmethod
    def file_to_keep(group: DuplicateGroup, strategy: KeepStrategy) -> Optional[FileInfo]:
        if not group.files:
            return None
        if strategy is KeepStrategy.FIRST:
            return group.files[0]
        if strategy is KeepStrategy.NEWEST:
            # Latest of equally new files, earliest of equally old ones
            return max(reversed(group.files), key=lambda f: f.modified)
        return min(group.files, key=lambda f: f.modified)

    @staticmethod
    def select_all_but(groups: List[DuplicateGroup], strategy: KeepStrategy) -> Set[str]:
        """
        Selects every file except one per group.
        Returns:
            Paths of the selected files
        """
        selected = set()
        for group in groups:
            keep = DuplicateService.file_to_keep(group, strategy)
            selected.update(f.path for f in group.files if f is not keep)
        return selected

    @staticmethod
    def select_by_wildcard(
            groups: List[DuplicateGroup],
            wildcard: str,
            selected: Iterable[str] = (),
            select: bool = True
    ) -> Set[str]:
        """
        Adds (or removes, with select=False) every file whose full path matches `wildcard`.
        Raises ExclusionPatternError for a malformed wildcard.
        """
        regex = compile_glob(wildcard)
        result = set(selected)
        for file in DuplicateService.iter_files(groups):
            if regex.match(file.path):
                if select:
                    result.add(file.path)
                else:
                    result.discard(file.path)
        return result

    @staticmethod
    def select_from_same_directory(
            groups: List[DuplicateGroup],
            path: str,
            selected: Iterable[str] = ()
    ) -> Set[str]:
        """Adds every listed file living in the same directory as `path`."""
        directory = os.path.dirname(path)
        result = set(selected)
        result.update(f.path for f in DuplicateService.iter_files(groups) if f.directory == directory)
        return result

    @staticmethod
    def toggle_selection(groups: List[DuplicateGroup], selected: Iterable[str]) -> Set[str]:
        current = set(selected)
        return {f.path for f in DuplicateService.iter_files(groups) if f.path not in current}

    @staticmethod
    def iter_files(groups: List[DuplicateGroup]) -> Iterable[FileInfo]:
        for group in groups:
            yield from group.files

    @staticmethod
    def all_paths(groups: List[DuplicateGroup]) -> List[str]:
        return [f.path for f in DuplicateService.iter_files(groups)]

    @staticmethod
    def remove_files_from_groups(groups: List[DuplicateGroup], file_paths: Iterable[str]) -> List[DuplicateGroup]:
        """
        Removes files with the specified paths from all duplicate groups.

        Groups that contain fewer than 2 files after removal are discarded.

        Args:
            groups: List of duplicate groups to update.
            file_paths: Paths of removed files.

        Returns:
            Updated list of duplicate groups.
        """
        removed = set(file_paths)
        updated_groups = []
        for group in groups:
            filtered_files = [f for f in group.files if f.path not in removed]
            if len(filtered_files) >= 2:
                updated_groups.append(DuplicateGroup(size=group.size, files=filtered_files))
        return updated_groups

    @staticmethod
    def rename_in_groups(groups: List[DuplicateGroup], old_path: str, new_path: str) -> List[DuplicateGroup]:
        """Points the entry for `old_path` at `new_path`; everything else is unchanged."""
        return [
            DuplicateGroup(
                size=group.size,
                files=[replace(f, path=new_path) if f.path == old_path else f for f in group.files]
            )
            for group in groups
        ]

    @staticmethod
    def group_header(group: DuplicateGroup) -> Tuple[str, str]:
        """
        Listing header for a group: ('3 x 100', '200 wasted').
        The header shows the bytes freed by keeping one copy.
        """
        return f"{group.duplicate_count} x {group.size}", f"{group.redundant_size} wasted"
