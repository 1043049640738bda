"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File actions on search results: trash or delete, rename, save a path list,
open a file or its directory.

Batch actions are per-item resilient: every failure is collected and
reported, the rest of the batch still runs. This is the opposite of the
search engine, where the first I/O error ends the run.
"""
import logging
import os
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple
from send2trash import send2trash

logger = logging.getLogger(__name__)


@dataclass
class DeletionReport:
    """Outcome of a batch deletion."""
    deleted: List[str] = field(default_factory=list)
    errors: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        lines = [f"{len(self.deleted)} items deleted"]
        if self.errors:
            lines.append("Following errors happened:")
            lines.extend(f"  • {message}" for _, message in self.errors)
        return "\n".join(lines)


class FileService:
    """
    Cross-platform file operations for the review step.
    """

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except OSError as e:
            raise RuntimeError(f"Failed to move {path} to trash: {e}") from e

    @staticmethod
    def remove_file(file_path: str):
        """Removes a file permanently."""
        try:
            os.remove(file_path)
        except OSError as e:
            raise RuntimeError(f"File {file_path} cannot be removed. {e}") from e

    @classmethod
    def delete_files(cls, file_paths: Iterable[str], permanent: bool = False) -> DeletionReport:
        """
        Trashes (or removes, with permanent=True) every path.
        Never raises for a single file: failures end up in the report.
        """
        report = DeletionReport()
        action = cls.remove_file if permanent else cls.move_to_trash
        for path in file_paths:
            try:
                action(path)
            except (RuntimeError, OSError) as e:
                logger.warning(f"Could not delete {path}: {e}")
                report.errors.append((path, str(e)))
            else:
                logger.debug(f"Deleted {path}")
                report.deleted.append(path)
        return report

    @staticmethod
    def rename_file(file_path: str, new_name: str) -> str:
        """
        Renames a file inside its own directory.
        Returns:
            The new path (unchanged path if the name did not change)
        Raises:
            ValueError: the new name is empty or contains a path separator
            FileExistsError: another entry already has the new name
        """
        if not new_name or os.sep in new_name or (os.altsep and os.altsep in new_name):
            raise ValueError(f"Invalid file name: '{new_name}'")

        old_path = Path(file_path)
        if new_name == old_path.name:
            return str(old_path)

        new_path = old_path.with_name(new_name)
        if new_path.exists():
            raise FileExistsError(f"Can't rename [{old_path.name}] as [{new_path}] exists")

        os.rename(old_path, new_path)
        logger.debug(f"Renamed {old_path} to {new_path}")
        return str(new_path)

    @staticmethod
    def save_file_list(destination: str, file_paths: Iterable[str], overwrite: bool = False) -> int:
        """
        Writes one path per line.
        Returns:
            Number of paths written
        Raises:
            IsADirectoryError: destination exists and is not a regular file
            FileExistsError: destination is a file and overwrite is False
        """
        path = Path(destination)
        if path.exists():
            if not path.is_file():
                raise IsADirectoryError(f"You can't overwrite {path}")
            if not overwrite:
                raise FileExistsError(f"File already exists: {path}")

        count = 0
        with open(path, "w", encoding="utf-8") as f:
            for file_path in file_paths:
                f.write(f"{file_path}\n")
                count += 1
        return count

    @staticmethod
    def open_file(file_path: str):
        """Opens a file (or directory) with the system default application."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            if sys.platform == 'win32':
                os.startfile(str(path))
            elif sys.platform == 'darwin':
                subprocess.Popen(['open', str(path)])
            else:
                subprocess.Popen(['xdg-open', str(path)])
        except OSError as e:
            raise RuntimeError(f"Failed to open file: {e}") from e

    @classmethod
    def open_directory(cls, file_path: str):
        """Opens the directory containing a file."""
        cls.open_file(str(Path(file_path).parent))
