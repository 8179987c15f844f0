"""Project file discovery."""

import os
from pathlib import Path

from cssaudit.exclusion import FileExcluder


def list_project_files(project_root: Path, excluder: FileExcluder | None = None) -> list[Path]:
    """Return every non-excluded file under ``project_root``, sorted by path.

    Excluded directories are pruned rather than walked.

    Raises:
        FileNotFoundError: If ``project_root`` does not exist.
        NotADirectoryError: If ``project_root`` is not a directory.
    """
    if not project_root.exists():
        raise FileNotFoundError(f"Project root not found: {project_root}")
    if not project_root.is_dir():
        raise NotADirectoryError(f"Project root is not a directory: {project_root}")

    excluder = excluder or FileExcluder(project_root)
    files: list[Path] = []

    def _raise(error: OSError) -> None:
        raise error

    for dirpath, dirnames, filenames in os.walk(project_root, onerror=_raise):
        current = Path(dirpath)
        # Prune in place so os.walk does not descend into excluded directories
        dirnames[:] = sorted(d for d in dirnames if not excluder.should_exclude_dir(current / d))
        for filename in filenames:
            file_path = current / filename
            if not excluder.should_exclude(file_path):
                files.append(file_path)

    return sorted(files)
