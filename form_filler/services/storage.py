"""Local file system access for input and output documents."""
from pathlib import Path
from typing import List, Union

from form_filler.domain.exceptions import DocumentNotFoundError, StorageError

PathLike = Union[str, Path]


class LocalStorage:
    """Reads and writes whole files on the local file system."""

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def read_all(self, path: PathLike) -> bytes:
        file_path = Path(path)
        if not file_path.is_file():
            raise DocumentNotFoundError(str(path))
        return file_path.read_bytes()

    def write_all(self, path: PathLike, data: bytes) -> None:
        file_path = Path(path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Cannot write '{path}': {e}")

    def list_files(self, directory: PathLike, suffix: str) -> List[Path]:
        """Files directly inside a directory whose name ends with suffix, case-insensitive."""
        dir_path = Path(directory)
        if not dir_path.is_dir():
            raise DocumentNotFoundError(str(directory))
        suffix = suffix.lower()
        return sorted(
            p for p in dir_path.iterdir()
            if p.is_file() and p.name.lower().endswith(suffix)
        )

    def ensure_directory(self, path: PathLike) -> Path:
        dir_path = Path(path)
        try:
            dir_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create directory '{path}': {e}")
        return dir_path
