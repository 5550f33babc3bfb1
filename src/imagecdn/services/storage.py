import os
from typing import List


def ensure_storage_dir(path: str) -> str:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)
    return path


def list_stored_files(path: str) -> List[str]:
    """
    Live listing of the storage directory. The directory itself is the catalog,
    so nothing is cached between calls.
    """
    return os.listdir(path)


def delete_stored_file(path: str, filename: str) -> None:
    # filename is used as given; FileNotFoundError/OSError propagate to the caller
    os.remove(os.path.join(path, filename))
