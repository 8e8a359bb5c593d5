"""
Design (storage.py)
- Purpose: Load and save the registry to/from disk (JSON).
- Inputs: Path (from get_data_path() or --data), Data for save.
- Outputs: Data on load; None on save.
- Side effects: Reads/writes file. Missing or empty file loads as empty Data.
               Malformed content raises DataFormatError; OS failures raise StorageError.
- Thread-safety: Each call opens the file independently; no shared state.
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .config import DATA_DIR_NAME, DATA_FILENAME, DATA_PATH_ENV
from .errors import DataFormatError, StorageError
from .repository import Data

logger = logging.getLogger(__name__)


def _user_data_dir() -> Optional[Path]:
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else None
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg and sys.platform != "darwin":
        return Path(xdg)
    try:
        home = Path.home()
    except RuntimeError:
        return None
    if sys.platform == "darwin":
        return home / "Library" / "Application Support"
    return home / ".local" / "share"


def get_data_path() -> Optional[Path]:
    """
    Resolve the default data file. USER_REGISTRY_DATA wins; otherwise the platform's
    per-user data dir (APPDATA, ~/Library/Application Support, XDG_DATA_HOME or
    ~/.local/share). Returns None if no such dir can be determined.
    """
    override = os.environ.get(DATA_PATH_ENV)
    if override:
        return Path(override)
    base = _user_data_dir()
    if base is None:
        return None
    return base / DATA_DIR_NAME / DATA_FILENAME


def read_data(path: Path) -> Data:
    """
    Load the registry from a JSON file. Returns empty Data on missing or empty file.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("%s does not exist, starting empty", path)
        return Data()
    try:
        contents = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as err:
        raise DataFormatError(f"{path} is not valid UTF-8: {err}") from err
    except OSError as err:
        raise StorageError(f"could not read {path}: {err}") from err
    if not contents:
        logger.debug("%s is empty, starting empty", path)
        return Data()
    try:
        document = json.loads(contents)
    except (ValueError, RecursionError) as err:
        # ValueError covers JSONDecodeError and integers past the int conversion limit
        raise DataFormatError(f"{path} is not valid JSON: {err}") from err
    data = Data.from_dict(document)
    logger.debug("loaded %d users from %s", len(data), path)
    return data


def save_data(path: Path, data: Data) -> None:
    """
    Save the registry to a JSON file, replacing its whole content.
    Writes a sibling temp file then os.replace, so readers never see half a document.
    The parent directory must already exist.
    """
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    payload = json.dumps(data.to_dict(), ensure_ascii=False, separators=(",", ":"))
    try:
        encoded = payload.encode("utf-8")
    except UnicodeEncodeError as err:
        # e.g. lone surrogates from undecodable command-line bytes
        raise DataFormatError(f"user data cannot be stored as UTF-8: {err}") from err
    try:
        with open(tmp, "wb") as f:
            f.write(encoded)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except OSError as err:
        raise StorageError(f"could not write {path}: {err}") from err
    finally:
        if tmp.exists():
            tmp.unlink()
    logger.debug("saved %d users to %s", len(data), path)
