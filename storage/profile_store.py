# storage/profile_store.py
"""
Profile Store

Single file: data/profile.json
Flat key-value mapping over a fixed key set (autofill.profile.PROFILE_KEYS):
scalar profile attributes plus one list-valued key, workExperience.

- load(keys) returns only recognized keys that are present
- save(partial) merges a partial mapping; unknown keys are rejected
The autofill engine only reads. The profile editor is the only writer.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from autofill.config import PROFILE_PATH
from autofill.errors import UnknownProfileKey
from autofill.profile import EXPERIENCE_KEYS, PROFILE_KEYS, WORK_EXPERIENCE_KEY, as_flag


def _normalize_experience(entries: Any) -> list:
    """Keep known entry keys only; `enabled` defaults to true."""
    if not isinstance(entries, (list, tuple)):
        return []
    normalized = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        clean = {k: entry[k] for k in EXPERIENCE_KEYS if k in entry}
        clean["current"] = as_flag(clean.get("current"))
        clean["enabled"] = clean.get("enabled") is not False
        normalized.append(clean)
    return normalized


class ProfileStore:
    """JSON-file backed profile storage."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else PROFILE_PATH

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]):
        """Atomic write + fsync"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, str(self.path))
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def load(self, keys: Iterable[str] = PROFILE_KEYS) -> Dict[str, Any]:
        """Stored values for the requested keys. Missing keys are left out."""
        data = self._read()
        wanted = [k for k in keys if k in PROFILE_KEYS]
        return {k: data[k] for k in wanted if k in data}

    def save(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge a partial mapping into the store and return the full profile."""
        unknown = set(values) - set(PROFILE_KEYS)
        if unknown:
            raise UnknownProfileKey(unknown)

        data = self.load()
        for key, value in values.items():
            if key == WORK_EXPERIENCE_KEY:
                data[key] = _normalize_experience(value)
            else:
                data[key] = "" if value is None else str(value)

        self._write(data)
        return data
