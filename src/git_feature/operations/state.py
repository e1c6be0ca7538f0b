"""Feature registry and commit log persistence."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from git_feature.errors import (
    DuplicateFeatureError,
    FeatureNotFoundError,
    InputError,
    StateReadError,
    StateWriteError,
)
from git_feature.log import logger

FEATURES_FILE = "features.json"
COMMIT_LOG_FILE = "commit-log.json"


class StateStore:
    """Feature registry and per-feature commit log.

    Subclasses provide the four load/save primitives; the registry and log
    operations are built on top of them. Every mutation is a full read
    followed by a full write, with no locking between processes.
    """

    def load_features(self) -> list[str]:
        raise NotImplementedError

    def save_features(self, features: list[str]) -> None:
        raise NotImplementedError

    def load_commit_log(self) -> dict[str, list[str]]:
        raise NotImplementedError

    def save_commit_log(self, log: dict[str, list[str]]) -> None:
        raise NotImplementedError

    def add_feature(self, feature: str) -> None:
        """Append a feature to the registry."""
        if not feature or not feature.strip():
            raise InputError("Feature name must not be empty")
        if feature.isdigit():
            # A bare number selects by position in ClickPrompter.select_one.
            raise InputError(f'Feature name "{feature}" must not be only digits')

        features = self.load_features()
        if feature in features:
            raise DuplicateFeatureError(f'Feature "{feature}" already exists')

        features.append(feature)
        self.save_features(features)

    def remove_feature(self, feature: str) -> None:
        """Remove a feature from the registry, keeping the others in order."""
        features = self.load_features()
        if feature not in features:
            raise FeatureNotFoundError(f'Feature "{feature}" does not exist')

        self.save_features([f for f in features if f != feature])

    def append_commit(self, feature: str, commit_id: str) -> None:
        """Record a revision hash at the end of a feature's commit list."""
        log = self.load_commit_log()
        log.setdefault(feature, []).append(commit_id)
        self.save_commit_log(log)

    def commits_for(self, feature: str) -> list[str]:
        return list(self.load_commit_log().get(feature, []))


class MemoryStateStore(StateStore):
    """State kept in process memory."""

    def __init__(
        self,
        features: list[str] | None = None,
        commit_log: dict[str, list[str]] | None = None,
    ):
        self._features = list(features or [])
        self._commit_log = {k: list(v) for k, v in (commit_log or {}).items()}

    def load_features(self) -> list[str]:
        return list(self._features)

    def save_features(self, features: list[str]) -> None:
        self._features = list(features)

    def load_commit_log(self) -> dict[str, list[str]]:
        return {k: list(v) for k, v in self._commit_log.items()}

    def save_commit_log(self, log: dict[str, list[str]]) -> None:
        self._commit_log = {k: list(v) for k, v in log.items()}


def _atomic_write_json(path: Path, data: Any) -> None:
    """Write JSON to path atomically using temp file + replace."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
                handle.write("\n")
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink(missing_ok=True)
    except OSError as e:
        raise StateWriteError(f"Failed to write {path}: {e}") from e


class JsonStateStore(StateStore):
    """State kept in two JSON documents inside a directory.

    ``features.json`` holds ``{"features": [...]}`` and ``commit-log.json``
    maps each feature to its list of revision hashes. Documents that are
    missing or malformed read as empty.
    """

    def __init__(self, state_dir: Path):
        self.state_dir = Path(state_dir)

    @property
    def features_path(self) -> Path:
        return self.state_dir / FEATURES_FILE

    @property
    def commit_log_path(self) -> Path:
        return self.state_dir / COMMIT_LOG_FILE

    def _read_json(self, path: Path) -> Any:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StateReadError(f"Cannot read {path}: {e}") from e
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise StateReadError(f"Invalid JSON in {path}: {e}") from e

    def _parse_features(self, data: Any) -> list[str]:
        if not isinstance(data, dict):
            raise StateReadError(f"{self.features_path} is not a JSON object")
        features = data.get("features")
        if not isinstance(features, list) or not all(
            isinstance(f, str) for f in features
        ):
            raise StateReadError(f"{self.features_path} has no list of features")
        return features

    def load_features(self) -> list[str]:
        try:
            return self._parse_features(self._read_json(self.features_path))
        except StateReadError as e:
            logger.debug("Using empty feature registry: %s", e)
            return []

    def save_features(self, features: list[str]) -> None:
        _atomic_write_json(self.features_path, {"features": list(features)})

    def load_commit_log(self) -> dict[str, list[str]]:
        try:
            data = self._read_json(self.commit_log_path)
        except StateReadError as e:
            logger.debug("Using empty commit log: %s", e)
            return {}

        if not isinstance(data, dict):
            logger.debug("Using empty commit log: %s is not a JSON object", self.commit_log_path)
            return {}

        log: dict[str, list[str]] = {}
        for feature, commits in data.items():
            if isinstance(commits, list) and all(isinstance(c, str) for c in commits):
                log[feature] = commits
            else:
                logger.debug("Dropping malformed commit log entry for %s", feature)
        return log

    def save_commit_log(self, log: dict[str, list[str]]) -> None:
        _atomic_write_json(self.commit_log_path, {k: list(v) for k, v in log.items()})

    def initialize(self, force: bool = False) -> list[Path]:
        """Create empty state documents, returning the paths written."""
        written = []
        if force or not self.commit_log_path.exists():
            self.save_commit_log({})
            written.append(self.commit_log_path)
        if force or not self.features_path.exists():
            self.save_features([])
            written.append(self.features_path)
        return written
