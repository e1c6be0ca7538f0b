"""Configuration for git-feature."""

import os
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from git_feature.errors import InputError
from git_feature.operations.executor import GitExecutor

DEFAULT_BASE_BRANCH = "main"
DEFAULT_REMOTE = "origin"
DEFAULT_RELEASE_PREFIX = "release-"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0

STATE_DIR_ENV = "GIT_FEATURE_STATE_DIR"
CONFIG_SECTION = "feature"

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def default_state_dir() -> Path:
    """Directory holding the state documents when none is configured."""
    env = os.environ.get(STATE_DIR_ENV)
    if env:
        return Path(env)
    return Path(tempfile.gettempdir())


@dataclass(frozen=True, slots=True)
class ToolConfig:
    """Immutable settings for one invocation."""

    state_dir: Path
    base_branch: str = DEFAULT_BASE_BRANCH
    remote: str = DEFAULT_REMOTE
    release_prefix: str = DEFAULT_RELEASE_PREFIX
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    verify_resolution: bool = True


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise InputError(f"Invalid boolean for {key}: {value}")


def load_config(
    executor: GitExecutor,
    state_dir: Path | None = None,
    **overrides: Any,
) -> ToolConfig:
    """Build the configuration for a command.

    Explicit overrides win over ``feature.*`` git config keys, which win
    over the defaults. Overrides that are None are ignored.
    """
    config = ToolConfig(state_dir=state_dir or default_state_dir())

    from_git: dict[str, Any] = {}
    base_branch = executor.get_config(f"{CONFIG_SECTION}.baseBranch")
    if base_branch:
        from_git["base_branch"] = base_branch
    remote = executor.get_config(f"{CONFIG_SECTION}.remote")
    if remote:
        from_git["remote"] = remote
    prefix = executor.get_config(f"{CONFIG_SECTION}.releasePrefix")
    if prefix:
        from_git["release_prefix"] = prefix
    api_url = executor.get_config(f"{CONFIG_SECTION}.apiUrl")
    if api_url:
        from_git["api_url"] = api_url.rstrip("/")
    verify = executor.get_config(f"{CONFIG_SECTION}.verifyResolution")
    if verify:
        from_git["verify_resolution"] = _parse_bool(
            f"{CONFIG_SECTION}.verifyResolution", verify
        )

    explicit = {k: v for k, v in overrides.items() if v is not None}
    return replace(config, **{**from_git, **explicit})
