"""Shared utilities for commands."""

import functools
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, TypeVar

import click

from ..errors import FeatureError
from ..operations import (
    ClickPrompter,
    GitExecutor,
    JsonStateStore,
    Prompter,
    StateStore,
    ToolConfig,
    load_config,
)
from ..operations.config import default_state_dir

F = TypeVar("F", bound=Callable[..., Any])


def handle_errors(func: F) -> F:
    """Report FeatureError as a click error with the matching exit code."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except FeatureError as e:
            exc = click.ClickException(str(e))
            exc.exit_code = e.exit_code
            raise exc from e

    return wrapper  # type: ignore[return-value]


def get_executor(ctx: click.Context) -> GitExecutor:
    obj = ctx.ensure_object(dict)
    if "executor" not in obj:
        repo_dir: Path | None = obj.get("repo_dir")
        obj["executor"] = GitExecutor(repo_dir)
    return obj["executor"]


def get_state_dir(ctx: click.Context) -> Path:
    obj = ctx.ensure_object(dict)
    return obj.get("state_dir") or default_state_dir()


def get_store(ctx: click.Context) -> StateStore:
    obj = ctx.ensure_object(dict)
    if "store" not in obj:
        obj["store"] = JsonStateStore(get_state_dir(ctx))
    return obj["store"]


def get_prompter(ctx: click.Context) -> Prompter:
    obj = ctx.ensure_object(dict)
    if "prompter" not in obj:
        obj["prompter"] = ClickPrompter()
    return obj["prompter"]


def get_config(ctx: click.Context, **overrides: Any) -> ToolConfig:
    """Load configuration once per invocation, then apply overrides."""
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        obj["config"] = load_config(get_executor(ctx), get_state_dir(ctx))
    config: ToolConfig = obj["config"]
    explicit = {k: v for k, v in overrides.items() if v is not None}
    if explicit:
        config = replace(config, **explicit)
    return config
