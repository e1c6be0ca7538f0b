"""CLI entry point for git-feature."""

import click
from pathlib import Path

from .log import configure_logging
from .operations.config import STATE_DIR_ENV


@click.group()
@click.option(
    "--state-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=STATE_DIR_ENV,
    help="Directory for features.json and commit-log.json",
)
@click.option(
    "-C",
    "--repo-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Run git in this directory",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    state_dir: Path | None,
    repo_dir: Path | None,
    verbose: bool,
) -> None:
    """Git-feature: feature-based commit tracking.

    Record pushed commits under named features, then replay a feature's
    commits onto a fresh release branch and open a pull request.
    """
    obj = ctx.ensure_object(dict)
    if state_dir is not None:
        obj.setdefault("state_dir", state_dir)
    if repo_dir is not None:
        obj.setdefault("repo_dir", repo_dir)
    configure_logging(verbose)


# Import and register commands
from .commands.repo import clone, commit, push, pull, status, log
from .commands.features import add_feature, remove_feature, list_features, init, pwd
from .commands.release import release, pull_request

cli.add_command(clone)
cli.add_command(commit)
cli.add_command(push)
cli.add_command(pull)
cli.add_command(status)
cli.add_command(log)
cli.add_command(add_feature)
cli.add_command(remove_feature)
cli.add_command(list_features)
cli.add_command(init)
cli.add_command(pwd)
cli.add_command(release)
cli.add_command(pull_request)


if __name__ == "__main__":
    cli()
