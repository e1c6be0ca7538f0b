import click

from ..errors import FeatureNotFoundError
from ._shared import get_executor, get_prompter, get_store, handle_errors


@click.command()
@click.argument("repo-url")
@click.argument("local-path")
@click.pass_context
@handle_errors
def clone(ctx: click.Context, repo_url: str, local_path: str) -> None:
    """Clone a repository.

    REPO_URL: Repository URL
    LOCAL_PATH: Local path to clone the repository into
    """
    output = get_executor(ctx).clone(repo_url, local_path)
    if output:
        click.echo(output)
    click.echo("Repository cloned successfully")


@click.command()
@click.option("-m", "--message", required=True, help="Commit message")
@click.argument("files", nargs=-1)
@click.pass_context
@handle_errors
def commit(ctx: click.Context, message: str, files: tuple[str, ...]) -> None:
    """Commit changes.

    FILES: Files to stage before committing (default: commit the index as is)
    """
    output = get_executor(ctx).commit(message, files)
    if output:
        click.echo(output)


@click.command()
@click.argument("origin")
@click.argument("branch")
@click.option("-f", "--feature", help="Feature to record the pushed commit under")
@click.pass_context
@handle_errors
def push(ctx: click.Context, origin: str, branch: str, feature: str | None) -> None:
    """Push changes and record the pushed commit under a feature.

    ORIGIN: Remote repository name
    BRANCH: Branch name or refspec (SRC:DST)
    """
    executor = get_executor(ctx)
    store = get_store(ctx)

    features = store.load_features()
    if feature is not None and feature not in features:
        raise FeatureNotFoundError(f'Feature "{feature}" does not exist')
    if feature is None and features:
        feature = get_prompter(ctx).select_one("Select a feature to push", features)

    revision = executor.push(origin, branch)
    source, _, destination = branch.partition(":")
    click.echo(f"To {origin}")
    if revision is None:
        click.echo(f"   - [deleted] {destination}")
    else:
        click.echo(f"   {source} -> {destination or source} ({revision[:7]})")
    click.echo("Push successful")

    if feature is not None and revision is not None:
        store.append_commit(feature, revision)
        click.echo(f'Recorded {revision[:7]} under feature "{feature}"')


@click.command()
@click.argument("origin", required=False)
@click.argument("branch", required=False)
@click.pass_context
@handle_errors
def pull(ctx: click.Context, origin: str | None, branch: str | None) -> None:
    """Pull changes.

    Without both ORIGIN and BRANCH the configured upstream is used.
    """
    executor = get_executor(ctx)
    if origin and branch:
        output = executor.pull(origin, branch)
    else:
        output = executor.pull()
    if output:
        click.echo(output)
    click.echo("Pull successful")


@click.command()
@click.pass_context
@handle_errors
def status(ctx: click.Context) -> None:
    """Show the working tree status."""
    click.echo(get_executor(ctx).status())


@click.command()
@click.option("-n", "--max-count", type=int, help="Limit the number of commits")
@click.pass_context
@handle_errors
def log(ctx: click.Context, max_count: int | None) -> None:
    """Show commit logs."""
    click.echo(get_executor(ctx).log(max_count))
