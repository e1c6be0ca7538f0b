import click

from ..operations import JsonStateStore
from ._shared import get_prompter, get_state_dir, get_store, handle_errors


@click.command("add-feature")
@click.argument("feature")
@click.pass_context
@handle_errors
def add_feature(ctx: click.Context, feature: str) -> None:
    """Add a new feature.

    FEATURE: Feature name
    """
    get_store(ctx).add_feature(feature)
    click.echo(f'Feature "{feature}" added successfully.')


@click.command("remove-feature")
@click.argument("feature", required=False)
@click.pass_context
@handle_errors
def remove_feature(ctx: click.Context, feature: str | None) -> None:
    """Remove a feature.

    FEATURE: Feature name (selected interactively when omitted)
    """
    store = get_store(ctx)
    features = store.load_features()
    if not features:
        click.echo("No features available to remove.")
        return

    if feature is None:
        feature = get_prompter(ctx).select_one("Select a feature to remove", features)

    store.remove_feature(feature)
    click.echo(f'Feature "{feature}" removed successfully.')


@click.command("features")
@click.pass_context
@handle_errors
def list_features(ctx: click.Context) -> None:
    """List features and their recorded commits."""
    store = get_store(ctx)
    features = store.load_features()
    if not features:
        click.echo("No features registered.")
        return

    log = store.load_commit_log()
    for feature in features:
        count = len(log.get(feature, []))
        noun = "commit" if count == 1 else "commits"
        click.echo(f"  - {feature} ({count} {noun})")


@click.command()
@click.option("--force", is_flag=True, help="Overwrite existing state documents")
@click.pass_context
@handle_errors
def init(ctx: click.Context, force: bool) -> None:
    """Create empty feature registry and commit log documents."""
    store = JsonStateStore(get_state_dir(ctx))
    written = store.initialize(force=force)
    for path in written:
        click.echo(f"Initialized {path}")
    if not written:
        click.echo(f"State already initialized in {store.state_dir}")


@click.command()
@click.pass_context
def pwd(ctx: click.Context) -> None:
    """Print the directory holding the state documents."""
    click.echo(str(get_state_dir(ctx)))
