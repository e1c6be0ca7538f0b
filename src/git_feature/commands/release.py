from textwrap import dedent

import click

from ..errors import InputError
from ..operations import PullRequestPublisher, ReleaseAssembler
from ..operations.publisher import parse_remote_url
from ._shared import get_config, get_executor, get_prompter, get_store, handle_errors


@click.command()
@click.option("--feature", help="Feature to release (prompted when omitted)")
@click.option("--base", "base_branch", help="Base branch (prompted when omitted)")
@click.option(
    "--verify/--no-verify",
    "verify_resolution",
    default=None,
    help="Check that conflicts are resolved before resuming",
)
@click.pass_context
@handle_errors
def release(
    ctx: click.Context,
    feature: str | None,
    base_branch: str | None,
    verify_resolution: bool | None,
) -> None:
    """Create a release branch from a feature's recorded commits."""
    config = get_config(ctx, verify_resolution=verify_resolution)
    assembler = ReleaseAssembler(
        get_executor(ctx), get_store(ctx), get_prompter(ctx), config
    )

    outcome = assembler.assemble(feature=feature, base_branch=base_branch)
    if outcome.status == "nothing-to-release":
        click.echo(outcome.message)
        return

    conflicts = len(outcome.conflicts)
    skipped = len(outcome.skipped)
    click.echo(
        dedent(
            f"""\
            Replayed {len(outcome.replayed)} commits onto {outcome.head_branch} ({conflicts} resolved by hand, {skipped} skipped)
            Feature release branch created successfully: {outcome.head_branch}
            Push it with: git push {config.remote} {outcome.head_branch}"""
        )
    )


@click.command("pr")
@click.option("--owner", help="Repository owner (default: from the remote URL)")
@click.option("--repo", help="Repository name (default: from the remote URL)")
@click.option("--head", help="Head branch (default: current branch)")
@click.option("--base", help="Base branch (default: configured base branch)")
@click.option("--title", help="Pull request title")
@click.option("--body", default="", help="Pull request description")
@click.option("--token", envvar="GITHUB_TOKEN", help="API token [env: GITHUB_TOKEN]")
@click.pass_context
@handle_errors
def pull_request(
    ctx: click.Context,
    owner: str | None,
    repo: str | None,
    head: str | None,
    base: str | None,
    title: str | None,
    body: str,
    token: str | None,
) -> None:
    """Open a pull request for a release branch."""
    if not token:
        raise InputError("An API token is required (--token or GITHUB_TOKEN)")

    executor = get_executor(ctx)
    config = get_config(ctx)

    if not owner or not repo:
        url = executor.get_remote_url(config.remote)
        parsed = parse_remote_url(url) if url else None
        if parsed is None:
            raise InputError(
                f"Cannot determine owner/repo from remote '{config.remote}'; "
                "use --owner and --repo"
            )
        owner = owner or parsed[0]
        repo = repo or parsed[1]

    head = head or executor.get_current_branch()
    base = base or config.base_branch
    title = title or f"Release {head}"

    publisher = ctx.ensure_object(dict).get("publisher") or PullRequestPublisher(
        api_url=config.api_url, timeout=config.timeout
    )
    record = publisher.create_pull_request(owner, repo, head, base, title, body, token)
    click.echo(f"Pull request #{record.number} created: {record.html_url or record.url}")
