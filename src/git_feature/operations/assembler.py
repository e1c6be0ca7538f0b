"""Assemble release branches from recorded feature commits."""

from dataclasses import dataclass
from typing import Literal

import click

from git_feature.errors import (
    BranchExistsError,
    FeatureNotFoundError,
    GitConflictError,
    ReleaseAbortedError,
)
from git_feature.log import logger
from git_feature.operations.config import ToolConfig
from git_feature.operations.executor import GitExecutor
from git_feature.operations.prompts import Prompter
from git_feature.operations.state import StateStore


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    """Result of one release run."""

    status: Literal["released", "nothing-to-release"]
    feature: str | None = None
    head_branch: str | None = None
    base_branch: str | None = None
    replayed: tuple[str, ...] = ()
    conflicts: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()
    message: str = ""


def release_branch_name(feature: str, prefix: str) -> str:
    return f"{prefix}{feature}"


class ReleaseAssembler:
    """Replay a feature's recorded commits onto a fresh release branch.

    Steps:
    - Pick a feature and make sure it has recorded commits
    - Pick the base branch (configured default when left blank)
    - Create and check out ``<prefix><feature>``
    - Pull the remote base branch into it
    - Cherry-pick each recorded commit in order, pausing on conflicts until
      the user has resolved them
    The branch is left for the user to push.
    """

    def __init__(
        self,
        executor: GitExecutor,
        store: StateStore,
        prompter: Prompter,
        config: ToolConfig,
    ):
        self.executor = executor
        self.store = store
        self.prompter = prompter
        self.config = config

    def assemble(
        self,
        feature: str | None = None,
        base_branch: str | None = None,
    ) -> ReleaseOutcome:
        features = self.store.load_features()
        if not features:
            return ReleaseOutcome(
                status="nothing-to-release",
                message="No features available to create a release.",
            )

        if feature is None:
            feature = self.prompter.select_one("Select a feature to release", features)
        elif feature not in features:
            raise FeatureNotFoundError(f'Feature "{feature}" does not exist')

        commits = self.store.commits_for(feature)
        if not commits:
            return ReleaseOutcome(
                status="nothing-to-release",
                feature=feature,
                message=f'No commits recorded for feature "{feature}".',
            )

        if base_branch is None:
            base_branch = self.prompter.text_input(
                "Enter the base branch to merge into", default=self.config.base_branch
            )
        base_branch = base_branch.strip() or self.config.base_branch

        head_branch = release_branch_name(feature, self.config.release_prefix)
        self._create_branch(head_branch, base_branch)

        logger.debug("Pulling %s/%s into %s", self.config.remote, base_branch, head_branch)
        self.executor.pull(self.config.remote, base_branch)

        replayed: list[str] = []
        conflicts: list[str] = []
        skipped: list[str] = []
        logger.debug("Cherry-picking %d commits onto %s", len(commits), head_branch)
        for commit in commits:
            logger.debug("Cherry-pick %s", commit[:8])
            try:
                applied = self.executor.cherry_pick(commit)
            except GitConflictError:
                conflicts.append(commit)
                click.echo(f"Conflict detected while cherry-picking commit: {commit}")
                applied = self._await_resolution(commit)
            if applied:
                replayed.append(commit)
            else:
                click.echo(f"Commit {commit} brings no changes, skipped")
                skipped.append(commit)

        return ReleaseOutcome(
            status="released",
            feature=feature,
            head_branch=head_branch,
            base_branch=base_branch,
            replayed=tuple(replayed),
            conflicts=tuple(conflicts),
            skipped=tuple(skipped),
        )

    def _create_branch(self, head_branch: str, base_branch: str) -> None:
        if self.executor.branch_exists(head_branch):
            raise BranchExistsError(f"Branch '{head_branch}' already exists")

        start_point = base_branch if self.executor.branch_exists(base_branch) else None
        self.executor.checkout_new_branch(head_branch, start_point)

    def _await_resolution(self, commit: str) -> bool:
        """Block until the user reports the conflict of ``commit`` as resolved.

        Returns False when the resolution left nothing to commit and the pick
        was skipped. Without ``verify_resolution`` unmerged paths are not
        checked, so concluding an unresolved pick fails with a GatewayError.
        """
        while True:
            if not self.prompter.confirm(
                "Resolve the conflict, stage the result and confirm to continue"
            ):
                raise ReleaseAbortedError(
                    f"Release aborted at commit '{commit}'; "
                    "commits replayed so far remain on the branch"
                )

            if self.config.verify_resolution:
                unmerged = self.executor.unmerged_paths()
                if unmerged:
                    click.echo("Unresolved conflicts remain in:")
                    for path in unmerged:
                        click.echo(f"  - {path}")
                    continue

            return self._conclude_pick()

    def _conclude_pick(self) -> bool:
        # The user may have committed the resolution already.
        if not self.executor.cherry_pick_in_progress():
            return True
        if self.executor.has_staged_changes() or self.executor.unmerged_paths():
            self.executor.continue_cherry_pick()
            return True
        self.executor.skip_cherry_pick()
        return False
