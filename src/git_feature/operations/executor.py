"""Git command facade for git-feature."""

import subprocess
from pathlib import Path

from git_feature.errors import GatewayError, GitConflictError
from git_feature.log import logger


class GitExecutor:
    """Execute git commands with proper error handling."""

    def __init__(self, cwd: Path | None = None):
        self.cwd = cwd

    def run(
        self,
        args: list[str],
        check: bool = True,
        capture: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        """Run a git command and always return a CompletedProcess.

        With ``check`` a non-zero exit status raises GatewayError carrying
        git's own error output.
        """
        cmd = ["git"] + args
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError as e:
            raise GatewayError(f"git executable not found: {e}") from e

        if check and result.returncode != 0:
            err = (result.stderr or result.stdout or "").strip()
            raise GatewayError(f"git {' '.join(args)} failed: {err}")
        return result

    def clone(self, url: str, path: str) -> str:
        """Clone a remote repository into a local path."""
        result = self.run(["clone", url, path], capture=True)
        return (result.stdout or result.stderr or "").strip()

    def commit(self, message: str, files: tuple[str, ...] = ()) -> str:
        """Stage ``files`` (if any) and commit the index."""
        if files:
            self.run(["add", "--", *files], capture=True)
        result = self.run(["commit", "-m", message], capture=True)
        return (result.stdout or "").strip()

    def push(self, remote: str, refspec: str) -> str | None:
        """Push a branch or refspec and return the revision hash that was pushed.

        The source side of ``src:dst`` is resolved before pushing. A deletion
        refspec (``:dst``) pushes no revision and returns None.
        """
        source = refspec.split(":", 1)[0].lstrip("+")
        revision = self.rev_parse(source) if source else None
        self.run(["push", remote, refspec], capture=True)
        return revision

    def pull(self, remote: str | None = None, branch: str | None = None) -> str:
        """Pull from a remote, or from the configured upstream."""
        args = ["pull"]
        if remote:
            args.append(remote)
            if branch:
                args.append(branch)
        result = self.run(args, capture=True)
        return (result.stdout or "").strip()

    def status(self) -> str:
        """Get working tree status."""
        return (self.run(["status"], capture=True).stdout or "").rstrip()

    def log(self, max_count: int | None = None) -> str:
        """Get commit history of the current branch."""
        args = ["log"]
        if max_count is not None:
            args += ["-n", str(max_count)]
        return (self.run(args, capture=True).stdout or "").rstrip()

    def get_current_branch(self) -> str:
        """Get current branch name."""
        result = self.run(["rev-parse", "--abbrev-ref", "HEAD"], capture=True)
        return (result.stdout or "").strip()

    def rev_parse(self, ref: str) -> str:
        """Resolve a ref to a full revision hash."""
        result = self.run(["rev-parse", ref], capture=True)
        return (result.stdout or "").strip()

    def branch_exists(self, branch: str) -> bool:
        """Check if a local branch exists."""
        result = self.run(
            ["rev-parse", "--verify", f"refs/heads/{branch}"],
            check=False,
            capture=True,
        )
        return result.returncode == 0

    def checkout_new_branch(self, branch: str, start_point: str | None = None) -> None:
        """Create a new branch and check it out."""
        args = ["checkout", "-b", branch]
        if start_point:
            args.append(start_point)
        self.run(args, capture=True)

    def unmerged_paths(self) -> list[str]:
        """List paths that still carry conflict markers in the index."""
        result = self.run(
            ["diff", "--name-only", "--diff-filter=U"],
            check=False,
            capture=True,
        )
        if result.returncode != 0:
            return []
        return [p for p in (result.stdout or "").splitlines() if p]

    def has_staged_changes(self) -> bool:
        """Check whether the index differs from HEAD."""
        result = self.run(["diff", "--cached", "--quiet"], check=False, capture=True)
        if result.returncode not in (0, 1):
            err = (result.stderr or "").strip()
            raise GatewayError(f"git diff --cached --quiet failed: {err}")
        return result.returncode == 1

    def cherry_pick(self, commit: str) -> bool:
        """Cherry-pick a commit, leaving conflict state on failure for manual resolution.

        Returns False when the commit's changes are already present and the
        pick came out empty; that pick is skipped rather than committed.
        """
        result = self.run(["cherry-pick", commit], check=False, capture=True)
        if result.returncode == 0:
            return True

        err = (result.stderr or result.stdout or "").strip()
        output = (result.stdout or "") + (result.stderr or "")
        if "CONFLICT" in output or self.unmerged_paths():
            raise GitConflictError(
                f"Cherry-pick conflict for commit '{commit}': {err}", commit=commit
            )
        if self.cherry_pick_in_progress() and not self.has_staged_changes():
            logger.info("Commit %s is already applied, skipping it", commit)
            self.skip_cherry_pick()
            return False
        raise GatewayError(f"Cherry-pick of commit '{commit}' failed: {err}")

    def cherry_pick_in_progress(self) -> bool:
        """Check whether a cherry-pick is waiting to be concluded."""
        result = self.run(
            ["rev-parse", "-q", "--verify", "CHERRY_PICK_HEAD"],
            check=False,
            capture=True,
        )
        return result.returncode == 0

    def continue_cherry_pick(self) -> None:
        """Conclude a resolved cherry-pick without opening an editor."""
        self.run(["-c", "core.editor=true", "cherry-pick", "--continue"], capture=True)

    def skip_cherry_pick(self) -> None:
        """Drop a pending cherry-pick whose result is empty."""
        self.run(["cherry-pick", "--skip"], capture=True)

    def get_config(self, key: str) -> str | None:
        """Get a git config value, or None when unset."""
        result = self.run(["config", "--get", key], capture=True, check=False)
        if result.returncode != 0:
            return None
        return (result.stdout or "").strip()

    def get_remote_url(self, remote: str) -> str | None:
        """Get the URL of a remote, or None when it is not configured."""
        result = self.run(["remote", "get-url", remote], capture=True, check=False)
        if result.returncode != 0:
            return None
        return (result.stdout or "").strip() or None
