"""Git client."""

import logging
import re
from pathlib import Path
from typing import ClassVar

from vcs_fetch.vcs.base import Vcs
from vcs_fetch.vcs.exceptions import BranchCheckoutError, CloneError, VersionCheckoutError
from vcs_fetch.vcs.models import VcsSettings
from vcs_fetch.vcs.registry import VCSType
from vcs_fetch.vcs.workdir import working_directory

logger = logging.getLogger(__name__)

# `git show-branch` marks the branch of each listed head as "[name]"
SHOW_BRANCH_PATTERN = re.compile(r"\[([^\]]*)\]")


class GitVcs(Vcs):
    """Clones and updates Git checkouts."""

    vcs_type = VCSType.GIT
    name = "Git"
    directory = VCSType.GIT.value
    default_executable = "git"
    # Bare `git` exits with code 1 even when installed
    probe_args: ClassVar[tuple[str, ...]] = ("help",)
    install_dirs: ClassVar[tuple[str, ...]] = (
        "C:\\Program Files (x86)\\Git\\bin",
        "C:\\Progra~1\\Git\\bin",
    )

    def clone(
        self,
        destination: str | Path,
        source: str,
        branch: str | None = None,
        version: str | None = None,
        settings: VcsSettings | None = None,
    ) -> None:
        """Clone a Git repository, then check out a branch and/or tag.

        Submodules are cloned recursively unless ``settings.flat`` is set.

        Args:
            destination: Directory to create the checkout in
            source: Remote URL or local path to clone from
            branch: Branch to check out after cloning (optional)
            version: Tag to check out after cloning (optional)
            settings: Settings overriding the instance defaults (optional)

        Raises:
            CloneError: If ``git clone`` fails
            BranchCheckoutError: If the branch checkout fails
            VersionCheckoutError: If the tag checkout fails
        """
        settings = self._resolve_settings(settings)
        args = ["clone", source, str(destination)]
        if not settings.flat:
            args.append("--recursive")

        logger.debug(f"Cloning {source} into {destination}")
        result = self.command(*args)
        if not result.success:
            raise CloneError(self, source, result.output or None)

        if not branch and not version:
            return

        with working_directory(destination):
            if branch:
                result = self.command("checkout", branch)
                if not result.success:
                    raise BranchCheckoutError(self, branch, result.output)
            if version:
                result = self.command("checkout", f"tags/{version}")
                if not result.success:
                    raise VersionCheckoutError(self, version, result.output)

    def update(self, library_name: str, settings: VcsSettings | None = None) -> bool:
        """Pull the latest changes into the checkout in the current directory.

        Uncommitted changes (staged or not) must be discarded before pulling;
        the user is asked first. A failing pull usually means the checkout is
        on a detached HEAD (a pinned tag or revision), in which case the parent
        branch is checked out and the pull retried once.

        Args:
            library_name: Name of the library, used in prompts
            settings: Settings overriding the instance defaults (optional)

        Returns:
            True if a pull was attempted, False if the user kept local changes
        """
        if self._is_dirty():
            if self.confirm(f"Reset changes to {library_name} {self.name} repo so we can pull latest version?"):
                self._sure(self.command("reset", "--hard"), "reset --hard")
            else:
                self._print(f"{self.name} repo left untouched")
                return False

        if not self.command("pull").success:
            self._recover_detached_head()
            self._sure(self.command("pull"), "pull")

        return True

    def _is_dirty(self) -> bool:
        """Check the working tree and the index against HEAD.

        Returns:
            True if either differs from HEAD
        """
        return (
            not self.command("diff", "--exit-code").success
            or not self.command("diff", "--cached", "--exit-code").success
        )

    def _recover_detached_head(self) -> None:
        """Force-checkout the branch the current HEAD was taken from."""
        output = self.command("show-branch").output
        match = SHOW_BRANCH_PATTERN.search(output)
        if match is None:
            logger.warning(f"{self.name}: could not determine parent branch from show-branch output")
            return

        branch = match.group(1)
        logger.debug(f"Pull failed, checking out parent branch {branch}")
        self._sure(self.command("checkout", branch, "--force"), f"checkout {branch}")
