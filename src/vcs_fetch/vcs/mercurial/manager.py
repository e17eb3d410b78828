"""Mercurial client."""

import logging
import re
from pathlib import Path
from typing import ClassVar

from vcs_fetch.vcs.base import Vcs
from vcs_fetch.vcs.exceptions import CloneError
from vcs_fetch.vcs.models import VcsSettings
from vcs_fetch.vcs.registry import VCSType

logger = logging.getLogger(__name__)

DIGIT_PATTERN = re.compile(r"\d")


class MercurialVcs(Vcs):
    """Clones and updates Mercurial checkouts."""

    vcs_type = VCSType.MERCURIAL
    name = "Mercurial"
    directory = VCSType.MERCURIAL.value
    default_executable = "hg"
    install_dirs: ClassVar[tuple[str, ...]] = (
        "C:\\Program Files\\Mercurial",
        "C:\\Program Files (x86)\\Mercurial",
    )

    def clone(
        self,
        destination: str | Path,
        source: str,
        branch: str | None = None,
        version: str | None = None,
        settings: VcsSettings | None = None,
    ) -> None:
        """Clone a Mercurial repository at a branch and/or revision.

        Both are passed straight to ``hg clone``, so no checkout step follows.

        Args:
            destination: Directory to create the checkout in
            source: Remote URL or local path to clone from
            branch: Branch to clone (optional)
            version: Revision or tag to update to (optional)
            settings: Settings overriding the instance defaults (optional)

        Raises:
            CloneError: If ``hg clone`` fails
        """
        args = ["clone", source, str(destination)]
        if branch:
            args.extend(["--branch", branch])
        if version:
            args.extend(["--rev", version])

        logger.debug(f"Cloning {source} into {destination}")
        result = self.command(*args)
        if not result.success:
            raise CloneError(self, source, result.output or None)

    def update(self, library_name: str, settings: VcsSettings | None = None) -> bool:
        """Pull and update the checkout in the current directory.

        ``hg pull`` only adds changesets to the local history, so local
        modifications are looked at afterwards and only block the final
        ``hg update``.

        Whether anything was pulled is guessed from the last line of
        ``hg summary``: it contains a number only when there are changesets to
        update to. The wording depends on the user's locale, so only the
        presence of a digit is checked.

        Args:
            library_name: Name of the library, used in prompts
            settings: Settings overriding the instance defaults (optional)

        Returns:
            True if new changesets were pulled and the working tree may change
        """
        self._sure(self.command("pull"), "pull")

        summary = self._last_summary_line(self.command("summary").output)
        changed = DIGIT_PATTERN.search(summary) is not None
        if changed:
            self._print(summary)

        diff = self.command("diff", "-U", "2", "--git", "--subrepos")
        status = self.command("status")
        if not diff.success or not status.success or diff.output or status.output:
            self._print(diff.output)
            if self.confirm(f"Reset changes to {library_name} {self.name} repo so we can update to latest version?"):
                self._sure(self.command("update", "--clean"), "update --clean")
            else:
                changed = False
                self._print(f"{self.name} repo left untouched")
        elif changed:
            self._sure(self.command("update"), "update")

        return changed

    @staticmethod
    def _last_summary_line(summary: str) -> str:
        lines = [line for line in summary.splitlines() if line.strip()]
        return lines[-1].strip() if lines else ""
