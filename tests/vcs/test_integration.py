"""Clone and update against real Git and Mercurial repositories."""

import shutil
from pathlib import Path

import git
import hglib  # type: ignore[import-untyped]
import pytest
from pytest_mock import MockerFixture
from rich.console import Console

from vcs_fetch.vcs.exceptions import BranchCheckoutError, CloneError, VersionCheckoutError
from vcs_fetch.vcs.git.manager import GitVcs
from vcs_fetch.vcs.mercurial.manager import MercurialVcs
from vcs_fetch.vcs.workdir import working_directory

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="Git is not installed")
requires_mercurial = pytest.mark.skipif(shutil.which("hg") is None, reason="Mercurial (hg) is not installed")

HG_USER = b"Test User <test@example.com>"


@pytest.fixture
def quiet_console(mocker: MockerFixture) -> Console:
    """Console double."""
    return mocker.MagicMock(spec=Console)


@pytest.fixture
def git_upstream(tmp_path: Path) -> git.Repo:
    """Create an upstream Git repository with one commit, a tag and a develop branch."""
    path = tmp_path / "upstream"
    repo = git.Repo.init(path)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")

    (path / "README.md").write_text("hello\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    repo.create_tag("1.0.0")
    repo.create_head("develop")
    return repo


def source_of(repo: git.Repo) -> str:
    """Get the path of a Git repository as a clone source."""
    return str(repo.working_tree_dir)


def commit_file(repo: git.Repo, name: str, content: str) -> None:
    """Commit a file to a Git repository."""
    path = Path(repo.working_tree_dir) / name  # type: ignore[arg-type]
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(f"Add {name}")


@requires_git
class TestGitRoundTrip:
    """Tests for GitVcs against a local upstream repository."""

    def test_clone_then_update_without_changes(
        self, git_upstream: git.Repo, tmp_path: Path, mocker: MockerFixture, quiet_console: Console
    ) -> None:
        """Test updating a fresh clone neither prompts nor changes HEAD."""
        confirm = mocker.MagicMock(return_value=False)
        client = GitVcs(confirm=confirm, console=quiet_console)
        destination = tmp_path / "libs" / "foo" / "git"

        client.clone(destination, source_of(git_upstream))
        head_before = git.Repo(destination).head.commit.hexsha
        with working_directory(destination):
            assert client.update("foo") is True

        confirm.assert_not_called()
        assert git.Repo(destination).head.commit.hexsha == head_before

    def test_update_pulls_new_commits(
        self, git_upstream: git.Repo, tmp_path: Path, quiet_console: Console
    ) -> None:
        """Test new upstream commits are pulled."""
        client = GitVcs(confirm=lambda _: False, console=quiet_console)
        destination = tmp_path / "clone"
        client.clone(destination, source_of(git_upstream))

        commit_file(git_upstream, "new.txt", "new\n")
        with working_directory(destination):
            assert client.update("foo") is True

        assert (destination / "new.txt").read_text() == "new\n"

    def test_update_declined_keeps_changes(
        self, git_upstream: git.Repo, tmp_path: Path, quiet_console: Console
    ) -> None:
        """Test local modifications survive when the reset is declined."""
        client = GitVcs(confirm=lambda _: False, console=quiet_console)
        destination = tmp_path / "clone"
        client.clone(destination, source_of(git_upstream))
        (destination / "README.md").write_text("local edit\n")

        with working_directory(destination):
            assert client.update("foo") is False

        assert (destination / "README.md").read_text() == "local edit\n"

    def test_update_accepted_discards_changes(
        self, git_upstream: git.Repo, tmp_path: Path, quiet_console: Console
    ) -> None:
        """Test local modifications are reset when confirmed."""
        client = GitVcs(confirm=lambda _: True, console=quiet_console)
        destination = tmp_path / "clone"
        client.clone(destination, source_of(git_upstream))
        (destination / "README.md").write_text("local edit\n")

        with working_directory(destination):
            assert client.update("foo") is True

        assert (destination / "README.md").read_text() == "hello\n"

    def test_clone_branch(self, git_upstream: git.Repo, tmp_path: Path, quiet_console: Console) -> None:
        """Test cloning at a branch checks it out."""
        destination = tmp_path / "clone"

        GitVcs(console=quiet_console).clone(destination, source_of(git_upstream), branch="develop")

        assert git.Repo(destination).active_branch.name == "develop"

    def test_clone_tag_detaches_head(self, git_upstream: git.Repo, tmp_path: Path, quiet_console: Console) -> None:
        """Test cloning at a tag leaves HEAD at the tagged commit."""
        tagged = git_upstream.tags["1.0.0"].commit.hexsha
        commit_file(git_upstream, "later.txt", "later\n")
        destination = tmp_path / "clone"

        GitVcs(console=quiet_console).clone(destination, source_of(git_upstream), version="1.0.0")

        repo = git.Repo(destination)
        assert repo.head.is_detached
        assert repo.head.commit.hexsha == tagged

    def test_update_from_tag_returns_to_branch(
        self, git_upstream: git.Repo, tmp_path: Path, mocker: MockerFixture, quiet_console: Console
    ) -> None:
        """Test updating a checkout pinned to a tag goes back to its branch and pulls."""
        confirm = mocker.MagicMock(return_value=False)
        client = GitVcs(confirm=confirm, console=quiet_console)
        destination = tmp_path / "clone"
        commit_file(git_upstream, "later.txt", "later\n")
        client.clone(destination, source_of(git_upstream), version="1.0.0")
        assert not (destination / "later.txt").exists()

        with working_directory(destination):
            assert client.update("foo") is True

        repo = git.Repo(destination)
        assert not repo.head.is_detached
        assert repo.active_branch.name == git_upstream.active_branch.name
        assert repo.head.commit.hexsha == git_upstream.head.commit.hexsha
        assert (destination / "later.txt").read_text() == "later\n"
        confirm.assert_not_called()

    def test_clone_missing_source(self, tmp_path: Path, quiet_console: Console) -> None:
        """Test cloning a missing repository raises CloneError."""
        with pytest.raises(CloneError) as exc_info:
            GitVcs(console=quiet_console).clone(tmp_path / "clone", str(tmp_path / "nowhere"))

        assert exc_info.value.diagnostic

    def test_clone_missing_branch(
        self, git_upstream: git.Repo, tmp_path: Path, quiet_console: Console, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a missing branch raises BranchCheckoutError and restores the working directory."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(BranchCheckoutError):
            GitVcs(console=quiet_console).clone(tmp_path / "clone", source_of(git_upstream), branch="nope")

        assert Path.cwd() == tmp_path.resolve()

    def test_clone_missing_tag(self, git_upstream: git.Repo, tmp_path: Path, quiet_console: Console) -> None:
        """Test a missing tag raises VersionCheckoutError."""
        with pytest.raises(VersionCheckoutError):
            GitVcs(console=quiet_console).clone(tmp_path / "clone", source_of(git_upstream), version="9.9.9")


@pytest.fixture
def hg_upstream(tmp_path: Path) -> Path:
    """Create an upstream Mercurial repository with one commit."""
    path = tmp_path / "upstream"
    hglib.init(str(path))
    (path / "a.txt").write_text("hello\n")
    client = hglib.open(str(path))
    try:
        client.add([str(path / "a.txt").encode()])
        client.commit(b"Initial commit", user=HG_USER)
    finally:
        client.close()
    return path


def hg_commit_file(repo_path: Path, name: str, content: str) -> None:
    """Commit a file to a Mercurial repository."""
    file_path = repo_path / name
    file_path.write_text(content)
    client = hglib.open(str(repo_path))
    try:
        client.add([str(file_path).encode()])
        client.commit(f"Add {name}".encode(), user=HG_USER)
    finally:
        client.close()


@requires_mercurial
class TestMercurialRoundTrip:
    """Tests for MercurialVcs against a local upstream repository."""

    def test_clone_then_update_without_changes(
        self, hg_upstream: Path, tmp_path: Path, mocker: MockerFixture, quiet_console: Console
    ) -> None:
        """Test updating a fresh clone neither prompts nor reports changes."""
        confirm = mocker.MagicMock(return_value=False)
        client = MercurialVcs(confirm=confirm, console=quiet_console)
        destination = tmp_path / "libs" / "foo" / "hg"
        destination.parent.mkdir(parents=True)

        client.clone(destination, str(hg_upstream))
        with working_directory(destination):
            assert client.update("foo") is False

        confirm.assert_not_called()

    def test_update_pulls_and_updates(self, hg_upstream: Path, tmp_path: Path, quiet_console: Console) -> None:
        """Test new upstream changesets are pulled and applied."""
        client = MercurialVcs(confirm=lambda _: False, console=quiet_console)
        destination = tmp_path / "clone"
        client.clone(destination, str(hg_upstream))

        hg_commit_file(hg_upstream, "b.txt", "new\n")
        with working_directory(destination):
            assert client.update("foo") is True

        assert (destination / "b.txt").read_text() == "new\n"

    def test_update_declined_keeps_changes(self, hg_upstream: Path, tmp_path: Path, quiet_console: Console) -> None:
        """Test local modifications block the update when the reset is declined."""
        client = MercurialVcs(confirm=lambda _: False, console=quiet_console)
        destination = tmp_path / "clone"
        client.clone(destination, str(hg_upstream))
        (destination / "a.txt").write_text("local edit\n")

        hg_commit_file(hg_upstream, "b.txt", "new\n")
        with working_directory(destination):
            assert client.update("foo") is False

        assert (destination / "a.txt").read_text() == "local edit\n"
        assert not (destination / "b.txt").exists()

    def test_clone_missing_source(self, tmp_path: Path, quiet_console: Console) -> None:
        """Test cloning a missing repository raises CloneError."""
        with pytest.raises(CloneError):
            MercurialVcs(console=quiet_console).clone(tmp_path / "clone", str(tmp_path / "nowhere"))
