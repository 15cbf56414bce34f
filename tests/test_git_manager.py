"""Tests for git repository management."""
import subprocess
from unittest.mock import Mock, patch

import pytest

from create_mn_app.core.errors import CloneError
from create_mn_app.services.git_manager import INITIAL_COMMIT_MESSAGE, GitManager


class TestGitManager:
    """Test GitManager operations."""

    def test_init_repo_mock_mode(self, tmp_path):
        """Test init in mock mode."""
        manager = GitManager(mock=True)
        assert manager.init_repo(tmp_path) is True

    @patch('subprocess.run')
    def test_init_repo_runs_init_add_commit(self, mock_run, tmp_path):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")
        manager = GitManager(mock=False)

        assert manager.init_repo(tmp_path) is True
        commands = [c[0][0] for c in mock_run.call_args_list]
        assert commands == [
            ['git', 'init'],
            ['git', 'add', '-A'],
            ['git', 'commit', '-m', INITIAL_COMMIT_MESSAGE],
        ]
        assert mock_run.call_args_list[0][1]['cwd'] == str(tmp_path)

    @patch('subprocess.run')
    def test_init_repo_failure_returns_false(self, mock_run, tmp_path):
        """A failing commit (e.g. no user.email) is reported, not raised."""
        def run_side_effect(cmd, **kwargs):
            if 'commit' in cmd:
                return Mock(returncode=128, stdout="", stderr="Please tell me who you are")
            return Mock(returncode=0, stdout="", stderr="")

        mock_run.side_effect = run_side_effect
        assert GitManager(mock=False).init_repo(tmp_path) is False

    @patch('subprocess.run', side_effect=FileNotFoundError("git"))
    def test_init_repo_without_git(self, mock_run, tmp_path):
        assert GitManager(mock=False).init_repo(tmp_path) is False

    def test_repository_url(self):
        manager = GitManager(mock=True)
        assert manager.repository_url("midnightntwrk/example-counter") == \
            "https://github.com/midnightntwrk/example-counter.git"
        assert manager.repository_url("https://example.com/x.git") == "https://example.com/x.git"

    def test_repository_url_custom_host(self, monkeypatch):
        monkeypatch.setenv('CREATE_MN_APP_GIT_HOST', 'https://git.example.com/')
        from create_mn_app.core.config import set_config
        set_config(None)
        assert GitManager(mock=True).repository_url("a/b") == "https://git.example.com/a/b.git"

    @patch('subprocess.run')
    def test_clone_strips_history(self, mock_run, tmp_path):
        dest = tmp_path / "app"

        def fake_clone(cmd, **kwargs):
            (dest / ".git" / "objects").mkdir(parents=True)
            (dest / "README.md").write_text("hi")
            return Mock(returncode=0, stdout="", stderr="")

        mock_run.side_effect = fake_clone
        GitManager(mock=False).clone("midnightntwrk/example-counter", dest)

        cmd = mock_run.call_args[0][0]
        assert cmd[:4] == ['git', 'clone', '--depth', '1']
        assert cmd[-1] == str(dest)
        assert not (dest / ".git").exists()
        assert (dest / "README.md").exists()

    @patch('subprocess.run')
    def test_clone_failure_raises(self, mock_run, tmp_path):
        mock_run.return_value = Mock(returncode=128, stdout="",
                                     stderr="fatal: repository not found\n")
        with pytest.raises(CloneError, match="repository not found") as exc:
            GitManager(mock=False).clone("owner/missing", tmp_path / "app")
        assert "internet connection" in exc.value.hint

    @patch('subprocess.run', side_effect=subprocess.TimeoutExpired(cmd='git', timeout=1))
    def test_clone_timeout_raises(self, mock_run, tmp_path):
        with pytest.raises(CloneError, match="timed out"):
            GitManager(mock=False).clone("owner/slow", tmp_path / "app")

    def test_clone_mock_mode_creates_destination(self, tmp_path):
        dest = tmp_path / "app"
        GitManager(mock=True).clone("owner/repo", dest)
        assert dest.is_dir()

    def test_strip_history_without_git_dir(self, tmp_path):
        GitManager.strip_history(tmp_path)
        assert tmp_path.exists()
