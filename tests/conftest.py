"""Shared test fixtures for create-mn-app tests."""
import io
import tempfile
from pathlib import Path
from typing import List, Optional

import pytest
from rich.console import Console

from create_mn_app.core import config as config_module
from create_mn_app.core.errors import CommandError, OperationCancelled
from create_mn_app.core.logger import enable_debug
from create_mn_app.core.registry import get_registry
from create_mn_app.core.requirements import RequirementVerifier
from create_mn_app.models.request import CreationRequest
from create_mn_app.prompts import Prompter
from create_mn_app.services.compact import version_satisfies


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts from default configuration, outside mock mode."""
    for var in ('CREATE_MN_APP_MOCK', 'CREATE_MN_APP_MIN_PYTHON', 'npm_config_user_agent'):
        monkeypatch.delenv(var, raising=False)
    config_module.set_config(None)
    yield
    config_module.set_config(None)
    enable_debug(False)


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    temp = Path(tempfile.mkdtemp())
    yield temp


@pytest.fixture
def quiet_console():
    """Console that writes into a buffer (read it with ``.file.getvalue()``)."""
    return Console(file=io.StringIO(), width=120)


class CannedPrompter(Prompter):
    """Answers prompts from queues; an empty queue means the operator aborted."""

    def __init__(self, texts=None, selections=None, confirms=None):
        self.texts: List[str] = list(texts or [])
        self.selections: List[str] = list(selections or [])
        self.confirms: List[bool] = list(confirms or [])
        self.asked: List[str] = []
        self.choices = []

    def ask_text(self, message, default=None, validate=None):
        self.asked.append(message)
        if not self.texts:
            raise OperationCancelled()
        value = self.texts.pop(0)
        if validate and validate(value) is not None:
            raise AssertionError(f"canned answer {value!r} rejected: {validate(value)}")
        return value

    def ask_select(self, message, choices):
        self.asked.append(message)
        self.choices = list(choices)
        if not self.selections:
            raise OperationCancelled()
        return self.selections.pop(0)

    def ask_confirm(self, message, default=False):
        self.asked.append(message)
        if not self.confirms:
            raise OperationCancelled()
        return self.confirms.pop(0)


class FakeGit:
    """GitManager stand-in that records calls."""

    def __init__(self, clone_error: Optional[Exception] = None, init_ok: bool = True,
                 clone_files=None):
        self.clone_error = clone_error
        self.init_ok = init_ok
        self.clone_files = clone_files or {"package.json": "{}"}
        self.calls = []

    def clone(self, repository, destination):
        self.calls.append(('clone', repository, destination))
        if self.clone_error:
            destination.mkdir(parents=True, exist_ok=True)
            (destination / "partial").write_text("x")
            raise self.clone_error
        destination.mkdir(parents=True)
        (destination / ".git").mkdir()
        for relative, content in self.clone_files.items():
            target = destination / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)

    def strip_history(self, path):
        self.calls.append(('strip_history', path))
        git_dir = path / ".git"
        if git_dir.is_dir():
            git_dir.rmdir()

    def init_repo(self, path):
        self.calls.append(('init_repo', path))
        return self.init_ok


class FakeDocker:
    def __init__(self, engine=True, image=True):
        self.engine = engine
        self.image = image
        self.proof_server_image = "midnightntwrk/proof-server"

    def engine_version(self):
        return "Docker version 27.0.0" if self.engine else None

    def is_named_image_present(self, image_name):
        return self.engine and self.image and image_name == self.proof_server_image


class FakeCompact:
    """Compact toolchain whose version changes when updated."""

    def __init__(self, installed: Optional[str] = "0.23.0", after_update: Optional[str] = None,
                 update_error: bool = False):
        self.installed = installed
        self.after_update = after_update
        self.update_error = update_error
        self.updates: List[str] = []

    def installed_version(self):
        return self.installed

    def needs_update(self, installed, required):
        return installed is not None and not version_satisfies(installed, required)

    def update(self, version):
        self.updates.append(version)
        if self.update_error:
            raise CommandError(['compact', 'update', version], 1, "network unreachable")
        self.installed = self.after_update


class FakeInstaller:
    """PackageInstaller stand-in; instances are shared through ``log``."""

    def __init__(self, log, fail_install=False, fail_scripts=(), stderr="npm ERR! network"):
        self.log = log
        self.fail_install = fail_install
        self.stderr = stderr
        self.fail_scripts = set(fail_scripts)

    def __call__(self, package_manager):
        self.log.append(('factory', package_manager))
        return self

    def install(self, project_path):
        self.log.append(('install', project_path))
        if self.fail_install:
            raise CommandError(['npm', 'install'], 1, self.stderr)

    def run_script(self, project_path, script):
        self.log.append(('run_script', script))
        if script in self.fail_scripts:
            raise CommandError(['npm', 'run', script], 2, "compact: not found")


@pytest.fixture
def registry():
    return get_registry()


@pytest.fixture
def make_request(registry, tmp_path):
    """Build a CreationRequest for a catalog template under tmp_path."""

    def _make(template="hello-world", name="demo", **kwargs):
        return CreationRequest(
            project_name=name,
            project_path=tmp_path / name,
            template=registry.lookup(template),
            **kwargs,
        )

    return _make


def make_verifier(console, compact=None, node="22.3.0", docker=None):
    return RequirementVerifier(
        docker=docker or FakeDocker(),
        compact=compact or FakeCompact(),
        node_version_reader=lambda: node,
        console=console,
    )
