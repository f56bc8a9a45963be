import uuid
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import yaml

from runtimebuilder import constants
from runtimebuilder.constants import StepKind
from runtimebuilder.io import MemoryFileSystem


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment from steering config lookup or log levels."""
    monkeypatch.delenv(constants.APP_YAML_ENV, raising=False)
    monkeypatch.delenv(constants.LOG_LEVELS_ENV, raising=False)


@pytest.fixture
def make_workspace(tmp_path: Path):
    """
    Create a workspace on disk.

    `files` maps relative paths to contents, dict contents are dumped as YAML.
    """
    def _make(files: Optional[Dict[str, object]] = None) -> Path:
        workspace = tmp_path / "workspace"
        workspace.mkdir(exist_ok=True)
        for relative, content in (files or {}).items():
            path = workspace / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, dict):
                content = yaml.safe_dump(content)
            path.write_text(content or "")
        return workspace
    return _make


@pytest.fixture
def memory_root() -> Path:
    """A root path no other test uses in the process-wide memory store."""
    return Path(f"/rtb-test-{uuid.uuid4().hex}")


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


# -------------------------
#
#   Recording steps
#
# -------------------------

class RecordingStep:
    """Stand-in build step recording every context it runs against."""

    def __init__(self, kind: StepKind, error: Optional[Exception] = None, line: Optional[str] = None):
        self.kind = kind
        self.error = error
        self.line = line or f"# {kind.value}"
        self.contexts: List[object] = []

    def run(self, context) -> None:
        self.contexts.append(context)
        if self.error is not None:
            raise self.error
        context.dockerfile.append_line(self.line)


class RecordingStepFactory:
    """Step factory handing out RecordingSteps, with optional failures per kind."""

    def __init__(self, errors: Optional[Dict[StepKind, Exception]] = None):
        self.errors = errors or {}
        self.created: List[RecordingStep] = []
        self.build_scripts: List[str] = []

    def _create(self, kind: StepKind) -> RecordingStep:
        step = RecordingStep(kind, error=self.errors.get(kind))
        self.created.append(step)
        return step

    def create_maven_step(self):
        return self._create(StepKind.MAVEN)

    def create_gradle_step(self):
        return self._create(StepKind.GRADLE)

    def create_script_step(self, build_script: str):
        self.build_scripts.append(build_script)
        return self._create(StepKind.SCRIPT_EXECUTION)

    def create_prebuilt_image_step(self):
        return self._create(StepKind.PREBUILT_IMAGE)

    def create_source_build_image_step(self):
        return self._create(StepKind.SOURCE_BUILD_IMAGE)

    def create_runtime_options_step(self):
        return self._create(StepKind.RUNTIME_OPTIONS)

    @property
    def kinds(self) -> List[StepKind]:
        return [step.kind for step in self.created]


@pytest.fixture
def step_factory() -> RecordingStepFactory:
    return RecordingStepFactory()


@pytest.fixture
def make_step_factory():
    return RecordingStepFactory
