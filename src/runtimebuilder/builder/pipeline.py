import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .. import constants
from ..config import AppYaml, resolve_runtime_config
from ..constants import StepKind
from ..datacls import BuildContext, GeneratedResources
from ..exceptions import BuildStepError, PathDecodeError, PathNotAFileError, RuntimeBuilderIOError
from ..io import FileSystem, probe
from ..protocols import (
    BuildStepProtocol,
    ConfigFinderProtocol,
    ConfigParserProtocol,
    ContextFactoryProtocol,
    StepFactoryProtocol,
)

logger = logging.getLogger(__name__)


class BuildPipelineConfigurator:
    """
    Selects the build steps for a workspace, runs them, and writes the
    Dockerfile and .dockerignore.

    Step order is fixed: a source build (custom script, else maven, else
    gradle) followed by its runtime image step, or the prebuilt image step
    when there is no source build or source builds are disabled. The runtime
    options step always comes last.
    """

    def __init__(
        self,
        config_parser: ConfigParserProtocol,
        config_finder: ConfigFinderProtocol,
        step_factory: StepFactoryProtocol,
        context_factory: ContextFactoryProtocol,
        overrides: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        self.config_parser = config_parser
        self.config_finder = config_finder
        self.step_factory = step_factory
        self.context_factory = context_factory
        self.overrides: Dict[str, Any] = dict(overrides or {})
        self.defaults: Dict[str, Any] = dict(defaults or {})

    def generate_docker_resources(self, workspace_dir: Path) -> GeneratedResources:
        """Orchestrates one run and returns what was written."""
        workspace_dir = Path(workspace_dir)
        logger.info(f"[Pipeline] Generating docker resources for '{workspace_dir}'...")

        config_path, context = self._prepare(workspace_dir)
        steps = self._select_steps(context)
        self._run_steps(steps, context)
        resources = self._write_resources(context, config_path, steps)

        logger.info(f"[Pipeline] Wrote '{resources.dockerfile_path}' and '{resources.dockerignore_path}'")
        return resources

    def plan(self, workspace_dir: Path) -> List[StepKind]:
        """The step kinds a run would execute, without running them or writing anything."""
        _, context = self._prepare(Path(workspace_dir))
        return [step.kind for step in self._select_steps(context)]

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def _prepare(self, workspace_dir: Path) -> Tuple[Optional[Path], BuildContext]:
        config_path, app_yaml = self._load_config(workspace_dir)
        runtime_config = resolve_runtime_config(app_yaml, overrides=self.overrides, defaults=self.defaults)
        context = self.context_factory.create_build_context(workspace_dir, runtime_config)
        return config_path, context

    def _load_config(self, workspace_dir: Path) -> Tuple[Optional[Path], AppYaml]:
        config_path = self.config_finder.find(workspace_dir)
        if config_path is None:
            logger.debug("[Pipeline] No configuration document, using defaults.")
            return None, self.config_parser.empty()
        return config_path, self.config_parser.parse(config_path)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def _select_source_build(self, context: BuildContext) -> Optional[StepKind]:
        """First match wins: custom script, maven, gradle."""
        if context.runtime_config.build_script:
            return StepKind.SCRIPT_EXECUTION
        if probe.has_maven_project(context.fs, context.workspace_dir):
            return StepKind.MAVEN
        if probe.has_gradle_project(context.fs, context.workspace_dir):
            return StepKind.GRADLE
        return None

    def _create_source_build_step(self, kind: StepKind, context: BuildContext) -> BuildStepProtocol:
        if kind is StepKind.SCRIPT_EXECUTION:
            return self.step_factory.create_script_step(context.runtime_config.build_script)
        if kind is StepKind.MAVEN:
            return self.step_factory.create_maven_step()
        return self.step_factory.create_gradle_step()

    def _select_steps(self, context: BuildContext) -> List[BuildStepProtocol]:
        source_build = self._select_source_build(context)
        if source_build is not None and context.disable_source_build:
            logger.info(f"[Pipeline] Source builds are disabled, ignoring the {source_build.value} build "
                        "and packaging a prebuilt artifact instead.")
            source_build = None

        steps: List[BuildStepProtocol] = []
        if source_build is not None:
            steps.append(self._create_source_build_step(source_build, context))
            steps.append(self.step_factory.create_source_build_image_step())
        else:
            steps.append(self.step_factory.create_prebuilt_image_step())
        steps.append(self.step_factory.create_runtime_options_step())

        logger.info(f"[Pipeline] Selected steps: {[step.kind.value for step in steps]}")
        return steps

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _run_steps(self, steps: List[BuildStepProtocol], context: BuildContext) -> None:
        for step in steps:
            name = step.kind.value
            logger.debug(f"[Pipeline] Running step '{name}'...")
            try:
                step.run(context)
            except BuildStepError as e:
                if e.step is None:
                    e.step = name
                raise
            except (RuntimeBuilderIOError, OSError) as e:
                raise BuildStepError(f"Filesystem error: {e}", step=name) from e

    def _write_resources(
        self,
        context: BuildContext,
        config_path: Optional[Path],
        steps: List[BuildStepProtocol],
    ) -> GeneratedResources:
        workspace_dir = context.workspace_dir
        dockerfile_path = workspace_dir / constants.DOCKERFILE_NAME
        dockerignore_path = workspace_dir / constants.DOCKERIGNORE_NAME

        for path in (dockerfile_path, dockerignore_path):
            if context.fs.exists(path) and not context.fs.is_file(path):
                raise PathNotAFileError(f"Cannot write '{path}', it exists and is not a file.")

        ignore_lines = self._dockerignore_lines(context, dockerignore_path, config_path)
        self._write_all(context.fs, {
            dockerfile_path: context.dockerfile.render(),
            dockerignore_path: "".join(f"{line}\n" for line in ignore_lines),
        })

        return GeneratedResources(
            dockerfile_path=dockerfile_path,
            dockerignore_path=dockerignore_path,
            steps=[step.kind for step in steps],
            config_path=config_path,
        )

    def _write_all(self, fs: FileSystem, outputs: Dict[Path, str]) -> None:
        """
        Stage every file next to its target, then move them into place.

        A failure while staging removes the staged files and leaves the
        targets untouched.
        """
        staged: Dict[Path, Path] = {}
        try:
            for path, content in outputs.items():
                staging = path.with_name(f"{path.name}{constants.STAGING_SUFFIX}")
                staged[path] = staging
                fs.write_text(staging, content)
        except (RuntimeBuilderIOError, OSError):
            for staging in staged.values():
                if fs.is_file(staging):
                    fs.remove(staging)
            raise

        for path, staging in staged.items():
            fs.move(staging, path)

    def _dockerignore_lines(
        self,
        context: BuildContext,
        dockerignore_path: Path,
        config_path: Optional[Path],
    ) -> List[str]:
        """Existing entries, in order and without duplicates, plus the config document."""
        lines: List[str] = []
        if context.fs.is_file(dockerignore_path):
            try:
                existing = context.fs.read_text(dockerignore_path)
            except PathDecodeError as e:
                raise PathDecodeError(f"Existing '{dockerignore_path}' is {e}") from e
            for line in existing.splitlines():
                line = line.rstrip()
                if line and line not in lines:
                    lines.append(line)

        if config_path is not None:
            relative = probe.relative_to_workspace(config_path, context.workspace_dir)
            if relative is None:
                logger.warning(f"[Pipeline] '{config_path}' is outside the workspace, not adding it to "
                               f"{constants.DOCKERIGNORE_NAME}.")
            elif relative not in lines:
                lines.append(relative)
        return lines
