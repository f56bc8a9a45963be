from typing import Optional, override
import logging

from .. import constants
from ..abstractions import SourceBuildStep
from ..constants import StepKind
from ..datacls import BuildContext
from ..io import probe

logger = logging.getLogger(__name__)


class ScriptExecutionBuildStep(SourceBuildStep):
    """
        Build step that runs a user-supplied build command.

    The command replaces the tool's own invocation, so when the workspace is a
    maven or gradle project the tool's output directory still applies.
    """
    kind = StepKind.SCRIPT_EXECUTION

    def __init__(self, build_image: str, build_script: str):
        super().__init__(build_image)
        self.build_script = build_script

    @override
    def _build_command(self, context: BuildContext) -> str:
        return self.build_script

    @override
    def _artifact_location(self, context: BuildContext) -> Optional[str]:
        if probe.has_maven_project(context.fs, context.workspace_dir):
            return constants.MAVEN_ARTIFACT_LOCATION
        if probe.has_gradle_project(context.fs, context.workspace_dir):
            return constants.GRADLE_ARTIFACT_LOCATION
        logger.info("Custom build script in a workspace without a known build descriptor, "
                    "runtime_config.artifact must name the built artifact.")
        return None
