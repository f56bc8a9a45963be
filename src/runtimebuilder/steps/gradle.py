from typing import override

from .. import constants
from ..abstractions import SourceBuildStep
from ..constants import StepKind
from ..datacls import BuildContext
from ..io import probe


class GradleBuildStep(SourceBuildStep):
    """
        Build step that invokes gradle.
    """
    kind = StepKind.GRADLE

    @override
    def _build_command(self, context: BuildContext) -> str:
        executable = probe.find_wrapper(context.fs, context.workspace_dir, constants.GRADLE_WRAPPER) or "gradle"
        return f"{executable} {constants.GRADLE_BUILD_ARGS}"

    @override
    def _artifact_location(self, context: BuildContext) -> str:
        return constants.GRADLE_ARTIFACT_LOCATION
