from typing import override

from .. import constants
from ..abstractions import SourceBuildStep
from ..constants import StepKind
from ..datacls import BuildContext
from ..io import probe


class MavenBuildStep(SourceBuildStep):
    """
        Build step that invokes maven.
    """
    kind = StepKind.MAVEN

    @override
    def _build_command(self, context: BuildContext) -> str:
        executable = probe.find_wrapper(context.fs, context.workspace_dir, constants.MAVEN_WRAPPER) or "mvn"
        return f"{executable} {constants.MAVEN_BUILD_ARGS}"

    @override
    def _artifact_location(self, context: BuildContext) -> str:
        return constants.MAVEN_ARTIFACT_LOCATION
