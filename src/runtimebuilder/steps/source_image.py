from pathlib import PurePosixPath
from typing import override
import logging

from .. import constants
from ..abstractions import RuntimeImageBuildStep
from ..constants import ArtifactType, StepKind
from ..datacls import BuildContext
from ..exceptions import ArtifactNotFoundError

logger = logging.getLogger(__name__)


class SourceBuildRuntimeImageBuildStep(RuntimeImageBuildStep):
    """
        Copies the artifact produced by the build stage into the runtime image.

    Without an explicit `artifact`, every war (server configured or jetty
    quickstart requested) or jar under the build artifact location is copied.
    """
    kind = StepKind.SOURCE_BUILD_IMAGE

    @override
    def _get_artifact(self, context: BuildContext) -> str:
        runtime_config = context.runtime_config
        if runtime_config.artifact:
            return PurePosixPath(runtime_config.artifact).as_posix()

        location = context.build_artifact_location
        if location is None:
            raise ArtifactNotFoundError(
                "The build did not report where its artifact is. "
                "Set runtime_config.artifact to the path of the built artifact."
            )
        wants_war = runtime_config.server is not None or bool(runtime_config.jetty_quickstart)
        artifact_type = ArtifactType.WAR if wants_war else ArtifactType.JAR
        logger.debug(f"No artifact configured, copying '*{artifact_type.value}' from '{location}'")
        return (location / f"*{artifact_type.value}").as_posix()

    @override
    def _copy_source(self, artifact: str) -> str:
        source = PurePosixPath(constants.BUILD_STAGE_WORKDIR) / artifact
        return f"--from={constants.DOCKERFILE_BUILD_STAGE} {source.as_posix()}"
