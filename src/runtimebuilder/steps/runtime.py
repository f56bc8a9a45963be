from pathlib import PurePosixPath
from typing import override
import logging

from .. import constants
from ..abstractions import BuildStep
from ..config import ImageCatalog
from ..constants import ArtifactType, StepKind
from ..datacls import BuildContext
from ..exceptions import UnsupportedRuntimeError

logger = logging.getLogger(__name__)


class RuntimeOptionsBuildStep(BuildStep):
    """
    Configures the runtime server of the final image.

    Runs last so the artifact location set by earlier steps is final.
    """
    kind = StepKind.RUNTIME_OPTIONS

    def __init__(self, images: ImageCatalog):
        self.images = images

    @override
    def run(self, context: BuildContext) -> None:
        runtime_config = context.runtime_config
        if not runtime_config.jetty_quickstart:
            logger.debug("No runtime options requested.")
            return

        server = runtime_config.server or self.images.default_server
        if not server.startswith("jetty"):
            raise UnsupportedRuntimeError(f"Jetty quickstart was requested, but the runtime server is '{server}'.")

        artifact = runtime_config.artifact or context.build_artifact_location
        if artifact is not None and PurePosixPath(str(artifact)).suffix.lower() == ArtifactType.JAR.value:
            raise UnsupportedRuntimeError(f"Jetty quickstart needs a war artifact, got '{artifact}'.")

        logger.info("Enabling jetty quickstart.")
        context.dockerfile.append_line(f"RUN {constants.JETTY_QUICKSTART_COMMAND}")
