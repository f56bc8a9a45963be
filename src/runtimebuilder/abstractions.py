"""
Runtime Builder Abstract Base Classes

This module contains the abstract base classes for build steps.

Dependencies:
- config: RuntimeConfig and ImageCatalog
- datacls: BuildContext
"""

from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import ClassVar, Optional
import logging

from . import constants
from .constants import ArtifactType, StepKind
from .config import ImageCatalog, RuntimeConfig
from .datacls import BuildContext
from .exceptions import UnsupportedRuntimeError

logger = logging.getLogger(__name__)


# ============================================================================
# Top-level Abstract Base Class
# ============================================================================

class BuildStep(ABC):
    """
    Abstract class describing one step of the Dockerfile pipeline.

    Steps are configured once at construction and run once per pipeline run.
    They only append to `context.dockerfile` and may set the build artifact
    location.
    """

    kind: ClassVar[StepKind]

    @abstractmethod
    def run(self, context: BuildContext) -> None:
        """
        Appends this step's lines to the context's Dockerfile.

        Args:
            context: The build context shared by every step of the run.
        Raises:
            BuildStepError: when the step cannot complete.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value})"


# ============================================================================
# Mid-level Abstract Base Classes
# ============================================================================

# ============================================================================
#   Source Build Step
# ============================================================================

class SourceBuildStep(BuildStep, ABC):
    """
    Abstract base class for steps that compile the workspace in a build stage.

    Emits a named build stage which copies the workspace in and runs the
    build command, then records where the tool leaves its output.
    """

    def __init__(self, build_image: str):
        self.build_image = build_image

    @abstractmethod
    def _build_command(self, context: BuildContext) -> str:
        """The shell command that builds the workspace."""
        pass

    @abstractmethod
    def _artifact_location(self, context: BuildContext) -> Optional[str]:
        """Where the build leaves its artifacts, relative to the stage workdir."""
        pass

    def run(self, context: BuildContext) -> None:
        command = self._build_command(context)
        logger.debug(f"[{self.kind.value}] Building with '{command}' on image '{self.build_image}'")
        context.dockerfile \
            .append_line(f"FROM {self.build_image} as {constants.DOCKERFILE_BUILD_STAGE}") \
            .append_line(f"WORKDIR {constants.BUILD_STAGE_WORKDIR}") \
            .append_line("ADD . .") \
            .append_line(f"RUN {command}") \
            .append_line()

        location = self._artifact_location(context)
        if location is not None:
            context.set_build_artifact_location(location)


# ============================================================================
#   Runtime Image Step
# ============================================================================

class RuntimeImageBuildStep(BuildStep, ABC):
    """
    Abstract base class for steps that assemble the final runtime image.

    The runtime image is picked from the artifact type: a .jar runs on the
    configured (or default) jdk image, a .war on the configured (or default)
    server image.
    """

    def __init__(self, images: ImageCatalog):
        self.images = images

    @abstractmethod
    def _get_artifact(self, context: BuildContext) -> str:
        """The COPY source of the artifact."""
        pass

    def _copy_source(self, artifact: str) -> str:
        """Hook to adjust the COPY source, e.g. to read from a build stage."""
        return artifact

    def _post_package_hook(self, context: BuildContext, artifact: str) -> None:
        """A hook for subclasses to run after the runtime stage is emitted."""
        pass

    def run(self, context: BuildContext) -> None:
        artifact = self._get_artifact(context)
        base_image = self.resolve_runtime_image(artifact, context.runtime_config)
        logger.info(f"[{self.kind.value}] Packaging '{artifact}' on '{base_image}'")
        context.dockerfile \
            .append_line(f"FROM {base_image}") \
            .append_line(f"COPY {self._copy_source(artifact)} {constants.APP_DESTINATION}")
        self._post_package_hook(context, artifact)

    def resolve_runtime_image(self, artifact: str, runtime_config: RuntimeConfig) -> str:
        artifact_type = artifact_type_of(artifact)
        if artifact_type is ArtifactType.JAR:
            if runtime_config.server:
                raise UnsupportedRuntimeError(
                    f"Server '{runtime_config.server}' is configured, but artifact '{artifact}' is a jar. "
                    "Servers can only run war artifacts."
                )
            jdk = runtime_config.jdk or self.images.default_jdk
            image = self.images.jdk_images.get(jdk)
            if image is None:
                raise UnsupportedRuntimeError(
                    f"Unknown jdk '{jdk}'. Supported: {sorted(self.images.jdk_images)}"
                )
            return image

        server = runtime_config.server or self.images.default_server
        image = self.images.server_images.get(server)
        if image is None:
            raise UnsupportedRuntimeError(
                f"Unknown server '{server}'. Supported: {sorted(self.images.server_images)}"
            )
        if runtime_config.jdk:
            logger.warning(f"jdk '{runtime_config.jdk}' is ignored for war artifacts, the '{server}' image brings its own.")
        return image


def artifact_type_of(artifact: str) -> ArtifactType:
    suffix = PurePosixPath(artifact).suffix.lower()
    for artifact_type in ArtifactType:
        if artifact_type.value == suffix:
            return artifact_type
    raise UnsupportedRuntimeError(
        f"Artifact '{artifact}' is not supported, expected one of {[t.value for t in ArtifactType]}."
    )
