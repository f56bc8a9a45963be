from pathlib import PurePosixPath
from typing import override
import logging

from ..abstractions import RuntimeImageBuildStep
from ..constants import StepKind
from ..datacls import BuildContext
from ..exceptions import ArtifactNotFoundError, TooManyArtifactsError
from ..io import probe

logger = logging.getLogger(__name__)


class PrebuiltRuntimeImageBuildStep(RuntimeImageBuildStep):
    """
        Packages an artifact that already exists in the workspace.

    The artifact is `runtime_config.artifact` when set, otherwise the single
    .jar or .war at the workspace root.
    """
    kind = StepKind.PREBUILT_IMAGE

    @override
    def _get_artifact(self, context: BuildContext) -> str:
        configured = context.runtime_config.artifact
        if configured:
            if not context.fs.is_file(context.workspace_dir / configured):
                raise ArtifactNotFoundError(f"Configured artifact '{configured}' does not exist in the workspace.")
            return PurePosixPath(configured).as_posix()

        candidates = probe.find_prebuilt_artifacts(context.fs, context.workspace_dir)
        if not candidates:
            raise ArtifactNotFoundError(
                f"No .jar or .war artifact found in '{context.workspace_dir}'. "
                "Add a build descriptor or set runtime_config.artifact."
            )
        if len(candidates) > 1:
            raise TooManyArtifactsError(
                f"Found multiple artifacts {[c.as_posix() for c in candidates]}. "
                "Set runtime_config.artifact to choose one."
            )
        logger.info(f"Using prebuilt artifact '{candidates[0]}'")
        return candidates[0].as_posix()

    @override
    def _post_package_hook(self, context: BuildContext, artifact: str) -> None:
        context.set_build_artifact_location(artifact)
