"""
Runtime Builder Factories

This module contains the factories the pipeline configurator is built with:
- BuildStepFactory: creates build steps configured with their docker images
- BuildContextFactory: creates the per-run BuildContext

Dependencies:
- config: ImageCatalog, RuntimeConfig
- steps: concrete build steps
"""

from pathlib import Path
import logging

from .config import ImageCatalog, RuntimeConfig, load_image_catalog
from .datacls import BuildContext
from .io import FileSystem, DiskFileSystem
from .steps import (
    MavenBuildStep,
    GradleBuildStep,
    ScriptExecutionBuildStep,
    SourceBuildRuntimeImageBuildStep,
    PrebuiltRuntimeImageBuildStep,
    RuntimeOptionsBuildStep,
)

logger = logging.getLogger(__name__)

# -------------------------
#
#   BUILD STEP FACTORY
#
# -------------------------

class BuildStepFactory:
    """
    Factory Creates build steps, handing each the images it needs.
    """

    def __init__(self, images: ImageCatalog = None):
        self.images = images or load_image_catalog()
        logger.debug(f"BuildStepFactory initialized with images: {self.images.model_dump()}")

    def create_maven_step(self) -> MavenBuildStep:
        return MavenBuildStep(self.images.maven_image)

    def create_gradle_step(self) -> GradleBuildStep:
        return GradleBuildStep(self.images.gradle_image)

    def create_script_step(self, build_script: str) -> ScriptExecutionBuildStep:
        return ScriptExecutionBuildStep(self.images.script_image, build_script)

    def create_prebuilt_image_step(self) -> PrebuiltRuntimeImageBuildStep:
        return PrebuiltRuntimeImageBuildStep(self.images)

    def create_source_build_image_step(self) -> SourceBuildRuntimeImageBuildStep:
        return SourceBuildRuntimeImageBuildStep(self.images)

    def create_runtime_options_step(self) -> RuntimeOptionsBuildStep:
        return RuntimeOptionsBuildStep(self.images)


# -------------------------
#
#   BUILD CONTEXT FACTORY
#
# -------------------------

class BuildContextFactory:
    """
    Factory Creates a fresh BuildContext for every run.
    """

    def __init__(self, fs: FileSystem = None, disable_source_build: bool = False):
        self.fs = fs or DiskFileSystem()
        self.disable_source_build = disable_source_build

    def create_build_context(self, workspace_dir: Path, runtime_config: RuntimeConfig) -> BuildContext:
        return BuildContext(
            workspace_dir=workspace_dir,
            runtime_config=runtime_config,
            disable_source_build=self.disable_source_build,
            fs=self.fs,
        )
