"""
Concrete build steps

One class per step kind:
- MavenBuildStep / GradleBuildStep: compile the workspace in a build stage
- ScriptExecutionBuildStep: run a custom build command in a build stage
- SourceBuildRuntimeImageBuildStep: copy the build stage's artifact into the runtime image
- PrebuiltRuntimeImageBuildStep: copy an artifact from the workspace into the runtime image
- RuntimeOptionsBuildStep: runtime server options, always last
"""

from .maven import MavenBuildStep
from .gradle import GradleBuildStep
from .script import ScriptExecutionBuildStep
from .source_image import SourceBuildRuntimeImageBuildStep
from .prebuilt import PrebuiltRuntimeImageBuildStep
from .runtime import RuntimeOptionsBuildStep

__all__ = [
    'MavenBuildStep',
    'GradleBuildStep',
    'ScriptExecutionBuildStep',
    'SourceBuildRuntimeImageBuildStep',
    'PrebuiltRuntimeImageBuildStep',
    'RuntimeOptionsBuildStep',
]
