"""
Runtime Builder Protocol Definitions

This module contains the structural types the pipeline configurator depends on.

Protocols are the foundation layer with no dependencies on the concrete
steps or factories, so tests can hand in their own collaborators.
"""

from pathlib import Path
from typing import Protocol, Any, Optional, runtime_checkable


# ============================================================================
# Build Step Protocols
# ============================================================================

@runtime_checkable
class BuildStepProtocol(Protocol):
    """
    Protocol for a single unit of the build pipeline.

    A step appends lines to the context's Dockerfile and may set the build
    artifact location once.
    """

    kind: Any

    def run(self, context: Any) -> None:
        """
        Execute the step against the shared build context.

        Args:
            context: The BuildContext of the current run

        Raises:
            BuildStepError: when the step cannot complete
        """
        ...


# ============================================================================
# Configuration Protocols
# ============================================================================

@runtime_checkable
class ConfigFinderProtocol(Protocol):
    """
    Protocol for locating the configuration document inside a workspace.
    """

    def find(self, workspace_dir: Path) -> Optional[Path]:
        """
        Returns:
            Path of the document, or None when the workspace has none
        """
        ...


@runtime_checkable
class ConfigParserProtocol(Protocol):
    """
    Protocol for turning a configuration document into an AppYaml model.
    """

    def parse(self, path: Path) -> Any:
        """Parse the document at `path`."""
        ...

    def empty(self) -> Any:
        """The document used when the workspace has none."""
        ...


# ============================================================================
# Factory Protocols
# ============================================================================

@runtime_checkable
class StepFactoryProtocol(Protocol):
    """
    Protocol for build step factory implementations.

    One method per step variant, each returning a ready-to-run step.
    """

    def create_maven_step(self) -> BuildStepProtocol:
        ...

    def create_gradle_step(self) -> BuildStepProtocol:
        ...

    def create_script_step(self, build_script: str) -> BuildStepProtocol:
        ...

    def create_prebuilt_image_step(self) -> BuildStepProtocol:
        ...

    def create_source_build_image_step(self) -> BuildStepProtocol:
        ...

    def create_runtime_options_step(self) -> BuildStepProtocol:
        ...


@runtime_checkable
class ContextFactoryProtocol(Protocol):
    """
    Protocol for creating the per-run BuildContext.
    """

    def create_build_context(self, workspace_dir: Path, runtime_config: Any) -> Any:
        ...
