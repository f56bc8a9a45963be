"""
Runtime Builder Build Context

This module contains the BuildContext data class, which holds all state
for a single pipeline run.
"""

from pathlib import Path, PurePosixPath
from typing import Optional, Union
import logging

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..config import RuntimeConfig
from ..exceptions import ArtifactLocationError
from ..io import FileSystem, DiskFileSystem
from .dockerfile import Dockerfile

logger = logging.getLogger(__name__)


class BuildContext(BaseModel):
    """
    Holds the state shared by every build step of one run.

    Fields cannot be reassigned. Steps append to `dockerfile` and may set the
    build artifact location once.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    workspace_dir: Path
    runtime_config: RuntimeConfig
    disable_source_build: bool = False

    fs: FileSystem = Field(default_factory=DiskFileSystem)
    dockerfile: Dockerfile = Field(default_factory=Dockerfile)

    _build_artifact_location: Optional[PurePosixPath] = PrivateAttr(default=None)

    @property
    def build_artifact_location(self) -> Optional[PurePosixPath]:
        """Where the final artifact lives, relative to the build stage or workspace."""
        return self._build_artifact_location

    def set_build_artifact_location(self, location: Union[str, PurePosixPath]) -> None:
        if self._build_artifact_location is not None:
            raise ArtifactLocationError(
                f"Build artifact location is already set to '{self._build_artifact_location}', "
                f"refusing to change it to '{location}'."
            )
        self._build_artifact_location = PurePosixPath(location)
        logger.debug(f"Build artifact location set to '{self._build_artifact_location}'")
