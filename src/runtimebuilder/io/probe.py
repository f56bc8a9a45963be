"""
Workspace probes

Stateless checks for marker files in a workspace root. Nothing here looks
below the root except through explicit relative paths.
"""

from pathlib import Path, PurePosixPath
from typing import List, Optional
import logging
import posixpath

from .. import constants
from ..constants import ArtifactType
from .fs import FileSystem

logger = logging.getLogger(__name__)


def has_maven_project(fs: FileSystem, workspace_dir: Path) -> bool:
    return fs.is_file(workspace_dir / constants.MAVEN_DESCRIPTOR)


def has_gradle_project(fs: FileSystem, workspace_dir: Path) -> bool:
    return any(fs.is_file(workspace_dir / name) for name in constants.GRADLE_DESCRIPTORS)


def find_wrapper(fs: FileSystem, workspace_dir: Path, wrapper_name: str) -> Optional[str]:
    """Return the `./<wrapper>` invocation when the workspace ships a build tool wrapper."""
    wrapper_path = workspace_dir / wrapper_name
    if not fs.is_file(wrapper_path):
        return None
    relative = PurePosixPath(wrapper_path.relative_to(workspace_dir).as_posix())
    logger.info(f"Wrapper discovered at {relative}. Using wrapper instead of system tool.")
    return f"./{relative}"


def find_prebuilt_artifacts(fs: FileSystem, workspace_dir: Path) -> List[PurePosixPath]:
    """
    Files at the workspace root that look like deployable artifacts (.jar/.war),
    relative to the root and sorted by name.
    """
    suffixes = {artifact_type.value for artifact_type in ArtifactType}
    found = []
    for entry in fs.listdir(workspace_dir):
        if entry.suffix.lower() in suffixes and fs.is_file(entry):
            found.append(PurePosixPath(entry.name))
    logger.debug(f"Prebuilt artifact candidates in '{workspace_dir}': {[str(p) for p in found]}")
    return sorted(found)


def relative_to_workspace(path: Path, workspace_dir: Path) -> Optional[str]:
    """POSIX path of `path` inside the workspace, or None when it lies outside."""
    path = PurePosixPath(posixpath.normpath(Path(path).as_posix()))
    root = PurePosixPath(posixpath.normpath(Path(workspace_dir).as_posix()))
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return None
