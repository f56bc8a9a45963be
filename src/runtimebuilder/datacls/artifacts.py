from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from ..constants import StepKind


class GeneratedResources(BaseModel):
    """
        Class represents the files written by a successful pipeline run.
    """
    dockerfile_path: Path
    dockerignore_path: Path
    steps: List[StepKind]
    config_path: Optional[Path] = None
