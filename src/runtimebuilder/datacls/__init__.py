from .dockerfile import Dockerfile
from .contexts import BuildContext
from .artifacts import GeneratedResources

__all__ = [
    'Dockerfile',
    'BuildContext',
    'GeneratedResources',
]
