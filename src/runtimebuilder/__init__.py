"""
RTB (Runtime Builder)

Generates a Dockerfile and .dockerignore for a Java application workspace.

Main modules:
- config: app.yaml lookup, parsing, runtime_config precedence and image catalog
- builder: pipeline configurator that selects and runs build steps
- steps: concrete build steps (maven, gradle, script, runtime images, runtime options)
- factories: step and context factories injected into the configurator
- datacls: build context, Dockerfile buffer and generated resources
- io: filesystem abstraction and workspace probing
- utils: logging setup and helpers

Quick start example:
```python
from runtimebuilder import (
    BuildPipelineConfigurator, AppYamlParser, AppYamlFinder,
    BuildStepFactory, BuildContextFactory,
)

configurator = BuildPipelineConfigurator(
    AppYamlParser(), AppYamlFinder(), BuildStepFactory(), BuildContextFactory(),
)
configurator.generate_docker_resources("path/to/workspace")
```
"""

__version__ = "0.1.0"

from .constants import StepKind, ArtifactType
from .protocols import (
    BuildStepProtocol,
    ConfigFinderProtocol,
    ConfigParserProtocol,
    StepFactoryProtocol,
    ContextFactoryProtocol,
)
from .abstractions import BuildStep, SourceBuildStep, RuntimeImageBuildStep
from .config import (
    RuntimeConfig,
    AppYaml,
    ImageCatalog,
    AppYamlFinder,
    AppYamlParser,
    resolve_runtime_config,
    load_image_catalog,
)
from .datacls import BuildContext, Dockerfile, GeneratedResources
from .factories import BuildStepFactory, BuildContextFactory
from .builder import BuildPipelineConfigurator
from .io import FileSystem, DiskFileSystem, MemoryFileSystem
from .exceptions import (
    RuntimeBuilderError,
    ConfigurationError,
    ConfigValidationError,
    BuildStepError,
    ArtifactNotFoundError,
)

__all__ = [
    # Version
    '__version__',
    # Constants
    'StepKind',
    'ArtifactType',
    # Protocols
    'BuildStepProtocol',
    'ConfigFinderProtocol',
    'ConfigParserProtocol',
    'StepFactoryProtocol',
    'ContextFactoryProtocol',
    # Abstractions
    'BuildStep',
    'SourceBuildStep',
    'RuntimeImageBuildStep',
    # Config
    'RuntimeConfig',
    'AppYaml',
    'ImageCatalog',
    'AppYamlFinder',
    'AppYamlParser',
    'resolve_runtime_config',
    'load_image_catalog',
    # Data classes
    'BuildContext',
    'Dockerfile',
    'GeneratedResources',
    # Factories
    'BuildStepFactory',
    'BuildContextFactory',
    # Builder
    'BuildPipelineConfigurator',
    # IO
    'FileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    # Exceptions
    'RuntimeBuilderError',
    'ConfigurationError',
    'ConfigValidationError',
    'BuildStepError',
    'ArtifactNotFoundError',
]
