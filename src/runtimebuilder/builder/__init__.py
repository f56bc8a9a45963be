from .pipeline import BuildPipelineConfigurator

__all__ = [
    'BuildPipelineConfigurator',
]
