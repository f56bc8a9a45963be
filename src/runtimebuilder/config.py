import json
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from . import constants
from .io import FileSystem, DiskFileSystem
from .exceptions import (
    ConfigFileMissingError,
    ConfigParsingError,
    ConfigValidationError,
    PathDecodeError,
    PathNotFoundError,
)
from .utils import merge_layers, deep_merge, to_snake

logger = logging.getLogger(__name__)

# Load the default builder and runtime images
IMAGE_DEFAULTS_TEXT = resources.files('runtimebuilder.resources.images').joinpath('defaults.json').read_text(encoding='utf-8')
IMAGE_DEFAULTS = json.loads(IMAGE_DEFAULTS_TEXT)


class RuntimeConfig(BaseModel):
    """
        Class Config-Validation Model describe `runtime_config`

    Every field is optional. An unset field means "use the default defined by
    the build step that needs it". Instances are frozen once built.
    """
    jdk: Optional[str] = None
    artifact: Optional[str] = None
    server: Optional[str] = None
    build_script: Optional[str] = None
    jetty_quickstart: Optional[bool] = None
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode='before')
    @classmethod
    def warn_unknown_keys(cls, data: Any) -> Any:
        """Unknown keys are dropped, but say so"""
        if isinstance(data, dict):
            unknown = sorted(set(data) - set(cls.model_fields))
            if unknown:
                logger.warning(f"Ignoring unknown runtime_config keys: {unknown}")
        return data


class AppYaml(BaseModel):
    """
        Class Config-Validation Model desribe top-level of app.yaml

    Only `runtime_config` is interpreted here, other top-level keys
    (`runtime`, `env`, ...) belong to the deployment tooling and are kept as is.
    """
    runtime_config: RuntimeConfig = Field(default_factory=RuntimeConfig)
    model_config = ConfigDict(extra="allow")

    @field_validator('runtime_config', mode='before')
    @classmethod
    def empty_section_is_default(cls, value: Any) -> Any:
        """`runtime_config:` with no body parses as None"""
        return {} if value is None else value

    def runtime_config_settings(self) -> Dict[str, Any]:
        """The runtime_config fields this document explicitly sets."""
        return self.runtime_config.model_dump(exclude_unset=True, exclude_none=True)


class ImageCatalog(BaseModel):
    """
        Docker images used by the build steps.

    `jdk_images` and `server_images` map the `jdk` and `server` names accepted in
    runtime_config to runtime images.
    """
    maven_image: str
    gradle_image: str
    script_image: Optional[str] = None
    jdk_images: Dict[str, str]
    server_images: Dict[str, str]
    default_jdk: str
    default_server: str

    @model_validator(mode='after')
    def check_defaults_known(self) -> 'ImageCatalog':
        """Default jdk/server must have an image"""
        if self.default_jdk not in self.jdk_images:
            raise ConfigValidationError(
                f"Default jdk '{self.default_jdk}' has no image, known: {sorted(self.jdk_images)}."
            )
        if self.default_server not in self.server_images:
            raise ConfigValidationError(
                f"Default server '{self.default_server}' has no image, known: {sorted(self.server_images)}."
            )
        if self.script_image is None:
            self.script_image = self.maven_image
        return self


# -------------------------
#
#   app.yaml lookup and parsing
#
# -------------------------

class AppYamlFinder:
    """
    Finds app.yaml inside a workspace.

    An explicit path (argument, else the GAE_APPLICATION_YAML_PATH env var) is
    resolved against the workspace and must exist. Without one, the default
    locations are tried in order and None is returned when none exists.
    """

    def __init__(self, fs: FileSystem = None, config_path: Optional[str] = None):
        self.fs = fs or DiskFileSystem()
        self.config_path = config_path if config_path is not None else os.environ.get(constants.APP_YAML_ENV)

    def find(self, workspace_dir: Path) -> Optional[Path]:
        workspace_dir = Path(workspace_dir)
        if self.config_path:
            candidate = workspace_dir / self.config_path
            if not self.fs.is_file(candidate):
                raise ConfigFileMissingError(f"Configuration file not found at: {candidate}")
            logger.debug(f"Using explicitly configured app.yaml at '{candidate}'")
            return candidate

        for relative in constants.APP_YAML_CANDIDATES:
            candidate = workspace_dir / relative
            if self.fs.is_file(candidate):
                logger.debug(f"Found app.yaml at '{candidate}'")
                return candidate

        logger.debug(f"No app.yaml found in '{workspace_dir}'")
        return None


class AppYamlParser:
    """
    Loads and validates app.yaml using Pydantic models.
    """

    def __init__(self, fs: FileSystem = None):
        self.fs = fs or DiskFileSystem()

    def empty(self) -> AppYaml:
        return AppYaml()

    def parse(self, path: Path) -> AppYaml:
        logger.info(f"Loading configuration from '{path}'...")
        raw_data = self._load_raw_config(path)
        if raw_data is None:
            logger.debug(f"'{path}' is empty, using defaults.")
            return self.empty()
        try:
            model = AppYaml.model_validate(raw_data)
        except ValidationError as e:
            raise ConfigValidationError(f"Configuration validation failed for '{path}':\n{e}")
        logger.debug(f"Configuration model validated successfully: \n{model.model_dump_json(indent=2)}")
        return model

    def _load_raw_config(self, path: Path) -> Optional[Dict[str, Any]]:
        try:
            content = self.fs.read_text(path)
            config_data = yaml.safe_load(content)
        except PathNotFoundError:
            raise ConfigFileMissingError(f"Configuration file not found at: {path}")
        except PathDecodeError as e:
            raise ConfigParsingError(f"Configuration file '{path}' is {e}")
        except yaml.YAMLError as e:
            raise ConfigParsingError(f"Error parsing YAML file '{path}': {e}")
        if config_data is not None and not isinstance(config_data, dict):
            raise ConfigParsingError("Configuration file must be a YAML document containing a dictionary.")
        logger.debug(f"Successfully parsed YAML from '{path}'.")
        return config_data


# -------------------------
#
#   Precedence merging
#
# -------------------------

def normalize_overrides(overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Map override keys onto RuntimeConfig field names.

    camelCase keys (`buildScript`) are accepted and converted. Unknown keys are rejected.
    """
    normalized: Dict[str, Any] = {}
    for key, value in (overrides or {}).items():
        field = to_snake(key)
        if field not in RuntimeConfig.model_fields:
            raise ConfigValidationError(
                f"Unknown runtime_config override '{key}'. Supported keys: {sorted(RuntimeConfig.model_fields)}."
            )
        normalized[field] = value
    return normalized


def resolve_runtime_config(
    app_yaml: AppYaml,
    overrides: Optional[Mapping[str, Any]] = None,
    defaults: Optional[Mapping[str, Any]] = None,
) -> RuntimeConfig:
    """
    Build the effective RuntimeConfig: defaults <- app.yaml runtime_config <- overrides.

    Each layer only replaces the fields it sets.
    """
    layers = (
        normalize_overrides(defaults),
        app_yaml.runtime_config_settings(),
        normalize_overrides(overrides),
    )
    merged = merge_layers(*layers)
    try:
        runtime_config = RuntimeConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid runtime configuration:\n{e}")
    logger.debug(f"Effective runtime configuration: {runtime_config.model_dump(exclude_none=True)}")
    return runtime_config


def load_image_catalog(
    images_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    fs: FileSystem = None,
) -> ImageCatalog:
    """
    Packaged defaults <- optional YAML/JSON images file <- explicit overrides.
    """
    data = IMAGE_DEFAULTS
    if images_file:
        fs = fs or DiskFileSystem()
        try:
            loaded = yaml.safe_load(fs.read_text(images_file))
        except PathNotFoundError:
            raise ConfigFileMissingError(f"Images file not found at: {images_file}")
        except PathDecodeError as e:
            raise ConfigParsingError(f"Images file '{images_file}' is {e}")
        except yaml.YAMLError as e:
            raise ConfigParsingError(f"Error parsing images file '{images_file}': {e}")
        if not isinstance(loaded, dict):
            raise ConfigParsingError(f"Images file '{images_file}' must contain a dictionary.")
        data = deep_merge(data, loaded)
    if overrides:
        data = deep_merge(data, overrides)
    try:
        return ImageCatalog.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid image catalog:\n{e}")
