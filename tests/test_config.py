import json

import pytest
import yaml
from pydantic import ValidationError

from runtimebuilder import constants
from runtimebuilder.config import (
    AppYaml,
    AppYamlFinder,
    AppYamlParser,
    RuntimeConfig,
    load_image_catalog,
    normalize_overrides,
    resolve_runtime_config,
)
from runtimebuilder.exceptions import (
    ConfigFileMissingError,
    ConfigParsingError,
    ConfigValidationError,
)
from runtimebuilder.io import DiskFileSystem


@pytest.fixture
def parser():
    return AppYamlParser(DiskFileSystem())


class TestAppYamlFinder:
    """Lookup order of the configuration document."""

    def test_root_document(self, make_workspace):
        workspace = make_workspace({"app.yaml": "runtime: java\n"})
        assert AppYamlFinder().find(workspace) == workspace / "app.yaml"

    def test_appengine_directory(self, make_workspace):
        workspace = make_workspace({"src/main/appengine/app.yaml": "runtime: java\n"})
        assert AppYamlFinder().find(workspace) == workspace / "src/main/appengine/app.yaml"

    def test_root_wins_over_appengine_directory(self, make_workspace):
        workspace = make_workspace({"app.yaml": "", "src/main/appengine/app.yaml": ""})
        assert AppYamlFinder().find(workspace) == workspace / "app.yaml"

    def test_no_document(self, make_workspace):
        assert AppYamlFinder().find(make_workspace({"pom.xml": ""})) is None

    def test_explicit_path(self, make_workspace):
        workspace = make_workspace({"app.yaml": "", "conf/other.yaml": ""})
        assert AppYamlFinder(config_path="conf/other.yaml").find(workspace) == workspace / "conf/other.yaml"

    def test_explicit_path_must_exist(self, make_workspace):
        workspace = make_workspace({"app.yaml": ""})
        with pytest.raises(ConfigFileMissingError, match="missing.yaml"):
            AppYamlFinder(config_path="missing.yaml").find(workspace)

    def test_env_var(self, make_workspace, monkeypatch):
        monkeypatch.setenv(constants.APP_YAML_ENV, "conf/app.yaml")
        workspace = make_workspace({"app.yaml": "", "conf/app.yaml": ""})
        assert AppYamlFinder().find(workspace) == workspace / "conf/app.yaml"

    def test_argument_wins_over_env_var(self, make_workspace, monkeypatch):
        monkeypatch.setenv(constants.APP_YAML_ENV, "conf/app.yaml")
        workspace = make_workspace({"app.yaml": "", "conf/app.yaml": "", "other.yaml": ""})
        assert AppYamlFinder(config_path="other.yaml").find(workspace) == workspace / "other.yaml"


class TestAppYamlParser:
    """Loading and validating app.yaml."""

    def test_runtime_config_section(self, make_workspace, parser):
        workspace = make_workspace({"app.yaml": {
            "runtime": "java",
            "env": "flex",
            "runtime_config": {"jdk": "openjdk8", "server": "jetty9", "jetty_quickstart": True},
        }})
        app_yaml = parser.parse(workspace / "app.yaml")

        assert app_yaml.runtime_config.jdk == "openjdk8"
        assert app_yaml.runtime_config.jetty_quickstart is True
        assert app_yaml.runtime_config_settings() == {
            "jdk": "openjdk8", "server": "jetty9", "jetty_quickstart": True,
        }

    def test_empty_file(self, make_workspace, parser):
        workspace = make_workspace({"app.yaml": ""})
        assert parser.parse(workspace / "app.yaml").runtime_config_settings() == {}

    def test_empty_runtime_config_section(self, make_workspace, parser):
        workspace = make_workspace({"app.yaml": "runtime: java\nruntime_config:\n"})
        assert parser.parse(workspace / "app.yaml").runtime_config == RuntimeConfig()

    def test_unknown_runtime_config_keys_are_dropped(self, make_workspace, parser):
        workspace = make_workspace({"app.yaml": {"runtime_config": {"jdk": "openjdk9", "color": "blue"}}})
        assert parser.parse(workspace / "app.yaml").runtime_config_settings() == {"jdk": "openjdk9"}

    def test_malformed_yaml(self, make_workspace, parser):
        workspace = make_workspace({"app.yaml": "runtime_config: {jdk: openjdk8"})
        with pytest.raises(ConfigParsingError, match="Error parsing YAML file"):
            parser.parse(workspace / "app.yaml")

    def test_document_must_be_mapping(self, make_workspace, parser):
        workspace = make_workspace({"app.yaml": "- runtime\n- java\n"})
        with pytest.raises(ConfigParsingError, match="dictionary"):
            parser.parse(workspace / "app.yaml")

    def test_invalid_field_type(self, make_workspace, parser):
        workspace = make_workspace({"app.yaml": {"runtime_config": {"jetty_quickstart": "sometimes"}}})
        with pytest.raises(ConfigValidationError, match="jetty_quickstart"):
            parser.parse(workspace / "app.yaml")

    def test_missing_file(self, make_workspace, parser):
        with pytest.raises(ConfigFileMissingError):
            parser.parse(make_workspace() / "app.yaml")

    def test_undecodable_file(self, make_workspace, parser):
        workspace = make_workspace()
        (workspace / "app.yaml").write_bytes(b"runtime_config:\n  jdk: \xff\xfe\n")
        with pytest.raises(ConfigParsingError, match="UTF-8"):
            parser.parse(workspace / "app.yaml")


class TestRuntimeConfigPrecedence:
    """defaults <- app.yaml runtime_config <- overrides, per field."""

    def test_override_wins_and_other_fields_survive(self):
        app_yaml = AppYaml.model_validate({"runtime_config": {"jdk": "openjdk8", "build_script": "./build.sh"}})
        runtime_config = resolve_runtime_config(app_yaml, overrides={"jdk": "fakeJdk"})

        assert runtime_config.jdk == "fakeJdk"
        assert runtime_config.build_script == "./build.sh"

    def test_document_wins_over_defaults(self):
        app_yaml = AppYaml.model_validate({"runtime_config": {"server": "tomcat8"}})
        runtime_config = resolve_runtime_config(app_yaml, defaults={"server": "jetty9", "jdk": "openjdk9"})

        assert runtime_config.server == "tomcat8"
        assert runtime_config.jdk == "openjdk9"

    def test_nothing_set(self):
        assert resolve_runtime_config(AppYaml()) == RuntimeConfig()

    def test_camel_case_overrides(self):
        runtime_config = resolve_runtime_config(AppYaml(), overrides={"buildScript": "make", "jettyQuickstart": "true"})
        assert runtime_config.build_script == "make"
        assert runtime_config.jetty_quickstart is True

    def test_unknown_override(self):
        with pytest.raises(ConfigValidationError, match="Unknown runtime_config override"):
            normalize_overrides({"flavour": "x"})

    def test_invalid_override_value(self):
        with pytest.raises(ConfigValidationError):
            resolve_runtime_config(AppYaml(), overrides={"jetty_quickstart": "perhaps"})

    def test_runtime_config_is_frozen(self):
        runtime_config = resolve_runtime_config(AppYaml(), overrides={"jdk": "openjdk8"})
        with pytest.raises(ValidationError):
            runtime_config.jdk = "openjdk9"


class TestImageCatalog:

    def test_packaged_defaults(self):
        images = load_image_catalog()
        assert images.maven_image == "gcr.io/cloud-builders/mvn:3.5.0-jdk-8"
        assert images.script_image == images.maven_image
        assert images.jdk_images[images.default_jdk] == "gcr.io/google-appengine/openjdk:8"
        assert images.server_images[images.default_server] == "gcr.io/google-appengine/jetty:9"

    def test_images_file_is_merged(self, tmp_path):
        images_file = tmp_path / "images.yaml"
        images_file.write_text(yaml.safe_dump({
            "jdk_images": {"openjdk11": "eclipse-temurin:11"},
            "default_jdk": "openjdk11",
        }))
        images = load_image_catalog(str(images_file))

        assert images.jdk_images["openjdk11"] == "eclipse-temurin:11"
        assert "openjdk8" in images.jdk_images
        assert images.default_jdk == "openjdk11"

    def test_json_images_file_and_overrides(self, tmp_path):
        images_file = tmp_path / "images.json"
        images_file.write_text(json.dumps({"maven_image": "from-file"}))
        images = load_image_catalog(str(images_file), overrides={"maven_image": "from-cli"})
        assert images.maven_image == "from-cli"

    def test_missing_images_file(self, tmp_path):
        with pytest.raises(ConfigFileMissingError):
            load_image_catalog(str(tmp_path / "nope.yaml"))

    def test_undecodable_images_file(self, tmp_path):
        images_file = tmp_path / "images.yaml"
        images_file.write_bytes(b"maven_image: \xff\xfe\n")
        with pytest.raises(ConfigParsingError, match="UTF-8"):
            load_image_catalog(str(images_file))

    def test_default_without_image(self):
        with pytest.raises(ConfigValidationError, match="Default jdk"):
            load_image_catalog(overrides={"default_jdk": "zulu"})
