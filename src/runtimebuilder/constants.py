from enum import Enum

# --- Log and Debug ---
# Short aliases for module names to keep CLI/env concise
LOG_ALIAS_MAP = {
    "pipeline": "runtimebuilder.builder.pipeline",
    "pl": "runtimebuilder.builder.pipeline",
    "probe": "runtimebuilder.io.probe",
    "steps": "runtimebuilder.steps",
    "maven": "runtimebuilder.steps.maven",
    "mvn": "runtimebuilder.steps.maven",
    "gradle": "runtimebuilder.steps.gradle",
    "script": "runtimebuilder.steps.script",
    "runtime": "runtimebuilder.steps.runtime",
    "conf": "runtimebuilder.config",
    "fs": "runtimebuilder.io.fs",
    "io": "runtimebuilder.io",
}

# Top-level modules within runtimebuilder for auto-prefixing
KNOWN_TOP_MODULES = {
    "builder",
    "steps",
    "io",
    "datacls",
    "utils",
    "resources",
    "config",
    "factories",
    "exceptions",
}

LOG_LEVELS_ENV = "RTB_LOG_LEVELS"


# --- Filenames and Paths ---
DOCKERFILE_NAME = "Dockerfile"
DOCKERIGNORE_NAME = ".dockerignore"
STAGING_SUFFIX = ".rtb-staging"

APP_YAML_ENV = "GAE_APPLICATION_YAML_PATH"
APP_YAML_CANDIDATES = (
    "app.yaml",
    "src/main/appengine/app.yaml",
)


# --- Marker files ---
MAVEN_DESCRIPTOR = "pom.xml"
MAVEN_WRAPPER = "mvnw"
GRADLE_DESCRIPTORS = ("build.gradle", "build.gradle.kts")
GRADLE_WRAPPER = "gradlew"


# --- Dockerfile layout ---
DOCKERFILE_BUILD_STAGE = "builder"
BUILD_STAGE_WORKDIR = "/workspace"
APP_DESTINATION = "$APP_DESTINATION"
JETTY_QUICKSTART_COMMAND = "/scripts/jetty/quickstart.sh"

MAVEN_BUILD_ARGS = "-B -DskipTests clean install"
GRADLE_BUILD_ARGS = "build"
MAVEN_ARTIFACT_LOCATION = "target"
GRADLE_ARTIFACT_LOCATION = "build/libs"


class ArtifactType(str, Enum):
    JAR = ".jar"
    WAR = ".war"


# --- Build step kinds ---
class StepKind(str, Enum):
    PREBUILT_IMAGE = "prebuilt-image"
    MAVEN = "maven"
    GRADLE = "gradle"
    SCRIPT_EXECUTION = "script-execution"
    SOURCE_BUILD_IMAGE = "source-build-image"
    RUNTIME_OPTIONS = "runtime-options"

