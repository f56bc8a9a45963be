import functools
import logging
import traceback
from pathlib import Path

import click

from .builder import BuildPipelineConfigurator
from .config import AppYamlFinder, AppYamlParser, load_image_catalog
from .factories import BuildContextFactory, BuildStepFactory
from .io import DiskFileSystem
from .utils import setup_logger, parse_module_levels, parse_pairs
from .exceptions import (
    RuntimeBuilderError,
    ConfigurationError,
    BuildStepError,
    RuntimeBuilderIOError,
)
from . import __version__


def setup_logging(debug: bool, log_levels: str = None, log_file: str = None):
    """Setup logger with debug and module-level configuration"""
    module_levels = parse_module_levels(log_levels) if log_levels else None
    setup_logger(debug=debug, module_levels=module_levels, log_file=log_file)


def _abort(message: str):
    logging.error(message)
    ctx = click.get_current_context()
    if ctx.obj and ctx.obj.get('debug'):
        traceback.print_exc()
    raise click.Abort()


def handle_errors(func):
    """Decorator to handle common exceptions"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            _abort(f"Configuration error: {e}")
        except BuildStepError as e:
            _abort(f"Build step error: {e}")
        except RuntimeBuilderIOError as e:
            _abort(f"IO error: {e}")
        except RuntimeBuilderError as e:
            _abort(f"An unexpected application error occurred: {e}")
        except OSError as e:
            _abort(f"A filesystem error occurred: {e}")
    return wrapper


def build_configurator(
    runtime_config: tuple,
    disable_source_build: bool,
    config_path: str,
    maven_image: str,
    gradle_image: str,
    jdk_images: tuple,
    server_images: tuple,
    images_file: str,
) -> BuildPipelineConfigurator:
    """Wire the configurator from command line options"""
    fs = DiskFileSystem()

    image_overrides = {}
    if maven_image:
        image_overrides['maven_image'] = maven_image
    if gradle_image:
        image_overrides['gradle_image'] = gradle_image
    if jdk_images:
        image_overrides['jdk_images'] = parse_pairs(jdk_images, "--jdk-image")
    if server_images:
        image_overrides['server_images'] = parse_pairs(server_images, "--server-image")
    images = load_image_catalog(images_file, overrides=image_overrides, fs=fs)

    return BuildPipelineConfigurator(
        config_parser=AppYamlParser(fs),
        config_finder=AppYamlFinder(fs, config_path=config_path),
        step_factory=BuildStepFactory(images),
        context_factory=BuildContextFactory(fs, disable_source_build=disable_source_build),
        overrides=parse_pairs(runtime_config, "--runtime-config"),
    )


def selection_options(func):
    """Options shared by `generate` and `plan`"""
    options = [
        click.argument('workspace', type=click.Path(exists=True, file_okay=False, path_type=Path)),
        click.option('-r', '--runtime-config', multiple=True, metavar='KEY=VALUE',
                     help='Override a runtime_config setting (e.g. -r jdk=openjdk9)'),
        click.option('--disable-source-build', is_flag=True, help='Never build from source, package a prebuilt artifact'),
        click.option('--config-path', help='app.yaml location relative to the workspace'),
        click.option('--maven-image', help='Docker image used for maven builds'),
        click.option('--gradle-image', help='Docker image used for gradle builds'),
        click.option('--jdk-image', 'jdk_images', multiple=True, metavar='NAME=IMG', help='Runtime image for a jdk name'),
        click.option('--server-image', 'server_images', multiple=True, metavar='NAME=IMG', help='Runtime image for a server name'),
        click.option('--images', 'images_file', type=click.Path(dir_okay=False), help='YAML/JSON file overriding the image catalog'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@handle_errors
def do_generate(workspace: Path, **options):
    """Execute generate command"""
    configurator = build_configurator(**options)
    resources = configurator.generate_docker_resources(workspace)
    logging.info(f"Dockerfile: {resources.dockerfile_path}")
    logging.info(f".dockerignore: {resources.dockerignore_path}")


@handle_errors
def do_plan(workspace: Path, **options):
    """Execute plan command"""
    configurator = build_configurator(**options)
    for kind in configurator.plan(workspace):
        click.echo(kind.value)


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'pipeline=DEBUG,steps=INFO')")
@click.option('-f', '--log-file', help='Path to log file')
@click.version_option(version=__version__, prog_name='runtimebuilder')
@click.pass_context
def cli(ctx, debug, log_levels, log_file):
    """Runtime Builder - Generate a Dockerfile for a Java workspace

    \b
    Examples:
      rtb generate .                      Write Dockerfile and .dockerignore
      rtb plan . --disable-source-build   Show the steps that would run
      rtb generate . -r jdk=openjdk9      Override a runtime_config setting
    """
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    setup_logging(debug, log_levels, log_file)


@cli.command()
@selection_options
def generate(workspace, **options):
    """Write Dockerfile and .dockerignore into WORKSPACE"""
    do_generate(workspace, **options)


@cli.command()
@selection_options
def plan(workspace, **options):
    """Print the build steps selected for WORKSPACE"""
    do_plan(workspace, **options)


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
