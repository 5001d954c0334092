"""
navy command line.

Commands are registered from the static COMMANDS table. Every handler works
on an environment taken from the registry (`-e/--environment`, the configured
default navy otherwise). Navy errors are printed as one clean message, any
other error is printed with its traceback.
"""
import asyncio
import sys
from functools import wraps

import click
from rich.text import Text

from navy.cli.status import print_ps
from navy.cli.status import print_status
from navy.core.compose_files import compose_definitions_loader
from navy.core.compose_interface import ComposeShellInterface
from navy.core.config import Config
from navy.core.config import NavyConfig
from navy.core.config import load_config
from navy.core.config import save_default_environment
from navy.core.registry import Registry
from navy.core.registry import validate_environment_name
from navy.errors import ErrorKind
from navy.output.console import CONSOLE
from navy.output.console import ERROR_CONSOLE
from navy.output.styles import Style
from navy.version import get_version


class Dispatcher:
    def __init__(self, registry: Registry, config_file_path=None):
        self.registry = registry
        self.config_file_path = config_file_path

    @property
    def config(self) -> NavyConfig:
        return self.registry.config

    @classmethod
    def from_environment(cls) -> 'Dispatcher':
        settings = Config()
        config = load_config(settings.config_file_path)
        registry = Registry(
            runtime=ComposeShellInterface(settings),
            config=config,
            definitions_loader=compose_definitions_loader(settings.compose_file_path),
        )
        return cls(registry, config_file_path=settings.config_file_path)


def report_error(error: Exception) -> None:
    match getattr(error, 'kind', None):
        case ErrorKind.RESOURCE_BUSY:
            ERROR_CONSOLE.print(error.pretty())
            ERROR_CONSOLE.print(Text('Stop them with "navy stop" first', style=Style.context))
        case ErrorKind():
            ERROR_CONSOLE.print(error.pretty())
        case _:
            ERROR_CONSOLE.print(Text('Unexpected error:', style=Style.bad))
            ERROR_CONSOLE.print_exception()


def handle_errors(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (click.exceptions.Exit, click.exceptions.Abort, click.ClickException):
            raise
        except Exception as e:
            report_error(e)
            sys.exit(1)

    return wrapper


def run(coro):
    return asyncio.run(coro)


environment_option = click.option(
    '-e', '--environment',
    default=None,
    help='set the environment name to be used [default navy]',
)
services_argument = click.argument('services', nargs=-1)


def basic_command(operation: str, description: str):
    @click.command(help=description)
    @services_argument
    @environment_option
    @click.pass_obj
    @handle_errors
    def command(dispatcher: Dispatcher, services, environment):
        env = dispatcher.registry.get(environment)
        run(getattr(env, operation)(list(services) or None))
        CONSOLE.print(
            Text(f'{operation.capitalize()}: ', style=Style.info)
            .append(Text(', '.join(services) if services else 'all services', style=Style.mark))
            .append(Text(f' in {env.name}', style=Style.regular))
        )

    return command


@click.group()
@click.version_option(version=get_version())
@click.pass_context
@handle_errors
def cli(ctx):
    """navy - launch and manage named multi-service environments."""
    if ctx.obj is None:
        ctx.obj = Dispatcher.from_environment()


@click.command(help='Launches the given services in an environment')
@services_argument
@environment_option
@click.pass_obj
@handle_errors
def launch(dispatcher: Dispatcher, services, environment):
    env = dispatcher.registry.get(environment)
    launched = run(env.launch(list(services) or None))
    CONSOLE.print(
        Text('Launched ', style=Style.info)
        .append(Text(', '.join(launched.names()) or 'nothing', style=Style.good))
        .append(Text(' in ', style=Style.info))
        .append(Text(env.name, style=Style.mark))
    )


@click.command(help='Destroys an environment and all related data and services')
@environment_option
@click.option('-f', '--force', is_flag=True, help="don't prompt before removing the environment")
@click.pass_obj
@handle_errors
def destroy(dispatcher: Dispatcher, environment, force):
    env = dispatcher.registry.get(environment)
    if not force:
        click.confirm(f'Are you sure you want to destroy the "{env.name}" navy and all of its data?', abort=True)
    run(env.destroy())


@click.command(help='Lists the running services for an environment')
@environment_option
@click.option('--json', 'as_json', is_flag=True, help='output JSON instead of a table')
@click.pass_obj
@handle_errors
def ps(dispatcher: Dispatcher, environment, as_json):
    env = dispatcher.registry.get(environment)
    if not run(print_ps(env, as_json, default_environment=dispatcher.config.default_environment)):
        CONSOLE.print(Text(f'There are no running services in {env.name}', style=Style.context))


@click.command(help='Prints the external port for the given internal port of the given service')
@click.argument('service')
@click.argument('port', type=int)
@environment_option
@click.pass_obj
@handle_errors
def port(dispatcher: Dispatcher, service, port, environment):
    env = dispatcher.registry.get(environment)
    CONSOLE.print(run(env.port(service, port)))


@click.command(help='List all of the running navies and the status of their services')
@click.option('--json', 'as_json', is_flag=True, help='output JSON instead of a table')
@click.pass_obj
@handle_errors
def status(dispatcher: Dispatcher, as_json):
    run(print_status(dispatcher.registry, as_json))


@click.command('set-default', help='Set the default navy')
@click.argument('navy')
@click.pass_obj
@handle_errors
def set_default(dispatcher: Dispatcher, navy):
    name = validate_environment_name(navy)
    save_default_environment(dispatcher.config_file_path, name)
    CONSOLE.print(
        Text('Default navy is now ', style=Style.info)
        .append(Text(name, style=Style.mark))
    )


COMMANDS = {
    'launch': launch,
    'destroy': destroy,
    'ps': ps,
    'start': basic_command('start', 'Starts the given services'),
    'stop': basic_command('stop', 'Stops the given services'),
    'restart': basic_command('restart', 'Restarts the given services'),
    'kill': basic_command('kill', 'Kills the given services'),
    'rm': basic_command('rm', 'Removes the given services'),
    'pull': basic_command('pull', "Pulls the given services' images from their respective registries"),
    'port': port,
    'status': status,
    'set-default': set_default,
}

for command_name, command in COMMANDS.items():
    cli.add_command(command, command_name)


def main():
    cli()
