import json

from rich.table import Table
from rich.text import Text

from navy.core.environment import Environment
from navy.core.registry import Registry
from navy.core.runtime import RunningService
from navy.output.console import CONSOLE
from navy.output.styles import Style


def services_table(services: list[RunningService]) -> Table:
    table = Table(box=None, padding=(0, 2), header_style=Style.mark_neutral)
    table.add_column('ID', width=13, no_wrap=True)
    table.add_column('Name', width=15)
    table.add_column('Image', width=25)
    table.add_column('Status')
    for service in services:
        table.add_row(
            service.id,
            service.name,
            service.image,
            Text(service.status, style=Style.good if service.is_running else Style.suspicious),
        )
    return table


async def print_ps(env: Environment, as_json: bool, default_environment: str | None = None) -> bool:
    services = await env.ps()

    if as_json:
        CONSOLE.print_json(json.dumps([service.as_json() for service in services]))
        return True

    if not services:
        return False

    title = Text('  ').append(Text(env.name, style='underline'))
    if env.name == default_environment:
        title.append(Text(' (default navy)', style=Style.default_navy))

    CONSOLE.print()
    CONSOLE.print(title)
    CONSOLE.print(services_table(services))
    return True


async def print_status(registry: Registry, as_json: bool) -> None:
    navies = await registry.list()

    if as_json:
        statuses = {navy.name: [service.as_json() for service in await navy.ps()] for navy in navies}
        CONSOLE.print_json(json.dumps(statuses))
        return

    if not navies:
        CONSOLE.print(Text('There are no launched navies', style=Style.context))
        return

    for navy in navies:
        await print_ps(navy, as_json=False, default_environment=registry.config.default_environment)
