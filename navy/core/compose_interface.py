"""
docker compose backed runtime.

Every environment is a compose project named `navy_<environment>`. Launch
renders the transformed service definitions into
`<NAVY_HOME>/envs/<environment>/docker-compose.yml`; the other commands reuse
that file, so they act on the configuration of the last launch.
"""
from __future__ import annotations

import asyncio
import os
import shlex
import shutil
import sys
from pathlib import Path

from rich.text import Text
from rtry import retry

from navy.core.compose_data_types import ServicesComposeState
from navy.core.compose_files import read_dc_file
from navy.core.compose_files import render_compose
from navy.core.compose_files import write_dc_file
from navy.core.config import Config
from navy.core.runtime import RunningService
from navy.core.utils.process_command_output import process_output_till_done
from navy.env_description.env_types import ServiceDefinitionSet
from navy.errors import ResourceBusyError
from navy.errors import RuntimeFailure
from navy.helpers.jobs_result import JobResult
from navy.helpers.jobs_result import OperationError
from navy.helpers.labels import Label
from navy.output.console import CONSOLE
from navy.output.styles import Style

PROJECT_PREFIX = 'navy_'
COMPOSE_FILE_NAME = 'docker-compose.yml'
ENVIRONMENT_LABEL_FORMAT = '{{.Label "' + Label.ENVIRONMENT + '"}}'

CommandResult = tuple[JobResult | OperationError, bytes]


def project_name(env_name: str) -> str:
    return f'{PROJECT_PREFIX}{env_name}'


def failed(result: CommandResult) -> bool:
    return result[0] == JobResult.BAD


class ComposeShellInterface:
    def __init__(self, config: Config | None = None, execution_envs: dict = None):
        self._config = config if config is not None else Config()
        self.envs_path: Path = self._config.envs_path
        self.docker_compose = self._config.docker_compose
        self.docker = self._config.docker
        self.execution_envs = dict(os.environ)
        if self._config.docker_host:
            self.execution_envs['DOCKER_HOST'] = self._config.docker_host
        if execution_envs is not None:
            self.execution_envs |= execution_envs
        self.verbose_docker_compose_commands = self._config.verbose_docker_compose_commands

    def compose_file(self, env_name: str) -> Path:
        return self.envs_path / env_name / COMPOSE_FILE_NAME

    def _compose_cmd(self, env_name: str, args: str, with_file: bool = True) -> str:
        cmd = f'{self.docker_compose} -p {project_name(env_name)}'
        if with_file and self.compose_file(env_name).exists():
            cmd += f' -f {shlex.quote(str(self.compose_file(env_name)))}'
        return f'{cmd} {args}'

    def _require_compose_file(self, env_name: str) -> None:
        if not self.compose_file(env_name).exists():
            raise RuntimeFailure(f'Environment "{env_name}" has never been launched')

    async def _execute(self, cmd: str, verbose: bool = None) -> CommandResult:
        sys.stdout.flush()
        if verbose is None:
            verbose = self.verbose_docker_compose_commands

        process = await asyncio.create_subprocess_shell(
            cmd,
            env=self.execution_envs,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        CONSOLE.print(Text(f'{cmd}', style=Style.context))
        stdout, stderr = await process_output_till_done(process, verbose)

        if process.returncode != 0:
            return OperationError(stdout.decode('utf-8'), stderr.decode('utf-8')), stdout
        return JobResult.GOOD, stdout

    async def _run(self, env_name: str, action: str, args: str, with_file: bool = True) -> bytes:
        result, stdout = await self._execute(self._compose_cmd(env_name, args, with_file))
        if result != JobResult.GOOD:
            raise RuntimeFailure(f"Can't {action} in {env_name}", log=result.log)
        return stdout

    @retry(attempts=3, delay=1, until=failed)
    async def _read(self, cmd: str) -> CommandResult:
        return await self._execute(cmd, verbose=False)

    @staticmethod
    def _services_args(services: list[str] | None) -> str:
        return ' '.join(shlex.quote(service) for service in services or [])

    async def dc_state(self, env_name: str) -> ServicesComposeState:
        result, stdout = await self._read(self._compose_cmd(env_name, 'ps -a --format json'))
        if result != JobResult.GOOD:
            raise RuntimeFailure(f"Can't get services state of {env_name}", log=result.log)
        return ServicesComposeState(stdout.decode('utf-8'))

    async def create_and_start(self, env_name: str, defs: ServiceDefinitionSet) -> None:
        compose_file = self.compose_file(env_name)
        launched_cfg = read_dc_file(compose_file) if compose_file.exists() else None
        dc_cfg = render_compose(env_name, defs)
        if launched_cfg is not None:
            dc_cfg['services'] = (launched_cfg.get('services') or {}) | dc_cfg['services']
        write_dc_file(compose_file, dc_cfg)

        CONSOLE.print(
            Text('Launching services: ', style=Style.info)
            .append(Text(', '.join(defs.names()), style=Style.good))
        )
        try:
            await self._run(env_name, 'launch services', f'up -d {self._services_args(defs.names())}')
        except RuntimeFailure:
            # the persisted file describes the last successful launch only
            if launched_cfg is None:
                compose_file.unlink()
            else:
                write_dc_file(compose_file, launched_cfg)
            raise

    async def start(self, env_name: str, services: list[str] | None) -> None:
        await self._run(env_name, 'start services', f'start {self._services_args(services)}')

    async def stop(self, env_name: str, services: list[str] | None) -> None:
        await self._run(env_name, 'stop services', f'stop {self._services_args(services)}')

    async def restart(self, env_name: str, services: list[str] | None) -> None:
        await self._run(env_name, 'restart services', f'restart {self._services_args(services)}')

    async def kill(self, env_name: str, services: list[str] | None) -> None:
        await self._run(env_name, 'kill services', f'kill {self._services_args(services)}')

    async def remove(self, env_name: str, services: list[str] | None) -> None:
        running = (await self.dc_state(env_name)).running()
        if busy := [service for service in running if not services or service in services]:
            raise ResourceBusyError(busy)
        await self._run(env_name, 'remove services', f'rm -f {self._services_args(services)}')

    async def pull(self, env_name: str, services: list[str]) -> None:
        self._require_compose_file(env_name)
        result, _ = await retry(attempts=3, delay=1, until=failed)(self._execute)(
            self._compose_cmd(env_name, f'pull {self._services_args(services)}')
        )
        if result != JobResult.GOOD:
            raise RuntimeFailure(f"Can't pull {', '.join(services)} in {env_name}", log=result.log)

    async def list(self, env_name: str) -> list[RunningService]:
        return (await self.dc_state(env_name)).as_running_services()

    async def port_mapping(self, env_name: str, service: str, internal_port: int) -> int | None:
        result, stdout = await self._execute(
            self._compose_cmd(env_name, f'port {shlex.quote(service)} {int(internal_port)}'),
            verbose=False,
        )
        output = stdout.decode('utf-8').strip()
        if result != JobResult.GOOD or not output:
            return None
        # "0.0.0.0:49153", ipv6 bindings come as "[::]:49153"
        _, _, port = output.split('\n')[0].rpartition(':')
        try:
            return int(port)
        except ValueError:
            return None

    async def list_environment_names(self) -> list[str]:
        result, stdout = await self._read(
            f'{self.docker} ps -a --filter label={Label.ENVIRONMENT} --format {shlex.quote(ENVIRONMENT_LABEL_FORMAT)}'
        )
        if result != JobResult.GOOD:
            raise RuntimeFailure("Can't list environments", log=result.log)
        return sorted({line.strip() for line in stdout.decode('utf-8').split('\n') if line.strip()})

    async def destroy(self, env_name: str) -> None:
        await self._run(env_name, 'destroy environment', 'down --volumes --remove-orphans')
        if (env_directory := self.envs_path / env_name).exists():
            shutil.rmtree(env_directory)
        CONSOLE.print(
            Text('Environment destroyed: ', style=Style.info)
            .append(Text(env_name, style=Style.mark))
        )
