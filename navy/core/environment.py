"""
Environment ("navy"): one named set of service definitions and the pipeline
applied to them before launch.

Lifecycle as reported by the runtime:
    DECLARED (no resources) --launch--> LAUNCHED --stop/kill--> STOPPED
    STOPPED --launch/start--> LAUNCHED
    any state --destroy--> no resources at all

Only `launch` runs the pipeline. Every other operation is delegated to the
runtime, which keeps the configuration applied by the last launch.
"""
import asyncio
from contextlib import contextmanager
from enum import Enum
from typing import Awaitable
from typing import Callable
from typing import Iterable

from navy.core.context import EnvironmentContext
from navy.core.runtime import RunningService
from navy.core.runtime import Runtime
from navy.env_description.env_types import ServiceDefinitionSet
from navy.errors import AggregateError
from navy.errors import ConfigurationError
from navy.errors import NavyError
from navy.errors import RuntimeFailure
from navy.errors import ServiceNotRunningError
from navy.middleware import Pipeline
from navy.middleware import default_pipeline
from navy.middleware.port_override import port_override_middleware


class EnvironmentState(Enum):
    DECLARED = 'declared'
    LAUNCHED = 'launched'
    STOPPED = 'stopped'


@contextmanager
def runtime_errors(operation: str):
    try:
        yield
    except NavyError:
        raise
    except Exception as e:
        raise RuntimeFailure(f"Can't {operation}: {e}") from e


async def fan_out(operation: str,
                  call: Callable[[str], Awaitable[None]],
                  services: list[str],
                  fail_fast: bool = False) -> None:
    if not services:
        return

    tasks = {service: asyncio.ensure_future(call(service)) for service in services}
    try:
        await asyncio.wait(
            tasks.values(),
            return_when=asyncio.FIRST_EXCEPTION if fail_fast else asyncio.ALL_COMPLETED,
        )
    finally:
        pending = [task for task in tasks.values() if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    errors = {
        service: task.exception()
        for service, task in tasks.items()
        if not task.cancelled() and task.exception() is not None
    }
    if errors:
        raise AggregateError(operation, errors)


class Environment:
    def __init__(self,
                 name: str,
                 definitions: ServiceDefinitionSet,
                 runtime: Runtime,
                 pipeline: Pipeline | None = None,
                 context: EnvironmentContext | None = None):
        self.name = name
        self.definitions = definitions
        self._runtime = runtime
        self._pipeline = pipeline if pipeline is not None else default_pipeline()
        if context is None:
            context = EnvironmentContext.make(name)
        assert context.environment == name, f'Context for {context.environment} given to {name} environment'
        self._context = context

    def __repr__(self):
        return f'Environment({self.name})'

    def __eq__(self, other):
        return isinstance(other, Environment) and self.name == other.name

    def __hash__(self):
        return hash(self.name)

    @property
    def pipeline(self) -> Pipeline:
        return self._pipeline

    def context(self) -> EnvironmentContext:
        return self._context

    def _select(self, services: Iterable[str] | None) -> list[str] | None:
        if not services:
            return None
        return self.definitions.subset(services).names()

    async def launch(self, services: Iterable[str] | None = None) -> ServiceDefinitionSet:
        selected = self.definitions.subset(services)
        if not selected:
            raise ConfigurationError(f'No services declared for "{self.name}" environment')
        # forced ports stay unique across every declared service, launched together or not
        port_override_middleware(self.definitions, self._context)
        transformed = await self._pipeline.apply(selected, self._context)
        with runtime_errors(f'launch {self.name}'):
            await self._runtime.create_and_start(self.name, transformed)
        return transformed

    async def start(self, services: Iterable[str] | None = None) -> None:
        selected = self._select(services)
        with runtime_errors(f'start {self.name}'):
            await self._runtime.start(self.name, selected)

    async def stop(self, services: Iterable[str] | None = None) -> None:
        selected = self._select(services)
        with runtime_errors(f'stop {self.name}'):
            await self._runtime.stop(self.name, selected)

    async def restart(self, services: Iterable[str] | None = None) -> None:
        selected = self._select(services)
        with runtime_errors(f'restart {self.name}'):
            await self._runtime.restart(self.name, selected)

    async def kill(self, services: Iterable[str] | None = None) -> None:
        selected = self._select(services)
        with runtime_errors(f'kill {self.name}'):
            await self._runtime.kill(self.name, selected)

    async def rm(self, services: Iterable[str] | None = None) -> None:
        selected = self._select(services)
        with runtime_errors(f'remove {self.name}'):
            await self._runtime.remove(self.name, selected)

    async def pull(self, services: Iterable[str] | None = None, fail_fast: bool = False) -> None:
        selected = self._select(services) or self.definitions.names()

        async def pull_service(service: str) -> None:
            with runtime_errors(f'pull {service}'):
                await self._runtime.pull(self.name, [service])

        await fan_out('pull', pull_service, selected, fail_fast=fail_fast)

    async def ps(self) -> list[RunningService]:
        with runtime_errors(f'list {self.name} services'):
            return await self._runtime.list(self.name)

    async def port(self, service: str, internal_port: int) -> int:
        with runtime_errors(f'get {service} port {internal_port}'):
            external_port = await self._runtime.port_mapping(self.name, service, int(internal_port))
        if external_port is None:
            raise ServiceNotRunningError(service, int(internal_port))
        return external_port

    async def destroy(self) -> None:
        with runtime_errors(f'destroy {self.name}'):
            await self._runtime.destroy(self.name)

    async def state(self) -> EnvironmentState:
        services = await self.ps()
        if not services:
            return EnvironmentState.DECLARED
        if any(service.is_running for service in services):
            return EnvironmentState.LAUNCHED
        return EnvironmentState.STOPPED
