"""
Container runtime contract used by environments and the registry.

Implementations own everything that touches the container engine: naming of
projects, persisting the launched configuration, retries and timeouts.
Failures are raised as navy errors (RuntimeFailure, ResourceBusyError).
"""
from __future__ import annotations

from typing import NamedTuple
from typing import Protocol

from navy.env_description.env_types import ServiceDefinitionSet


class RunningService(NamedTuple):
    id: str
    name: str
    image: str
    status: str
    state: str = ''

    @property
    def is_running(self) -> bool:
        return self.state == 'running'

    def as_json(self) -> dict[str, str]:
        return {
            'id': self.id,
            'name': self.name,
            'image': self.image,
            'status': self.status,
        }


class Runtime(Protocol):
    async def create_and_start(self, env_name: str, defs: ServiceDefinitionSet) -> None:
        ...

    async def start(self, env_name: str, services: list[str] | None) -> None:
        ...

    async def stop(self, env_name: str, services: list[str] | None) -> None:
        ...

    async def restart(self, env_name: str, services: list[str] | None) -> None:
        ...

    async def kill(self, env_name: str, services: list[str] | None) -> None:
        ...

    async def remove(self, env_name: str, services: list[str] | None) -> None:
        ...

    async def pull(self, env_name: str, services: list[str]) -> None:
        ...

    async def list(self, env_name: str) -> list[RunningService]:
        ...

    async def port_mapping(self, env_name: str, service: str, internal_port: int) -> int | None:
        ...

    async def list_environment_names(self) -> list[str]:
        ...

    async def destroy(self, env_name: str) -> None:
        ...
