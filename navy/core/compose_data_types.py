import json
from dataclasses import dataclass
from typing import Iterator

from navy.core.runtime import RunningService


class ComposeState:
    RUNNING = 'running'
    EXITED = 'exited'


def parse_labels(labels: str | dict | None) -> dict[str, str]:
    if isinstance(labels, dict):
        return labels
    if not labels:
        return {}
    return {
        (label_split := label.split('=', maxsplit=1))[0]: label_split[1] if len(label_split) == 2 else ''
        for label in labels.split(',')
    }


@dataclass
class ServiceComposeState:
    id: str
    name: str
    service: str
    image: str
    state: str
    status: str  # "Up X seconds"
    labels: dict[str, str]

    @classmethod
    def from_dict(cls, status: dict) -> 'ServiceComposeState':
        return cls(
            id=status.get('ID', '')[:12],
            name=status.get('Name', ''),
            service=status.get('Service', ''),
            image=status.get('Image', ''),
            state=status.get('State', ''),
            status=status.get('Status', ''),
            labels=parse_labels(status.get('Labels')),
        )

    def as_running_service(self) -> RunningService:
        return RunningService(
            id=self.id,
            name=self.service or self.name,
            image=self.image,
            status=self.status,
            state=self.state,
        )


class ServicesComposeState:
    def __init__(self, compose_status: str):
        self._services: list[ServiceComposeState] = [
            ServiceComposeState.from_dict(status) for status in self._parse(compose_status)
        ]

    @staticmethod
    def _parse(compose_status: str) -> list[dict]:
        compose_status = compose_status.strip()
        if not compose_status:
            return []
        # older compose releases print one json array, newer ones a json object per line
        if compose_status.startswith('['):
            return json.loads(compose_status)
        return [json.loads(line) for line in compose_status.split('\n') if line.strip()]

    def __iter__(self) -> Iterator[ServiceComposeState]:
        return iter(self._services)

    def __len__(self):
        return len(self._services)

    def __repr__(self):
        return f'{type(self).__name__}(<{self._services}>)'

    def running(self) -> list[str]:
        return [service.service for service in self._services if service.state == ComposeState.RUNNING]

    def as_running_services(self) -> list[RunningService]:
        return [service.as_running_service() for service in self._services]
