from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import NamedTuple

from navy.errors import ConfigurationError
from navy.errors import UnknownServiceError

DEFAULT_TAG = 'latest'
AUTO = 'auto'


class Env(Dict):
    ...


class Ports(Dict):
    """internal port -> external port, or AUTO when the runtime assigns it"""

    def forced(self) -> dict[int, int]:
        return {internal: external for internal, external in self.items() if external != AUTO}


class ServiceSpec(NamedTuple):
    name: str
    image: str
    tag: str = DEFAULT_TAG
    pinned: bool = False
    ports: Ports = Ports()
    env: Env = Env()
    develop: bool = False
    virtual_host: bool = False
    volumes: tuple[str, ...] = ()
    labels: dict[str, str] = {}
    command: str | None = None

    def __repr__(self):
        return f'ServiceSpec({self.name}, {self.image_ref})'

    @property
    def image_ref(self) -> str:
        if not self.tag:
            return self.image
        return f'{self.image}:{self.tag}'

    def with_env(self, env: Env) -> 'ServiceSpec':
        return self._replace(env=Env(self.env | env))

    def with_labels(self, labels: dict[str, str]) -> 'ServiceSpec':
        return self._replace(labels=self.labels | labels)

    def as_dict(self) -> dict:
        return {
            'name': self.name,
            'image': self.image,
            'tag': self.tag,
            'pinned': self.pinned,
            'ports': {str(internal): external for internal, external in sorted(self.ports.items())},
            'env': dict(sorted(self.env.items())),
            'develop': self.develop,
            'virtual_host': self.virtual_host,
            'volumes': list(self.volumes),
            'labels': dict(sorted(self.labels.items())),
            'command': self.command,
        }


class ServiceDefinitionSet:
    def __init__(self, *services: ServiceSpec):
        self._services: dict[str, ServiceSpec] = {}
        for service in services:
            if service.name in self._services:
                raise ConfigurationError(f'Service "{service.name}" declared more than once')
            self._services[service.name] = service

    def __repr__(self):
        return f'ServiceDefinitionSet({list(self._services)})'

    def __getitem__(self, item: str) -> ServiceSpec:
        return self._services[item]

    def __iter__(self) -> Iterator[str]:
        return iter(self._services)

    def __contains__(self, item) -> bool:
        return item in self._services

    def __len__(self) -> int:
        return len(self._services)

    def __eq__(self, other):
        return isinstance(other, ServiceDefinitionSet) and self.as_json() == other.as_json()

    def services(self) -> list[ServiceSpec]:
        return list(self._services.values())

    def names(self) -> list[str]:
        return list(self._services)

    def replace(self, service: ServiceSpec) -> 'ServiceDefinitionSet':
        if service.name not in self._services:
            raise UnknownServiceError([service.name])
        return ServiceDefinitionSet(*[
            service if name == service.name else existing
            for name, existing in self._services.items()
        ])

    def map(self, transform) -> 'ServiceDefinitionSet':
        return ServiceDefinitionSet(*[transform(service) for service in self._services.values()])

    def subset(self, names: Iterable[str] | None) -> 'ServiceDefinitionSet':
        if not names:
            return self

        if isinstance(names, str):
            names = [names]
        names = list(dict.fromkeys(names))
        if unknown := [name for name in names if name not in self._services]:
            raise UnknownServiceError(unknown)

        return ServiceDefinitionSet(*[
            service for name, service in self._services.items() if name in names
        ])

    def as_json(self) -> list[dict]:
        return [service.as_dict() for service in self._services.values()]
