import os
from pathlib import Path
from typing import NamedTuple

import yaml
from yaml import YAMLError

from navy.core.context import DEFAULT_VIRTUAL_HOST_PATTERN
from navy.errors import ConfigurationError

DEFAULT_ENVIRONMENT_NAME = 'dev'


class Config:
    def __init__(self):
        self.navy_home: Path = Path(os.environ.get('NAVY_HOME', Path.home() / '.navy'))
        self.config_file_path: Path = Path(os.environ.get('NAVY_CONFIG_FILE', self.navy_home / 'config.yml'))
        self.envs_path: Path = self.navy_home / 'envs'
        self.compose_file_path: Path = Path(os.environ.get('NAVY_COMPOSE_FILE', 'docker-compose.yml'))
        self.docker_compose: str = os.environ.get('NAVY_DOCKER_COMPOSE', 'docker compose')
        self.docker: str = os.environ.get('NAVY_DOCKER', 'docker')
        self.docker_host = os.environ.get('DOCKER_HOST')
        self.verbose_docker_compose_commands = bool(os.environ.get('VERBOSE_DOCKER_COMPOSE_OUTPUT_TO_STDOUT', False))


class EnvironmentSettings(NamedTuple):
    tag: str | None = None
    tags: dict[str, str] = {}
    ports: dict[str, dict[int, int]] = {}
    develop: dict[str, str] = {}
    virtual_host_pattern: str = DEFAULT_VIRTUAL_HOST_PATTERN

    @classmethod
    def from_dict(cls, name: str, data: dict | None) -> 'EnvironmentSettings':
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f'Settings of "{name}" environment should be a mapping')
        if unknown := set(data) - set(cls._fields):
            raise ConfigurationError(f'Unknown settings for "{name}" environment: {", ".join(sorted(unknown))}')

        try:
            return cls(
                tag=str(data['tag']) if data.get('tag') is not None else None,
                tags={str(service): str(tag) for service, tag in (data.get('tags') or {}).items()},
                ports={
                    str(service): {int(internal): int(external) for internal, external in ports.items()}
                    for service, ports in (data.get('ports') or {}).items()
                },
                develop={str(service): str(path) for service, path in (data.get('develop') or {}).items()},
                virtual_host_pattern=data.get('virtual_host_pattern') or DEFAULT_VIRTUAL_HOST_PATTERN,
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigurationError(f'Bad settings for "{name}" environment: {e}') from None

    def as_dict(self) -> dict:
        data = {}
        if self.tag is not None:
            data['tag'] = self.tag
        if self.tags:
            data['tags'] = dict(self.tags)
        if self.ports:
            data['ports'] = {service: dict(ports) for service, ports in self.ports.items()}
        if self.develop:
            data['develop'] = dict(self.develop)
        if self.virtual_host_pattern != DEFAULT_VIRTUAL_HOST_PATTERN:
            data['virtual_host_pattern'] = self.virtual_host_pattern
        return data


class NavyConfig(NamedTuple):
    default_environment: str = DEFAULT_ENVIRONMENT_NAME
    environments: dict[str, EnvironmentSettings] = {}

    def settings_for(self, environment: str) -> EnvironmentSettings:
        return self.environments.get(environment, EnvironmentSettings())

    def with_default_environment(self, name: str) -> 'NavyConfig':
        return self._replace(default_environment=name)

    def as_dict(self) -> dict:
        data = {'default_environment': self.default_environment}
        if self.environments:
            data['environments'] = {name: settings.as_dict() for name, settings in self.environments.items()}
        return data


def read_config_file(path: str | Path) -> dict:
    with open(path) as f:
        return yaml.safe_load(f) or {}


def write_config_file(path: str | Path, data: dict) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        f.write(yaml.safe_dump(data, sort_keys=False))


def load_config(path: str | Path) -> NavyConfig:
    if not Path(path).exists():
        return NavyConfig()

    try:
        data = read_config_file(path)
    except YAMLError as e:
        raise ConfigurationError(f"Can't parse config file {path}:\n{e}") from None

    if not isinstance(data, dict):
        raise ConfigurationError(f'Config file {path} should contain a mapping')

    environments = data.get('environments') or {}
    if not isinstance(environments, dict):
        raise ConfigurationError(f'"environments" in {path} should be a mapping')

    return NavyConfig(
        default_environment=str(data.get('default_environment') or DEFAULT_ENVIRONMENT_NAME),
        environments={
            str(name): EnvironmentSettings.from_dict(str(name), settings)
            for name, settings in environments.items()
        },
    )


def save_default_environment(path: str | Path, name: str) -> NavyConfig:
    config = load_config(path).with_default_environment(name)
    write_config_file(path, config.as_dict())
    return config
