"""
Compose files <-> service definitions.

Service flags used by navy live in the `x-navy` section of a service:

    services:
      web:
        image: company/web:latest
        ports: ["80"]
        x-navy:
          develop: true
          virtual_host: true
          pinned: false
"""
import shlex
from pathlib import Path

import yaml
from yaml import YAMLError

from navy.env_description.env_types import AUTO
from navy.env_description.env_types import DEFAULT_TAG
from navy.env_description.env_types import Env
from navy.env_description.env_types import Ports
from navy.env_description.env_types import ServiceDefinitionSet
from navy.env_description.env_types import ServiceSpec
from navy.errors import ConfigurationError
from navy.helpers.labels import Label

NAVY_SECTION = 'x-navy'
NAVY_FLAGS = ('develop', 'virtual_host', 'pinned')


def read_dc_file(filename: str | Path) -> dict:
    with open(filename) as f:
        return yaml.safe_load(f) or {}


def write_dc_file(filename: str | Path, cfg: dict) -> None:
    Path(filename).parent.mkdir(parents=True, exist_ok=True)
    with open(filename, 'w') as f:
        f.write(yaml.safe_dump(cfg, sort_keys=False))


def split_image_ref(image: str) -> tuple[str, str]:
    if '@' in image:
        return image, ''
    name, sep, tag = image.rpartition(':')
    if not sep or '/' in tag:
        return image, DEFAULT_TAG
    return name, tag


def parse_port(service: str, port) -> tuple[int, int | str]:
    if isinstance(port, dict):
        if 'target' not in port:
            raise ConfigurationError(f'Port {port} of service "{service}" has no target')
        published = port.get('published')
        return int(port['target']), int(published) if published not in (None, '') else AUTO

    parts = str(port).split('/')[0].split(':')
    try:
        if len(parts) == 1:
            return int(parts[0]), AUTO
        published, target = parts[-2], parts[-1]
        return int(target), int(published) if published else AUTO
    except ValueError:
        raise ConfigurationError(f'Port "{port}" of service "{service}" is not supported') from None


def parse_ports(service: str, ports: list | None) -> Ports:
    result = Ports()
    for port in ports or []:
        internal, external = parse_port(service, port)
        result[internal] = external
    return result


def parse_environment(service: str, environment: list | dict | None) -> Env:
    if environment is None:
        return Env()
    if isinstance(environment, dict):
        return Env({str(k): '' if v is None else str(v) for k, v in environment.items()})
    if isinstance(environment, list):
        env = Env()
        for item in environment:
            key, _, value = str(item).partition('=')
            env[key] = value
        return env
    raise ConfigurationError(f'Environment of service "{service}" should be a list or a mapping')


def parse_labels(service: str, labels: list | dict | None) -> dict[str, str]:
    return dict(parse_environment(service, labels))


def parse_volumes(service: str, volumes: list | None) -> tuple[str, ...]:
    result = []
    for volume in volumes or []:
        if isinstance(volume, dict):
            if 'target' not in volume:
                raise ConfigurationError(f'Volume {volume} of service "{service}" has no target')
            volume = f"{volume['source']}:{volume['target']}" if volume.get('source') else volume['target']
        result += [str(volume)]
    return tuple(result)


def parse_command(command: str | list | None) -> str | None:
    if isinstance(command, list):
        return shlex.join(str(part) for part in command)
    return command


def parse_navy_section(service: str, section: dict | None) -> dict[str, bool]:
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(f'In service "{service}" {NAVY_SECTION} should be a mapping of {NAVY_FLAGS}')
    if unknown := set(section) - set(NAVY_FLAGS):
        raise ConfigurationError(
            f'In service "{service}" {NAVY_SECTION} keys should only be one of {list(NAVY_FLAGS)}, '
            f'got {sorted(unknown)}'
        )
    return {flag: bool(value) for flag, value in section.items()}


def parse_service(name: str, service_cfg: dict) -> ServiceSpec:
    if not isinstance(service_cfg, dict):
        raise ConfigurationError(f'Service "{name}" should be a mapping')
    if not service_cfg.get('image'):
        raise ConfigurationError(f'Service "{name}" has no image')

    image, tag = split_image_ref(str(service_cfg['image']))
    return ServiceSpec(
        name=name,
        image=image,
        tag=tag,
        ports=parse_ports(name, service_cfg.get('ports')),
        env=parse_environment(name, service_cfg.get('environment')),
        volumes=parse_volumes(name, service_cfg.get('volumes')),
        labels=parse_labels(name, service_cfg.get('labels')),
        command=parse_command(service_cfg.get('command')),
        **parse_navy_section(name, service_cfg.get(NAVY_SECTION)),
    )


def parse_definitions(dc_cfg: dict) -> ServiceDefinitionSet:
    services = dc_cfg.get('services') or {}
    if not isinstance(services, dict):
        raise ConfigurationError('"services" should be a mapping')
    return ServiceDefinitionSet(*[
        parse_service(str(name), service_cfg) for name, service_cfg in services.items()
    ])


def load_definitions(filename: str | Path) -> ServiceDefinitionSet:
    try:
        dc_cfg = read_dc_file(filename)
    except YAMLError as e:
        raise ConfigurationError(f"Can't parse compose file {filename}:\n{e}") from None
    if not isinstance(dc_cfg, dict):
        raise ConfigurationError(f'Compose file {filename} should contain a mapping')
    return parse_definitions(dc_cfg)


def compose_definitions_loader(filename: str | Path):
    def load(env_name: str) -> ServiceDefinitionSet:
        if not Path(filename).exists():
            return ServiceDefinitionSet()
        return load_definitions(filename)

    return load


def render_port(internal: int, external: int | str) -> str:
    if external == AUTO:
        return str(internal)
    return f'{external}:{internal}'


def render_service(env_name: str, service: ServiceSpec) -> dict:
    service_cfg = {
        'image': service.image_ref,
        'labels': service.labels | {
            Label.ENVIRONMENT: env_name,
            Label.SERVICE: service.name,
        },
    }
    if service.command:
        service_cfg['command'] = service.command
    if service.ports:
        service_cfg['ports'] = [
            render_port(internal, external) for internal, external in sorted(service.ports.items())
        ]
    if service.env:
        service_cfg['environment'] = dict(service.env)
    if service.volumes:
        service_cfg['volumes'] = list(service.volumes)
    return service_cfg


def render_compose(env_name: str, defs: ServiceDefinitionSet) -> dict:
    return {
        'services': {
            service.name: render_service(env_name, service) for service in defs.services()
        },
    }
