from types import MappingProxyType
from typing import Mapping
from typing import NamedTuple

DEFAULT_DEVELOP_TARGET = '/app'
DEFAULT_VIRTUAL_HOST_PATTERN = '{service}.{environment}'

_EMPTY = MappingProxyType({})


class EnvironmentContext(NamedTuple):
    environment: str
    tag_override: str | None = None
    tag_overrides: Mapping[str, str] = _EMPTY
    port_overrides: Mapping[str, Mapping[int, int]] = _EMPTY
    develop_sources: Mapping[str, str] = _EMPTY
    develop_target: str = DEFAULT_DEVELOP_TARGET
    virtual_host_pattern: str = DEFAULT_VIRTUAL_HOST_PATTERN

    @classmethod
    def make(cls, environment: str, *,
             tag_override: str | None = None,
             tag_overrides: Mapping[str, str] | None = None,
             port_overrides: Mapping[str, Mapping[int, int]] | None = None,
             develop_sources: Mapping[str, str] | None = None,
             develop_target: str = DEFAULT_DEVELOP_TARGET,
             virtual_host_pattern: str | None = None) -> 'EnvironmentContext':
        return cls(
            environment=environment,
            tag_override=tag_override,
            tag_overrides=MappingProxyType(dict(tag_overrides or {})),
            port_overrides=MappingProxyType({
                service: MappingProxyType({int(internal): int(external) for internal, external in ports.items()})
                for service, ports in (port_overrides or {}).items()
            }),
            develop_sources=MappingProxyType(dict(develop_sources or {})),
            develop_target=develop_target,
            virtual_host_pattern=virtual_host_pattern or DEFAULT_VIRTUAL_HOST_PATTERN,
        )

    @classmethod
    def from_config(cls, environment: str, config) -> 'EnvironmentContext':
        settings = config.settings_for(environment)
        return cls.make(
            environment,
            tag_override=settings.tag,
            tag_overrides=settings.tags,
            port_overrides=settings.ports,
            develop_sources=settings.develop,
            virtual_host_pattern=settings.virtual_host_pattern,
        )
