from navy.core.context import EnvironmentContext
from navy.env_description.env_types import Ports
from navy.env_description.env_types import ServiceDefinitionSet
from navy.env_description.env_types import ServiceSpec
from navy.errors import PortCollisionError


def override_ports(service: ServiceSpec, ctx: EnvironmentContext) -> ServiceSpec:
    overrides = ctx.port_overrides.get(service.name)
    if not overrides:
        return service

    ports = Ports(service.ports)
    for internal, external in sorted(overrides.items()):
        ports[internal] = external
    return service._replace(ports=ports)


def check_port_collisions(defs: ServiceDefinitionSet) -> None:
    claimed: dict[int, str] = {}
    for service in defs.services():
        for internal, external in sorted(service.ports.forced().items()):
            if external in claimed:
                raise PortCollisionError(external, claimed[external], service.name)
            claimed[external] = service.name


def port_override_middleware(defs: ServiceDefinitionSet, ctx: EnvironmentContext) -> ServiceDefinitionSet:
    result = defs.map(lambda service: override_ports(service, ctx))
    check_port_collisions(result)
    return result
