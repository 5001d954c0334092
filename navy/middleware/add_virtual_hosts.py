from navy.core.context import EnvironmentContext
from navy.env_description.env_types import Env
from navy.env_description.env_types import ServiceDefinitionSet
from navy.env_description.env_types import ServiceSpec
from navy.errors import PipelineError
from navy.helpers.labels import Label

VIRTUAL_HOST = 'VIRTUAL_HOST'
VIRTUAL_PORT = 'VIRTUAL_PORT'


def make_virtual_host(service_name: str, ctx: EnvironmentContext) -> str:
    try:
        return ctx.virtual_host_pattern.format(service=service_name, environment=ctx.environment)
    except (KeyError, IndexError) as e:
        raise PipelineError(f'Bad virtual host pattern "{ctx.virtual_host_pattern}": {e}') from None


def add_virtual_host(service: ServiceSpec, ctx: EnvironmentContext) -> ServiceSpec:
    virtual_host = make_virtual_host(service.name, ctx)

    env = Env({VIRTUAL_HOST: virtual_host})
    if service.ports:
        env[VIRTUAL_PORT] = str(min(service.ports))

    return service.with_env(env).with_labels({Label.VIRTUAL_HOST: virtual_host})


def add_virtual_hosts_middleware(defs: ServiceDefinitionSet, ctx: EnvironmentContext) -> ServiceDefinitionSet:
    if not ctx.environment:
        raise PipelineError('Virtual hosts need an environment name')

    return defs.map(
        lambda service: add_virtual_host(service, ctx) if service.virtual_host else service
    )
