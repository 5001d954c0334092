from navy.core.context import EnvironmentContext
from navy.env_description.env_types import ServiceDefinitionSet
from navy.env_description.env_types import ServiceSpec
from navy.errors import PipelineError
from navy.helpers.labels import Label


def is_developing(service: ServiceSpec, ctx: EnvironmentContext) -> bool:
    return service.develop or service.name in ctx.develop_sources


def develop_service(service: ServiceSpec, ctx: EnvironmentContext) -> ServiceSpec:
    source = ctx.develop_sources.get(service.name)
    if source is None:
        raise PipelineError(f'Service "{service.name}" is in develop mode but has no source location')

    mount = f'{source}:{ctx.develop_target}'
    volumes = service.volumes if mount in service.volumes else service.volumes + (mount,)
    return service._replace(
        develop=True,
        volumes=volumes,
        labels=service.labels | {Label.DEVELOP: source},
    )


def develop_middleware(defs: ServiceDefinitionSet, ctx: EnvironmentContext) -> ServiceDefinitionSet:
    return defs.map(
        lambda service: develop_service(service, ctx) if is_developing(service, ctx) else service
    )
