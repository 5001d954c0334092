from navy.core.context import EnvironmentContext
from navy.env_description.env_types import ServiceDefinitionSet
from navy.env_description.env_types import ServiceSpec


def override_tag(service: ServiceSpec, ctx: EnvironmentContext) -> ServiceSpec:
    # develop mode always wins over any tag
    if service.develop:
        return service

    if (explicit_tag := ctx.tag_overrides.get(service.name)) is not None:
        if service.tag == explicit_tag and service.pinned:
            return service
        return service._replace(tag=explicit_tag, pinned=True)

    if service.pinned or ctx.tag_override is None or service.tag == ctx.tag_override:
        return service

    return service._replace(tag=ctx.tag_override)


def tag_override_middleware(defs: ServiceDefinitionSet, ctx: EnvironmentContext) -> ServiceDefinitionSet:
    if ctx.tag_override is None and not ctx.tag_overrides:
        return defs
    return defs.map(lambda service: override_tag(service, ctx))
