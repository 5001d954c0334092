from navy import AUTO
from navy import Env
from navy import Ports
from navy import ServiceDefinitionSet
from navy import ServiceSpec


def web_service(**fields) -> ServiceSpec:
    return ServiceSpec(
        name='web',
        image='company/web',
        tag='latest',
        ports=Ports({80: AUTO}),
        env=Env({'LOG_LEVEL': 'info'}),
        virtual_host=True,
    )._replace(**fields)


def db_service(**fields) -> ServiceSpec:
    return ServiceSpec(
        name='db',
        image='postgres',
        tag='13',
        pinned=True,
        ports=Ports({5432: AUTO}),
    )._replace(**fields)


def services_declared(*services: ServiceSpec) -> ServiceDefinitionSet:
    if not services:
        services = (web_service(), db_service())
    return ServiceDefinitionSet(*services)
