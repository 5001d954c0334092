from navy.middleware.add_virtual_hosts import add_virtual_hosts_middleware
from navy.middleware.develop import develop_middleware
from navy.middleware.pipeline import Middleware
from navy.middleware.pipeline import Pipeline
from navy.middleware.port_override import port_override_middleware
from navy.middleware.tag_override import tag_override_middleware


def default_pipeline() -> Pipeline:
    return Pipeline(
        develop_middleware,
        tag_override_middleware,
        port_override_middleware,
        add_virtual_hosts_middleware,
    )


__all__ = (
    'Middleware', 'Pipeline', 'default_pipeline',
    'develop_middleware', 'tag_override_middleware', 'port_override_middleware', 'add_virtual_hosts_middleware',
)
