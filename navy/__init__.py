from navy.core.context import EnvironmentContext
from navy.core.environment import Environment
from navy.core.environment import EnvironmentState
from navy.core.registry import Registry
from navy.core.runtime import RunningService
from navy.core.runtime import Runtime
from navy.env_description.env_types import AUTO
from navy.env_description.env_types import Env
from navy.env_description.env_types import Ports
from navy.env_description.env_types import ServiceDefinitionSet
from navy.env_description.env_types import ServiceSpec
from navy.middleware import Middleware
from navy.middleware import Pipeline
from navy.middleware import default_pipeline
from navy.version import get_version

__version__ = get_version()
__all__ = (
    'Environment', 'EnvironmentState', 'EnvironmentContext', 'Registry', 'Runtime', 'RunningService',
    'ServiceSpec', 'ServiceDefinitionSet', 'Env', 'Ports', 'AUTO',
    'Middleware', 'Pipeline', 'default_pipeline',
)
