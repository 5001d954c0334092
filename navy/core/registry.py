import re
from typing import Callable

from navy.core.config import NavyConfig
from navy.core.context import EnvironmentContext
from navy.core.environment import Environment
from navy.core.environment import runtime_errors
from navy.core.runtime import Runtime
from navy.env_description.env_types import ServiceDefinitionSet
from navy.errors import ConfigurationError
from navy.middleware import Pipeline

ENV_NAME_PATTERN = re.compile(r'^[a-z0-9][a-z0-9_-]*$')

DefinitionsLoader = Callable[[str], ServiceDefinitionSet]


def validate_environment_name(name: str | None) -> str:
    if not name:
        raise ConfigurationError('No environment name given and no default environment configured')
    if not ENV_NAME_PATTERN.match(name):
        raise ConfigurationError(
            f'Bad environment name "{name}": use lowercase letters, digits, "_" and "-", starting with a letter or digit'
        )
    return name


class Registry:
    def __init__(self,
                 runtime: Runtime,
                 config: NavyConfig,
                 definitions_loader: DefinitionsLoader,
                 pipeline: Pipeline | None = None):
        self._runtime = runtime
        self._config = config
        self._definitions_loader = definitions_loader
        self._pipeline = pipeline
        self._environments: dict[str, Environment] = {}

    @property
    def config(self) -> NavyConfig:
        return self._config

    def get(self, name: str | None = None) -> Environment:
        if name is None:
            name = self._config.default_environment
        name = validate_environment_name(name)

        if name not in self._environments:
            self._environments[name] = Environment(
                name,
                definitions=self._definitions_loader(name),
                runtime=self._runtime,
                pipeline=self._pipeline,
                context=EnvironmentContext.from_config(name, self._config),
            )
        return self._environments[name]

    async def list(self) -> list[Environment]:
        with runtime_errors('list environments'):
            names = await self._runtime.list_environment_names()
        return [self.get(name) for name in sorted(set(names))]
