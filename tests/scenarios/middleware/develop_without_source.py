import vedro
from vedro import catched

from config import Config
from contexts.services_declared import services_declared
from contexts.services_declared import web_service
from navy import EnvironmentContext
from navy.errors import ErrorKind
from navy.errors import PipelineError
from navy.middleware import develop_middleware


class Scenario(vedro.Scenario):
    subject = 'fail develop mode without source location'

    async def given_definitions_with_develop_flag(self):
        self.definitions = services_declared(web_service(develop=True))

    async def when_middleware_applied(self):
        with catched(PipelineError) as self.exc_info:
            develop_middleware(self.definitions, EnvironmentContext.make(Config.ENV_NAME))

    async def then_it_should_raise_pipeline_error(self):
        assert self.exc_info.type is PipelineError
        assert self.exc_info.value.kind == ErrorKind.PIPELINE
        assert 'web' in self.exc_info.value.message
