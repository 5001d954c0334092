import vedro
from vedro import catched

from contexts.environment_created import environment_created
from contexts.services_declared import services_declared
from helpers.fake_runtime import BrokenRuntime
from navy.errors import ErrorKind
from navy.errors import RuntimeFailure


class Scenario(vedro.Scenario):
    subject = 'list services when docker is unreachable'

    async def given_environment_with_broken_runtime(self):
        self.environment = environment_created(services_declared(), runtime=BrokenRuntime())

    async def when_user_lists_services(self):
        with catched(RuntimeFailure) as self.exc_info:
            await self.environment.ps()

    async def then_it_should_raise_runtime_failure(self):
        assert self.exc_info.type is RuntimeFailure
        assert self.exc_info.value.kind == ErrorKind.RUNTIME
        assert 'Cannot connect to the Docker daemon' in self.exc_info.value.message
        assert isinstance(self.exc_info.value.__cause__, ConnectionError)
