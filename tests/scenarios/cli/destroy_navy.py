import vedro

from config import Config
from contexts.dispatcher_created import dispatcher_created
from contexts.dispatcher_created import navy_invoked
from contexts.environment_created import environment_launched
from contexts.services_declared import services_declared
from helpers.fake_runtime import FakeRuntime


class Scenario(vedro.Scenario):
    subject = 'destroy navy {description}'

    @vedro.params('with force flag', ['-f'], None, 0, [('destroy', Config.ENV_NAME)])
    @vedro.params('after confirmation', [], 'y\n', 0, [('destroy', Config.ENV_NAME)])
    @vedro.params('declining confirmation', [], 'n\n', 1, [])
    def __init__(self, description, flags, answer, exit_code, calls):
        self.description = description
        self.flags = flags
        self.answer = answer
        self.exit_code = exit_code
        self.calls = calls

    async def given_launched_environment(self):
        self.runtime = FakeRuntime()
        await environment_launched(services_declared(), self.runtime)
        self.runtime.calls = []
        self.dispatcher = dispatcher_created(self.runtime)

    async def when_user_runs_destroy(self):
        self.result = await navy_invoked(self.dispatcher, 'destroy', *self.flags, input=self.answer)

    async def then_it_should_exit_with_expected_code(self):
        assert self.result.exit_code == self.exit_code, self.result.output

    async def then_runtime_should_be_called_accordingly(self):
        assert self.runtime.calls == self.calls
