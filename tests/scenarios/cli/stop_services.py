import vedro

from config import Config
from contexts.dispatcher_created import dispatcher_created
from contexts.dispatcher_created import navy_invoked
from contexts.environment_created import environment_launched
from contexts.services_declared import services_declared
from helpers.fake_runtime import FakeRuntime


class Scenario(vedro.Scenario):
    subject = 'stop {services} from command line'

    @vedro.params([], None)
    @vedro.params(['web'], ['web'])
    def __init__(self, services, expected):
        self.services = services
        self.expected = expected

    async def given_launched_environment(self):
        self.runtime = FakeRuntime()
        await environment_launched(services_declared(), self.runtime)
        self.dispatcher = dispatcher_created(self.runtime)

    async def when_user_runs_stop(self):
        self.result = await navy_invoked(self.dispatcher, 'stop', *self.services)

    async def then_it_should_stop_services(self):
        assert self.result.exit_code == 0, self.result.output
        assert self.runtime.calls[-1] == ('stop', Config.ENV_NAME, self.expected)
