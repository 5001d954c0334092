import vedro

from contexts.environment_created import environment_launched
from contexts.services_declared import services_declared
from helpers.fake_runtime import AUTO_PORTS_START
from helpers.fake_runtime import FakeRuntime


class Scenario(vedro.Scenario):
    subject = 'get external port of running service'

    async def given_launched_environment(self):
        self.runtime = FakeRuntime()
        self.environment = await environment_launched(services_declared(), self.runtime)

    async def when_user_asks_for_port(self):
        self.port = await self.environment.port('web', 80)

    async def then_it_should_return_assigned_port(self):
        assert self.port == AUTO_PORTS_START + 80
