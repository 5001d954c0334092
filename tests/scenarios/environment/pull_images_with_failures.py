import vedro
from vedro import catched

from contexts.environment_created import environment_created
from contexts.services_declared import services_declared
from helpers.fake_runtime import FakeRuntime
from navy import ServiceSpec
from navy.errors import AggregateError
from navy.errors import RuntimeFailure


class Scenario(vedro.Scenario):
    subject = 'pull images when some of them fail'

    async def given_environment_with_missing_images(self):
        self.runtime = FakeRuntime()
        self.runtime.pull_failures = {'web', 'worker'}
        self.environment = environment_created(
            services_declared(*services_declared().services(), ServiceSpec('worker', 'company/worker')),
            runtime=self.runtime,
        )

    async def when_user_pulls_images(self):
        with catched(AggregateError) as self.exc_info:
            await self.environment.pull()

    async def then_it_should_collect_every_failure(self):
        assert self.exc_info.type is AggregateError
        assert self.exc_info.value.operation == 'pull'
        assert sorted(self.exc_info.value.errors) == ['web', 'worker']
        assert all(isinstance(e, RuntimeFailure) for e in self.exc_info.value.errors.values())

    async def then_other_images_should_be_pulled(self):
        assert self.runtime.pulled == ['db']
