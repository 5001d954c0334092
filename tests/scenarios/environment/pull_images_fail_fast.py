import vedro
from vedro import catched

from contexts.environment_created import environment_created
from contexts.services_declared import services_declared
from helpers.fake_runtime import FakeRuntime
from navy.errors import AggregateError


class Scenario(vedro.Scenario):
    subject = 'stop pulling images on first failure'

    async def given_environment_with_slow_and_missing_images(self):
        self.runtime = FakeRuntime()
        self.runtime.pull_failures = {'web'}
        self.runtime.pull_delays = {'db': 10}
        self.environment = environment_created(services_declared(), runtime=self.runtime)

    async def when_user_pulls_images_fail_fast(self):
        with catched(AggregateError) as self.exc_info:
            await self.environment.pull(fail_fast=True)

    async def then_it_should_report_failed_image(self):
        assert self.exc_info.type is AggregateError
        assert list(self.exc_info.value.errors) == ['web']

    async def then_it_should_cancel_other_pulls(self):
        assert self.runtime.pulls_cancelled == ['db']
        assert self.runtime.pulled == []
