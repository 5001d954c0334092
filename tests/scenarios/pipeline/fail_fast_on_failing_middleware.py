import vedro
from vedro import catched

from config import Config
from contexts.services_declared import services_declared
from navy import EnvironmentContext
from navy import Pipeline
from navy.errors import PipelineError


class Scenario(vedro.Scenario):
    subject = 'stop pipeline on first failing middleware'

    async def given_pipeline_with_failing_step(self):
        self.calls = []

        def failing(defs, ctx):
            self.calls.append('failing')
            raise PipelineError('broken step')

        def never_reached(defs, ctx):
            self.calls.append('never_reached')
            return defs

        self.pipeline = Pipeline(failing, never_reached)

    async def when_pipeline_applied(self):
        with catched(PipelineError) as self.exc_info:
            await self.pipeline.apply(services_declared(), EnvironmentContext.make(Config.ENV_NAME))

    async def then_it_should_raise_pipeline_error(self):
        assert self.exc_info.type is PipelineError

    async def and_later_steps_should_not_run(self):
        assert self.calls == ['failing']
