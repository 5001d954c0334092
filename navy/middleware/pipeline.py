"""
Middleware pipeline over service definitions.

A middleware is either a callable `(defs, ctx) -> defs` or an object with
`apply(defs, ctx) -> defs`. Both may be coroutines. Steps run strictly one
after another: later steps (port collision checks for example) must see the
complete output of the previous ones.
"""
import inspect
from typing import Awaitable
from typing import Callable
from typing import Protocol
from typing import Union
from typing import runtime_checkable

from navy.core.context import EnvironmentContext
from navy.env_description.env_types import ServiceDefinitionSet

MiddlewareResult = Union[ServiceDefinitionSet, Awaitable[ServiceDefinitionSet]]


@runtime_checkable
class Middleware(Protocol):
    def apply(self, defs: ServiceDefinitionSet, ctx: EnvironmentContext) -> MiddlewareResult:
        ...


MiddlewareStep = Union[Middleware, Callable[[ServiceDefinitionSet, EnvironmentContext], MiddlewareResult]]


def step_name(step: MiddlewareStep) -> str:
    return getattr(step, 'name', None) or getattr(step, '__name__', None) or type(step).__name__


class Pipeline:
    def __init__(self, *steps: MiddlewareStep):
        for step in steps:
            assert isinstance(step, Middleware) or callable(step), f'{step!r} is not a middleware'
        self._steps: tuple[MiddlewareStep, ...] = steps

    def __repr__(self):
        return f'Pipeline({" -> ".join(self.names())})'

    def __len__(self):
        return len(self._steps)

    def names(self) -> list[str]:
        return [step_name(step) for step in self._steps]

    def with_steps(self, *steps: MiddlewareStep) -> 'Pipeline':
        return Pipeline(*self._steps, *steps)

    async def apply(self, defs: ServiceDefinitionSet, ctx: EnvironmentContext) -> ServiceDefinitionSet:
        result = defs
        for step in self._steps:
            if isinstance(step, Middleware):
                result = step.apply(result, ctx)
            else:
                result = step(result, ctx)
            if inspect.isawaitable(result):
                result = await result
            assert isinstance(result, ServiceDefinitionSet), \
                f'Middleware {step_name(step)} returned {type(result).__name__}'
        return result
