from contexts.services_declared import services_declared
from helpers.fake_runtime import FakeRuntime
from navy import Registry
from navy.core.config import NavyConfig


def registry_created(runtime: FakeRuntime = None, config: NavyConfig = None) -> Registry:
    return Registry(
        runtime if runtime is not None else FakeRuntime(),
        config if config is not None else NavyConfig(),
        definitions_loader=lambda env_name: services_declared(),
    )
