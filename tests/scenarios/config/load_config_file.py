import vedro

from contexts.files import config_file
from navy.core.config import EnvironmentSettings
from navy.core.config import load_config


class Scenario(vedro.Scenario):
    subject = 'load config file'

    async def given_config_file(self):
        self.path = config_file("""
default_environment: test
environments:
  test:
    tag: canary
    tags: {worker: 1.2.3}
    ports: {web: {80: 8080}}
    develop: {web: /home/dev/web}
    virtual_host_pattern: "{service}.{environment}.localhost"
""")

    async def when_config_loaded(self):
        self.config = load_config(self.path)

    async def then_it_should_read_default_environment(self):
        assert self.config.default_environment == 'test'

    async def then_it_should_read_environment_settings(self):
        assert self.config.settings_for('test') == EnvironmentSettings(
            tag='canary',
            tags={'worker': '1.2.3'},
            ports={'web': {80: 8080}},
            develop={'web': '/home/dev/web'},
            virtual_host_pattern='{service}.{environment}.localhost',
        )

    async def then_unknown_environment_should_get_defaults(self):
        assert self.config.settings_for('dev') == EnvironmentSettings()
