import vedro

from config import Config
from contexts.files import config_file
from navy.core.config import load_config
from navy.core.config import save_default_environment


class Scenario(vedro.Scenario):
    subject = 'save default environment keeping other settings'

    async def given_config_file(self):
        self.path = config_file('environments:\n  dev:\n    tag: canary\n')

    async def when_default_environment_saved(self):
        save_default_environment(self.path, Config.OTHER_ENV_NAME)

    async def then_it_should_persist_default_environment(self):
        assert load_config(self.path).default_environment == Config.OTHER_ENV_NAME

    async def then_it_should_keep_environment_settings(self):
        assert load_config(self.path).settings_for('dev').tag == 'canary'
