import vedro

from config import Config
from contexts.compose_interface_created import compose_interface_created
from contexts.files import navy_home
from contexts.services_declared import db_service
from contexts.services_declared import services_declared
from contexts.services_declared import web_service
from navy.core.compose_files import read_dc_file
from navy.helpers.labels import Label


class Scenario(vedro.Scenario):
    subject = 'launch renders compose file of environment'

    async def given_compose_interface(self):
        self.home = navy_home()
        self.runtime = compose_interface_created(self.home)

    async def given_environment_launched_with_db(self):
        await self.runtime.create_and_start(Config.ENV_NAME, services_declared(db_service()))

    async def when_web_launched(self):
        await self.runtime.create_and_start(Config.ENV_NAME, services_declared(web_service()))

    async def then_it_should_write_file_into_environment_directory(self):
        self.compose_file = self.home / 'envs' / Config.ENV_NAME / 'docker-compose.yml'
        assert self.runtime.compose_file(Config.ENV_NAME) == self.compose_file
        assert self.compose_file.exists()

    async def then_it_should_keep_previously_launched_services(self):
        services = read_dc_file(self.compose_file)['services']
        assert list(services) == ['db', 'web']
        assert services['web']['labels'] == {Label.ENVIRONMENT: Config.ENV_NAME, Label.SERVICE: 'web'}
