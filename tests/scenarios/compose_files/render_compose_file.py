import vedro

from config import Config
from contexts.services_declared import db_service
from contexts.services_declared import services_declared
from contexts.services_declared import web_service
from navy.core.compose_files import render_compose
from navy.helpers.labels import Label


class Scenario(vedro.Scenario):
    subject = 'render service definitions to compose file'

    async def given_definitions(self):
        self.definitions = services_declared(
            web_service(ports={80: 8080}, volumes=('/home/dev/web:/app',)),
            db_service(),
        )

    async def when_definitions_rendered(self):
        self.compose = render_compose(Config.ENV_NAME, self.definitions)

    async def then_it_should_render_services(self):
        assert self.compose == {
            'services': {
                'web': {
                    'image': 'company/web:latest',
                    'labels': {Label.ENVIRONMENT: Config.ENV_NAME, Label.SERVICE: 'web'},
                    'ports': ['8080:80'],
                    'environment': {'LOG_LEVEL': 'info'},
                    'volumes': ['/home/dev/web:/app'],
                },
                'db': {
                    'image': 'postgres:13',
                    'labels': {Label.ENVIRONMENT: Config.ENV_NAME, Label.SERVICE: 'db'},
                    'ports': ['5432'],
                },
            },
        }
