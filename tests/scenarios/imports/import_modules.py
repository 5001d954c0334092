import importlib

import vedro


class Scenario(vedro.Scenario):
    subject = 'import {module}'

    @vedro.params('navy')
    @vedro.params('navy.core.runtime')
    @vedro.params('navy.core.compose_interface')
    @vedro.params('navy.cli.program')
    @vedro.params('helpers.fake_runtime')
    def __init__(self, module):
        self.module = module

    async def when_module_imported(self):
        self.imported = importlib.import_module(self.module)

    async def then_it_should_be_loaded(self):
        assert self.imported.__name__ == self.module
