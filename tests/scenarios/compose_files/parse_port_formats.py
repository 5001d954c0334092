import vedro

from navy import AUTO
from navy.core.compose_files import parse_port


class Scenario(vedro.Scenario):
    subject = 'parse compose port "{port}"'

    @vedro.params(80, (80, AUTO))
    @vedro.params('80', (80, AUTO))
    @vedro.params('8080:80', (80, 8080))
    @vedro.params('127.0.0.1:8080:80', (80, 8080))
    @vedro.params('127.0.0.1::80', (80, AUTO))
    @vedro.params('53:53/udp', (53, 53))
    @vedro.params({'target': 80, 'published': 8080}, (80, 8080))
    @vedro.params({'target': 80}, (80, AUTO))
    def __init__(self, port, expected):
        self.port = port
        self.expected = expected

    async def when_port_parsed(self):
        self.parsed = parse_port('web', self.port)

    async def then_it_should_return_internal_and_external_port(self):
        assert self.parsed == self.expected
