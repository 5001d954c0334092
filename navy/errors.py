from enum import Enum

from rich.text import Text

from navy.output.styles import Style


class ErrorKind(Enum):
    CONFIGURATION = 'configuration'
    PIPELINE = 'pipeline'
    PORT_COLLISION = 'port_collision'
    UNKNOWN_SERVICE = 'unknown_service'
    SERVICE_NOT_RUNNING = 'service_not_running'
    RESOURCE_BUSY = 'resource_busy'
    RUNTIME = 'runtime'
    AGGREGATE = 'aggregate'


class NavyError(Exception):
    kind: ErrorKind = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __repr__(self):
        return f'{type(self).__name__}({self.kind.value}: {self.message})'

    def pretty(self) -> Text:
        return (
            Text('Error: ', style=Style.bad)
            .append(Text(self.message, style=Style.regular))
        )


class ConfigurationError(NavyError):
    kind = ErrorKind.CONFIGURATION


class PipelineError(NavyError):
    kind = ErrorKind.PIPELINE


class PortCollisionError(PipelineError):
    kind = ErrorKind.PORT_COLLISION

    def __init__(self, port: int, first_service: str, second_service: str):
        super().__init__(
            f'Services "{first_service}" and "{second_service}" both claim external port {port}'
        )
        self.port = port
        self.services = (first_service, second_service)


class UnknownServiceError(NavyError):
    kind = ErrorKind.UNKNOWN_SERVICE

    def __init__(self, services: list[str]):
        super().__init__(f'Unknown services: {", ".join(services)}')
        self.services = list(services)


class ServiceNotRunningError(NavyError):
    kind = ErrorKind.SERVICE_NOT_RUNNING

    def __init__(self, service: str, port: int | None = None):
        message = f'Service "{service}" is not running'
        if port is not None:
            message = f'Service "{service}" has no active mapping for port {port}'
        super().__init__(message)
        self.service = service
        self.port = port


class ResourceBusyError(NavyError):
    kind = ErrorKind.RESOURCE_BUSY

    def __init__(self, services: list[str]):
        super().__init__(f'Services are still running: {", ".join(services)}')
        self.services = list(services)


class RuntimeFailure(NavyError):
    kind = ErrorKind.RUNTIME

    def __init__(self, message: str, log: str = ''):
        super().__init__(message)
        self.log = log

    def pretty(self) -> Text:
        text = super().pretty()
        if self.log:
            text.append(Text(f'\n{self.log}', style=Style.context))
        return text


class AggregateError(NavyError):
    kind = ErrorKind.AGGREGATE

    def __init__(self, operation: str, errors: dict[str, Exception]):
        super().__init__(f'Failed to {operation} services: {", ".join(errors)}')
        self.operation = operation
        self.errors = errors

    def pretty(self) -> Text:
        text = super().pretty()
        for service, error in self.errors.items():
            text.append(Text(f'\n  {service}: ', style=Style.mark)).append(Text(str(error), style=Style.regular))
        return text
