from enum import Enum
from enum import auto


class JobResult(Enum):
    GOOD = auto()
    BAD = auto()


class OperationError:
    def __init__(self, stdout: str, stderr: str):
        self.stdout = stdout
        self.stderr = stderr

    @property
    def log(self) -> str:
        return f'Stdout:\n{self.stdout}\n\nStderr:\n{self.stderr}'

    def __eq__(self, other):
        return other == JobResult.BAD

    def __repr__(self):
        return f'Command finished unsuccessful:\n{self.log}'
