from kiki_chaos.models.app import FailureCause


class KikiChaosError(Exception):
    cause: FailureCause = FailureCause.COMMAND_FAILED

    def __init__(self, message: str, cause: FailureCause = None):
        super().__init__(message)
        if cause is not None:
            self.cause = cause


class UnknownScenarioError(KikiChaosError):
    cause = FailureCause.UNKNOWN_SCENARIO


class ClusterUnavailableError(KikiChaosError):
    """
    Exception raised when kubectl is missing or the cluster cannot be reached.
    """
    cause = FailureCause.UNREACHABLE


class KubectlCommandError(KikiChaosError):
    """
    Exception raised when a kubectl invocation exits non-zero.
    """
    cause = FailureCause.COMMAND_FAILED

    def __init__(self, command: str, returncode: int, output: str = ""):
        message = f"`{command}` failed with exit code {returncode}"
        if output.strip():
            message += f": {output.strip()}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.output = output


class NarrationError(KikiChaosError):
    """
    Exception raised when the chat-completion API cannot produce an analysis.
    """
    cause = FailureCause.NARRATION_FAILED
