from kiki_chaos.chaos_engines.kubectl_runner import KubectlRunner
from kiki_chaos.chaos_engines.uncordon_scheduler import UncordonScheduler
from kiki_chaos.models.app import ActionResult, FailureCause
from kiki_chaos.models.custom_errors import KikiChaosError
from kiki_chaos.models.scenario.base import ActionType, Scenario
from kiki_chaos.models.scenario.factory import ScenarioFactory
from kiki_chaos.utils.logger import get_module_logger

logger = get_module_logger(__name__)

SIMULATED_MESSAGE = (
    "Simulated mode: Kubernetes cluster not accessible, no chaos was injected. "
    "Start a local cluster (kind, minikube) and check `kubectl cluster-info`."
)
NO_POD_MESSAGE = (
    "No pods found with selector {selector} in namespace {namespace}. "
    "Deploy one first: kubectl create deployment nginx --image=nginx --replicas=3"
)
NO_NODE_MESSAGE = "No nodes found in the cluster, nothing to cordon."


class ActionDispatcher:
    '''Maps a scenario id to the one kubectl action it performs.'''

    def __init__(self, runner: KubectlRunner, scheduler: UncordonScheduler):
        self.runner = runner
        self.scheduler = scheduler

    def execute(self, scenario_id: str) -> ActionResult:
        scenario = ScenarioFactory.find(scenario_id)
        if scenario is None:
            return ActionResult.failed(
                FailureCause.UNKNOWN_SCENARIO, f"Unknown scenario: {scenario_id!r}"
            )

        try:
            availability = self.runner.check_availability()
            if not availability.available:
                logger.warning("Running %s in simulated mode (%s)", scenario.id, availability.cause.value)
                return ActionResult.failed(availability.cause, SIMULATED_MESSAGE, availability.detail)

            logger.info("Executing chaos scenario %s", scenario)
            if scenario.action == ActionType.NODE_CORDON:
                return self._cordon_first_node(scenario)
            return self._delete_random_pod(scenario)
        except KikiChaosError as error:
            logger.error("Chaos execution failed for %s: %s", scenario.id, error)
            return ActionResult.failed(error.cause, f"Failed to run {scenario.name}", str(error))
        except Exception as error:
            logger.error("Chaos execution failed for %s: %s", scenario.id, error)
            return ActionResult.failed(
                FailureCause.COMMAND_FAILED, f"Failed to run {scenario.name}", str(error)
            )

    def _delete_random_pod(self, scenario: Scenario) -> ActionResult:
        namespace = self.runner.config.namespace
        selector = self.runner.config.pod_selector
        pod = self.runner.get_random_pod(selector, namespace)
        if pod is None:
            return ActionResult.failed(
                FailureCause.NOT_FOUND,
                NO_POD_MESSAGE.format(selector=selector, namespace=namespace),
            )
        output = self.runner.delete_pod(pod, namespace)
        return ActionResult(
            success=True,
            message=scenario.describe_success(pod, namespace),
            details=output,
        )

    def _cordon_first_node(self, scenario: Scenario) -> ActionResult:
        node = self.runner.first_node()
        if node is None:
            return ActionResult.failed(FailureCause.NOT_FOUND, NO_NODE_MESSAGE)
        output = self.runner.cordon_node(node)
        self.scheduler.schedule(node)
        return ActionResult(
            success=True,
            message=scenario.describe_success(node, self.runner.config.namespace),
            details=f"{output}. Will be uncordoned in {self.scheduler.delay_seconds:g} seconds.",
        )
