import json
from typing import List, Optional

from kiki_chaos.models.app import ClusterAvailability, FailureCause
from kiki_chaos.models.cluster_components import (
    ClusterEvent,
    ClusterHealthSnapshot,
    HealthDetails,
    PodInfo,
    is_node_ready,
)
from kiki_chaos.models.config import KubeConfig
from kiki_chaos.models.custom_errors import ClusterUnavailableError, KubectlCommandError
from kiki_chaos.utils import run_shell
from kiki_chaos.utils.logger import get_module_logger
from kiki_chaos.utils.rng import rng

logger = get_module_logger(__name__)

VERSION_ARGS = ["version", "--client", "--output=json"]
CLUSTER_INFO_ARGS = ["cluster-info"]
NODE_NAMES_ARGS = ["get", "nodes", "-o", "jsonpath={.items[*].metadata.name}"]
RECENT_EVENT_COUNT = 10


class KubectlRunner:
    '''
    Thin wrapper over the kubectl CLI. Every call carries the configured
    kubeconfig and context explicitly.
    '''

    def __init__(self, config: KubeConfig):
        self.config = config

    def base_command(self) -> List[str]:
        command = [self.config.binary]
        if self.config.kubeconfig_file_path:
            command += ["--kubeconfig", self.config.kubeconfig_file_path]
        if self.config.context:
            command += ["--context", self.config.context]
        return command

    def kubectl(self, args: List[str], do_not_log=False) -> str:
        command = self.base_command() + args
        try:
            stdout, stderr, returncode = run_shell(command, do_not_log=do_not_log)
        except OSError as error:
            raise ClusterUnavailableError(
                f"{self.config.binary} cannot be executed: {error}", FailureCause.NOT_CONFIGURED
            )
        if returncode != 0:
            raise KubectlCommandError(" ".join(command), returncode, stderr or stdout)
        if stderr.strip() and "Warning" not in stderr:
            logger.warning("kubectl stderr: %s", stderr.strip())
        return stdout

    def kubectl_json(self, args: List[str]) -> dict:
        output = self.kubectl(args + ["-o", "json"], do_not_log=True)
        try:
            return json.loads(output)
        except json.JSONDecodeError as error:
            raise KubectlCommandError(" ".join(args), 0, f"invalid JSON output: {error}")

    def check_availability(self) -> ClusterAvailability:
        if self.config.force_simulation:
            logger.debug("Simulation forced by configuration")
            return ClusterAvailability(
                available=False,
                cause=FailureCause.NOT_CONFIGURED,
                detail="Simulation mode forced by configuration",
            )
        try:
            self.kubectl(VERSION_ARGS, do_not_log=True)
            self.kubectl(CLUSTER_INFO_ARGS, do_not_log=True)
        except ClusterUnavailableError as error:
            logger.warning("kubectl is not available: %s", error)
            return ClusterAvailability(available=False, cause=error.cause, detail=str(error))
        except KubectlCommandError as error:
            logger.warning("Kubernetes cluster not accessible: %s", error)
            return ClusterAvailability(
                available=False, cause=FailureCause.UNREACHABLE, detail=str(error)
            )
        return ClusterAvailability(available=True)

    def probe(self) -> bool:
        return self.check_availability().available

    def list_pod_names(self, selector: Optional[str] = None, namespace: Optional[str] = None) -> List[str]:
        args = [
            "get", "pods",
            "-l", selector or self.config.pod_selector,
            "-n", namespace or self.config.namespace,
            "-o", "jsonpath={.items[*].metadata.name}",
        ]
        output = self.kubectl(args)
        return [name for name in output.replace("'", "").strip().split() if name]

    def get_random_pod(self, selector: Optional[str] = None, namespace: Optional[str] = None) -> Optional[str]:
        names = self.list_pod_names(selector, namespace)
        if len(names) == 0:
            return None
        return names[rng.index(len(names))]

    def delete_pod(self, pod_name: str, namespace: Optional[str] = None) -> str:
        namespace = namespace or self.config.namespace
        output = self.kubectl(["delete", "pod", pod_name, "-n", namespace])
        logger.info("Deleted pod %s in namespace %s", pod_name, namespace)
        return output.strip() or f"pod \"{pod_name}\" deleted"

    def first_node(self) -> Optional[str]:
        # items[0] exits non-zero on an empty list, so list them all
        names = self.kubectl(NODE_NAMES_ARGS).replace('"', "").replace("'", "").split()
        return names[0] if names else None

    def cordon_node(self, node_name: str) -> str:
        output = self.kubectl(["cordon", node_name])
        logger.info("Cordoned node %s", node_name)
        return output.strip() or f"node/{node_name} cordoned"

    def uncordon_node(self, node_name: str) -> str:
        output = self.kubectl(["uncordon", node_name])
        logger.info("Node %s uncordoned", node_name)
        return output.strip() or f"node/{node_name} uncordoned"

    def get_cluster_health(self) -> ClusterHealthSnapshot:
        namespace = self.config.namespace

        pods = [
            PodInfo.from_manifest(item)
            for item in self.kubectl_json(["get", "pods", "-n", namespace]).get("items") or []
        ]
        running_pods = len([p for p in pods if p.status == "Running"])
        total_pods = len(pods)

        nodes = self.kubectl_json(["get", "nodes"]).get("items") or []
        ready_nodes = len([n for n in nodes if is_node_ready(n)])

        services = self.kubectl_json(["get", "services", "-n", namespace]).get("items") or []

        return ClusterHealthSnapshot(
            healthy=running_pods == total_pods if total_pods > 0 else True,
            pods=running_pods,
            total_pods=total_pods,
            nodes=ready_nodes,
            total_nodes=len(nodes),
            services=len(services),
            simulated=False,
            details=HealthDetails(pods=pods),
        )

    def get_pod_logs(self, pod_name: str, namespace: Optional[str] = None, lines: int = 50) -> str:
        namespace = namespace or self.config.namespace
        return self.kubectl(["logs", pod_name, "-n", namespace, f"--tail={lines}"], do_not_log=True)

    def get_events(self, namespace: Optional[str] = None) -> List[ClusterEvent]:
        namespace = namespace or self.config.namespace
        data = self.kubectl_json(["get", "events", "-n", namespace, "--sort-by=.lastTimestamp"])
        events = data.get("items") or []
        return [
            ClusterEvent(
                time=e.get("lastTimestamp"),
                type=e.get("type"),
                reason=e.get("reason"),
                message=e.get("message"),
            )
            for e in events[-RECENT_EVENT_COUNT:]
        ]
