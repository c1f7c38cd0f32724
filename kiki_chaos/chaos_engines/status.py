from typing import List, Tuple

from kiki_chaos.chaos_engines.kubectl_runner import KubectlRunner
from kiki_chaos.models.cluster_components import ClusterEvent, ClusterHealthSnapshot
from kiki_chaos.utils.logger import get_module_logger

logger = get_module_logger(__name__)


class ClusterStatusService:
    '''Cluster health for the dashboard poll. Degrades to placeholder data, never raises.'''

    def __init__(self, runner: KubectlRunner):
        self.runner = runner

    def status(self) -> ClusterHealthSnapshot:
        try:
            availability = self.runner.check_availability()
            if not availability.available:
                return ClusterHealthSnapshot.placeholder("Kubernetes cluster not accessible")
            return self.runner.get_cluster_health()
        except Exception as error:
            logger.error("Cluster status error: %s", error)
            return ClusterHealthSnapshot.placeholder(str(error))

    def events(self) -> Tuple[List[ClusterEvent], bool]:
        '''Recent namespace events and whether the list is simulated (empty).'''
        try:
            if not self.runner.probe():
                return [], True
            return self.runner.get_events(), False
        except Exception as error:
            logger.error("Cluster events error: %s", error)
            return [], True
