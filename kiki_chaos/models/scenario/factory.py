from typing import Any, Dict, List, Optional

from kiki_chaos.models.custom_errors import UnknownScenarioError
from kiki_chaos.models.scenario.base import Scenario

from kiki_chaos.models.scenario.scenario_pod_delete import PodDeleteScenario
from kiki_chaos.models.scenario.scenario_cpu_spike import CPUSpikeScenario
from kiki_chaos.models.scenario.scenario_memory_leak import MemoryLeakScenario
from kiki_chaos.models.scenario.scenario_network_delay import NetworkDelayScenario
from kiki_chaos.models.scenario.scenario_disk_pressure import DiskPressureScenario

DEFAULT_POINTS = 100

scenario_specs = [
    PodDeleteScenario,
    CPUSpikeScenario,
    MemoryLeakScenario,
    NetworkDelayScenario,
    DiskPressureScenario,
]

_CATALOG: Dict[str, Scenario] = {cls().id: cls() for cls in scenario_specs}


class ScenarioFactory:
    @staticmethod
    def list_scenarios() -> List[Scenario]:
        return list(_CATALOG.values())

    @staticmethod
    def find(scenario_id: Any) -> Optional[Scenario]:
        if not isinstance(scenario_id, str) or not scenario_id:
            return None
        return _CATALOG.get(scenario_id)

    @staticmethod
    def get(scenario_id: Optional[str]) -> Scenario:
        scenario = ScenarioFactory.find(scenario_id)
        if scenario is None:
            raise UnknownScenarioError(f"Unknown scenario: {scenario_id!r}")
        return scenario

    @staticmethod
    def points_for(scenario_id: Optional[str]) -> int:
        scenario = ScenarioFactory.find(scenario_id)
        return scenario.points if scenario else DEFAULT_POINTS
