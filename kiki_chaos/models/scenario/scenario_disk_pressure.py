from kiki_chaos.models.scenario.base import ActionType, Difficulty, Scenario


class DiskPressureScenario(Scenario):
    id: str = "disk-pressure"
    name: str = "Disk Pressure"
    description: str = "Fill disk space to test storage resilience"
    difficulty: Difficulty = Difficulty.ADVANCED
    category: str = "storage"
    points: int = 200
    action: ActionType = ActionType.NODE_CORDON
    prompt: str = """A node runs out of disk space. Analyze:
- How does Kubernetes detect disk pressure?
- What happens to pods on this node?
- How to prevent disk-related failures?
Provide explanation and prevention strategies."""
    success_message: str = (
        "Cordoned node {target} as the kubelet would under DiskPressure. "
        "New pods will not be scheduled there until it is uncordoned."
    )
