from kiki_chaos.models.scenario.base import ActionType, Difficulty, Scenario


class CPUSpikeScenario(Scenario):
    id: str = "cpu-spike"
    name: str = "CPU Spike"
    description: str = "Simulate high CPU usage to test resource limits"
    difficulty: Difficulty = Difficulty.BEGINNER
    category: str = "resource"
    points: int = 100
    action: ActionType = ActionType.POD_DELETE
    prompt: str = """A pod experiences a sudden CPU spike to 90%. Analyze:
- What happens without resource limits?
- How does this affect other pods on the node?
- What Kubernetes features prevent this issue?
Explain clearly and suggest resource limit configuration."""
    success_message: str = (
        "Killed CPU-starved pod {target} in namespace {namespace}, "
        "as a throttled container failing its probes would be."
    )
