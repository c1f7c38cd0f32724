from kiki_chaos.models.scenario.base import ActionType, Difficulty, Scenario


class MemoryLeakScenario(Scenario):
    id: str = "memory-leak"
    name: str = "Memory Leak"
    description: str = "Gradually consume memory to test OOM handling"
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    category: str = "resource"
    points: int = 150
    action: ActionType = ActionType.POD_DELETE
    prompt: str = """A pod has a memory leak gradually consuming RAM. Analyze:
- What happens when it reaches node memory limits?
- How does Kubernetes handle OOM (Out of Memory)?
- What prevents cascading failures?
Provide insights and remediation steps."""
    success_message: str = (
        "Terminated pod {target} in namespace {namespace} "
        "the way the kernel OOM killer would."
    )
