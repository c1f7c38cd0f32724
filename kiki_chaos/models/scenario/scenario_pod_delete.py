from kiki_chaos.models.scenario.base import ActionType, Difficulty, Scenario


class PodDeleteScenario(Scenario):
    id: str = "pod-delete"
    name: str = "Pod Deletion"
    description: str = "Randomly delete a pod to test replica resilience"
    difficulty: Difficulty = Difficulty.BEGINNER
    category: str = "pod"
    points: int = 100
    action: ActionType = ActionType.POD_DELETE
    prompt: str = """A Kubernetes pod was suddenly deleted. Analyze what happens in this scenario:
- What happens to traffic during pod deletion?
- How does replica count affect resilience?
- What configuration prevents downtime?
Provide a brief, educational explanation (3-4 sentences) and suggest a fix."""
    success_message: str = (
        "Deleted pod {target} in namespace {namespace}. "
        "The ReplicaSet should schedule a replacement."
    )
