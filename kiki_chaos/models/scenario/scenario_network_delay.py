from kiki_chaos.models.scenario.base import ActionType, Difficulty, Scenario


class NetworkDelayScenario(Scenario):
    id: str = "network-delay"
    name: str = "Network Latency"
    description: str = "Add network delay to test timeout handling"
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    category: str = "network"
    points: int = 150
    action: ActionType = ActionType.POD_DELETE
    prompt: str = """Network latency increases to 500ms between services. Analyze:
- How do timeouts affect the application?
- What happens to user requests?
- What patterns handle network issues?
Explain and suggest resilience patterns like circuit breakers."""
    success_message: str = (
        "Dropped pod {target} in namespace {namespace} from the service "
        "endpoints, cutting in-flight connections."
    )
