from enum import Enum

from pydantic import BaseModel, ConfigDict


class ActionType(str, Enum):
    POD_DELETE = "pod-delete"
    NODE_CORDON = "node-cordon"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Scenario(BaseModel):
    '''
    Catalog entry for one chaos scenario.

    `success_message` is formatted with `target` (pod or node name) and
    `namespace` once the action has run.
    '''
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    difficulty: Difficulty
    category: str
    points: int
    action: ActionType
    prompt: str
    success_message: str

    def __str__(self):
        return f"{self.id}({self.action.value})"

    def describe_success(self, target: str, namespace: str) -> str:
        return self.success_message.format(target=target, namespace=namespace)

    def card(self) -> dict:
        '''Display metadata for the dashboard.'''
        return self.model_dump(
            mode="json",
            include={"id", "name", "description", "difficulty", "category", "points"},
        )
