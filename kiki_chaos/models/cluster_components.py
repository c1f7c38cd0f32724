from typing import List, Optional

from pydantic import BaseModel, Field

from kiki_chaos.models.app import CamelModel, utc_timestamp


class PodInfo(BaseModel):
    name: str
    status: str = "Unknown"
    restarts: int = 0
    ready: bool = False
    age: Optional[str] = None

    @classmethod
    def from_manifest(cls, item: dict) -> "PodInfo":
        metadata = item.get("metadata", {})
        status = item.get("status", {})
        container_statuses = status.get("containerStatuses") or [{}]
        conditions = status.get("conditions") or []
        ready = any(
            c.get("type") == "Ready" and c.get("status") == "True" for c in conditions
        )
        return cls(
            name=metadata.get("name", ""),
            status=status.get("phase", "Unknown"),
            restarts=container_statuses[0].get("restartCount", 0) or 0,
            ready=ready,
            age=metadata.get("creationTimestamp"),
        )


class HealthDetails(BaseModel):
    pods: List[PodInfo] = []


class ClusterEvent(BaseModel):
    time: Optional[str] = None
    type: Optional[str] = None
    reason: Optional[str] = None
    message: Optional[str] = None


class ClusterHealthSnapshot(CamelModel):
    healthy: bool
    pods: int
    total_pods: int
    nodes: int
    total_nodes: int
    services: int
    simulated: bool = False
    timestamp: str = Field(default_factory=utc_timestamp)
    error: Optional[str] = None
    details: Optional[HealthDetails] = None

    @classmethod
    def placeholder(cls, error: Optional[str] = None) -> "ClusterHealthSnapshot":
        return cls(
            healthy=True,
            pods=3,
            total_pods=3,
            nodes=1,
            total_nodes=1,
            services=2,
            simulated=True,
            error=error,
        )


def is_node_ready(item: dict) -> bool:
    conditions = item.get("status", {}).get("conditions") or []
    return any(c.get("type") == "Ready" and c.get("status") == "True" for c in conditions)
