import os
from typing import List, Optional

from pydantic import BaseModel, Field

from kiki_chaos.utils.fs import env_float, env_is_truthy


class KubeConfig(BaseModel):
    '''Cluster endpoint and credentials handed to every kubectl call.'''
    binary: str = "kubectl"
    kubeconfig_file_path: Optional[str] = None
    context: Optional[str] = None
    namespace: str = "default"
    pod_selector: str = "app=nginx"
    uncordon_delay_seconds: float = Field(30.0, ge=0)
    force_simulation: bool = False


class NarrationConfig(BaseModel):
    api_key: Optional[str] = None
    base_url: str = "https://api.groq.com/openai/v1"
    model: str = "llama-3.3-70b-versatile"
    temperature: float = 0.7
    max_tokens: int = 300


class Settings(BaseModel):
    kube: KubeConfig = KubeConfig()
    narration: NarrationConfig = NarrationConfig()
    workflow_api_url: str = "http://kestra:8080"
    allowed_origins: List[str] = ["*"]

    @classmethod
    def from_env(cls, **kube_overrides) -> "Settings":
        kube = KubeConfig(
            binary=os.getenv("KUBECTL_BINARY", "kubectl"),
            kubeconfig_file_path=os.getenv("KUBECONFIG") or None,
            context=os.getenv("KUBE_CONTEXT") or None,
            namespace=os.getenv("KIKI_NAMESPACE", "default"),
            pod_selector=os.getenv("KIKI_POD_SELECTOR", "app=nginx"),
            uncordon_delay_seconds=env_float("KIKI_UNCORDON_DELAY", 30.0),
            force_simulation=env_is_truthy("KIKI_FORCE_SIMULATION"),
        )
        overrides = {k: v for k, v in kube_overrides.items() if v is not None}
        if overrides:
            kube = kube.model_copy(update=overrides)

        narration = NarrationConfig(
            api_key=os.getenv("GROQ_API_KEY") or None,
            base_url=os.getenv("GROQ_BASE_URL", NarrationConfig().base_url),
            model=os.getenv("GROQ_MODEL", NarrationConfig().model),
        )
        origins = os.getenv("ALLOWED_ORIGINS", "*")
        return cls(
            kube=kube,
            narration=narration,
            workflow_api_url=os.getenv("KESTRA_API_URL") or "http://kestra:8080",
            allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )
