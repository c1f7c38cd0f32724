from typing import Optional, Tuple

import httpx

from kiki_chaos.models.app import ActionResult
from kiki_chaos.models.config import NarrationConfig
from kiki_chaos.models.custom_errors import NarrationError
from kiki_chaos.models.scenario.factory import ScenarioFactory
from kiki_chaos.utils.logger import get_module_logger

logger = get_module_logger(__name__)

SYSTEM_PROMPT = (
    "You are Kiki AI, an expert chaos engineering trainer. Explain Kubernetes failures "
    "clearly and educationally. Keep responses concise (3-4 sentences) and always end "
    "with a specific, actionable fix."
)
ANALYSIS_UNAVAILABLE = "Analysis unavailable"

EXECUTION_TEMPLATE = """

Chaos execution result: {message}
Technical details: {details}"""


class NarrationClient:
    '''
    Asks a hosted chat-completion API (OpenAI compatible) to explain what a
    chaos action does to the cluster.
    '''

    def __init__(self, config: NarrationConfig, client: Optional[httpx.Client] = None):
        self.config = config
        self._client = client

    def build_messages(self, scenario_id: str, action_result: ActionResult):
        scenario = ScenarioFactory.get(scenario_id)
        user_prompt = scenario.prompt + EXECUTION_TEMPLATE.format(
            message=action_result.message,
            details=action_result.details or "none",
        )
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_prompt},
        ]

    def narrate(self, scenario_id: str, action_result: ActionResult) -> Tuple[str, int]:
        score = ScenarioFactory.points_for(scenario_id)
        messages = self.build_messages(scenario_id, action_result)

        if not self.config.api_key:
            raise NarrationError("GROQ_API_KEY is not configured (not-configured)")

        payload = {
            "model": self.config.model,
            "messages": messages,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        logger.debug("Requesting analysis for %s from %s", scenario_id, self.config.base_url)
        try:
            response = self._http().post(
                "/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self.config.api_key}"},
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as error:
            logger.error("Chat completion API error: %s", error)
            raise NarrationError(
                f"Chat completion API returned {error.response.status_code}: {error.response.text[:200]}"
            )
        except (httpx.HTTPError, ValueError) as error:
            logger.error("Chat completion API error: %s", error)
            raise NarrationError(f"Chat completion request failed: {error}")

        choices = body.get("choices") or [{}]
        text = (choices[0].get("message") or {}).get("content") or ANALYSIS_UNAVAILABLE
        return text.strip() or ANALYSIS_UNAVAILABLE, score

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.config.base_url,
                timeout=httpx.Timeout(30.0, connect=5.0),
            )
        return self._client
