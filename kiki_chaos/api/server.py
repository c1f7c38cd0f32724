from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kiki_chaos.api import routes
from kiki_chaos.chaos_engines.dispatcher import ActionDispatcher
from kiki_chaos.chaos_engines.kubectl_runner import KubectlRunner
from kiki_chaos.chaos_engines.status import ClusterStatusService
from kiki_chaos.chaos_engines.uncordon_scheduler import UncordonScheduler
from kiki_chaos.models.config import Settings
from kiki_chaos.narration.groq_client import NarrationClient
from kiki_chaos.utils.logger import get_module_logger

logger = get_module_logger(__name__)


class Components:
    '''Everything a request handler needs, built once per app.'''

    def __init__(
        self,
        settings: Settings,
        runner: Optional[KubectlRunner] = None,
        scheduler: Optional[UncordonScheduler] = None,
        narrator: Optional[NarrationClient] = None,
    ):
        self.settings = settings
        self.runner = runner or KubectlRunner(settings.kube)
        self.scheduler = scheduler or UncordonScheduler(
            self.runner.uncordon_node,
            delay_seconds=settings.kube.uncordon_delay_seconds,
        )
        self.dispatcher = ActionDispatcher(self.runner, self.scheduler)
        self.status = ClusterStatusService(self.runner)
        self.narrator = narrator or NarrationClient(settings.narration)

    def shutdown(self):
        flushed = self.scheduler.flush()
        if flushed:
            logger.info("Uncordoned %s on shutdown", ", ".join(flushed))
        self.narrator.close()


def create_app(settings: Optional[Settings] = None, components: Optional[Components] = None) -> FastAPI:
    if components is None:
        components = Components(settings or Settings.from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        components.shutdown()

    app = FastAPI(
        title="Kiki Chaos",
        version="0.1.0",
        description="Educational chaos engineering dashboard API for Kubernetes.",
        lifespan=lifespan,
    )
    app.state.components = components
    app.add_middleware(
        CORSMiddleware,
        allow_origins=components.settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(routes.router)
    return app
