import json
import time

import click
import uvicorn

from kiki_chaos.api.server import Components, create_app
from kiki_chaos.models.app import AppContext
from kiki_chaos.models.config import Settings
from kiki_chaos.models.custom_errors import KikiChaosError, NarrationError
from kiki_chaos.models.scenario.factory import ScenarioFactory
from kiki_chaos.utils.logger import (
    get_module_logger,
    set_global_log_level,
    verbosity_to_level,
)


def cluster_options(func):
    func = click.option('--namespace', '-n', help='Namespace to run chaos in.', default=None)(func)
    func = click.option('--context', help='kubectl context to use.', default=None)(func)
    func = click.option('--kubeconfig', '-k', help='Path to cluster kubeconfig file.', default=None)(func)
    func = click.option('-v', '--verbose', count=True, help='Increase verbosity of output.')(func)
    return func


def build_settings(ctx, verbose, kubeconfig, context, namespace) -> Settings:
    log_level = verbosity_to_level(verbose)
    ctx.obj = AppContext(verbose=log_level)

    # Set global log level so all modules use the correct verbosity
    set_global_log_level(log_level)

    return Settings.from_env(
        kubeconfig_file_path=kubeconfig,
        context=context,
        namespace=namespace,
    )


def echo_json(data):
    click.echo(json.dumps(data, indent=2, default=str))


@click.group(context_settings={"show_default": True})
def main():
    pass


@main.command(help='Serve the dashboard API')
@click.option('--host', default='0.0.0.0', help='Interface to bind.')
@click.option('--port', default=8000, type=int, help='Port to listen on.')
@cluster_options
@click.pass_context
def serve(ctx, host: str, port: int, verbose: int = 0, kubeconfig: str = None,
          context: str = None, namespace: str = None):
    settings = build_settings(ctx, verbose, kubeconfig, context, namespace)
    logger = get_module_logger(__name__)
    logger.info("Serving Kiki Chaos on %s:%d (namespace %s)", host, port, settings.kube.namespace)
    uvicorn.run(create_app(settings), host=host, port=port, log_level="info")


@main.command(help='Run one chaos scenario and print the analysis')
@click.argument('scenario_id', type=click.Choice([s.id for s in ScenarioFactory.list_scenarios()]))
@click.option('--no-narration', is_flag=True, help='Skip the AI analysis.')
@cluster_options
@click.pass_context
def run(ctx, scenario_id: str, no_narration: bool = False, verbose: int = 0,
        kubeconfig: str = None, context: str = None, namespace: str = None):
    settings = build_settings(ctx, verbose, kubeconfig, context, namespace)
    logger = get_module_logger(__name__)
    components = Components(settings)

    result = components.dispatcher.execute(scenario_id)
    output = {
        "success": result.success,
        "executionResult": result.message,
        "executionDetails": result.details,
        "realChaos": not result.simulated,
        "scoreChange": ScenarioFactory.points_for(scenario_id),
    }
    if result.cause is not None:
        output["cause"] = result.cause.value

    if not no_narration:
        try:
            output["analysis"], _ = components.narrator.narrate(scenario_id, result)
        except NarrationError as err:
            logger.error("Unable to fetch analysis: %s", err)

    echo_json(output)

    pending = components.scheduler.pending()
    if pending:
        # The CLI process would exit before the timer fires
        logger.info("Waiting %.0fs to uncordon %s", settings.kube.uncordon_delay_seconds, ", ".join(pending))
        try:
            time.sleep(settings.kube.uncordon_delay_seconds)
        finally:
            components.shutdown()
    else:
        components.narrator.close()

    if not result.success:
        ctx.exit(1)


@main.command(help='Print cluster health')
@cluster_options
@click.pass_context
def status(ctx, verbose: int = 0, kubeconfig: str = None, context: str = None, namespace: str = None):
    settings = build_settings(ctx, verbose, kubeconfig, context, namespace)
    components = Components(settings)
    snapshot = components.status.status()
    echo_json(snapshot.model_dump(mode='json', by_alias=True, exclude_none=True))


@main.command(help='Print recent events in the namespace')
@cluster_options
@click.pass_context
def events(ctx, verbose: int = 0, kubeconfig: str = None, context: str = None, namespace: str = None):
    settings = build_settings(ctx, verbose, kubeconfig, context, namespace)
    components = Components(settings)
    items, simulated = components.status.events()
    echo_json({"events": [e.model_dump() for e in items], "simulated": simulated})


@main.command(help='Print the last lines of a pod log')
@click.argument('pod_name')
@click.option('--lines', '-l', default=50, type=int, help='Number of lines to print.')
@cluster_options
@click.pass_context
def logs(ctx, pod_name: str, lines: int = 50, verbose: int = 0, kubeconfig: str = None,
         context: str = None, namespace: str = None):
    settings = build_settings(ctx, verbose, kubeconfig, context, namespace)
    logger = get_module_logger(__name__)
    components = Components(settings)
    try:
        click.echo(components.runner.get_pod_logs(pod_name, lines=lines), nl=False)
    except KikiChaosError as err:
        logger.error("Failed to get logs: %s", err)
        ctx.exit(1)


@main.command(help='List available chaos scenarios')
def scenarios():
    echo_json([s.card() for s in ScenarioFactory.list_scenarios()])
