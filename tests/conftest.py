"""
Shared fixtures: a scripted kubectl, a manual timer and a mocked
chat-completion API. No test talks to a real cluster or network.
"""

import json

import httpx
import pytest

from kiki_chaos.api.server import Components
from kiki_chaos.chaos_engines import kubectl_runner
from kiki_chaos.chaos_engines.kubectl_runner import KubectlRunner
from kiki_chaos.chaos_engines.uncordon_scheduler import UncordonScheduler
from kiki_chaos.models.config import KubeConfig, NarrationConfig, Settings
from kiki_chaos.narration.groq_client import NarrationClient


def _pod(name, phase="Running", ready=True, restarts=0):
    return {
        "metadata": {"name": name, "creationTimestamp": "2026-10-17T00:00:00Z"},
        "status": {
            "phase": phase,
            "conditions": [{"type": "Ready", "status": "True" if ready else "False"}],
            "containerStatuses": [{"restartCount": restarts}],
        },
    }


def _node(name, ready=True):
    return {
        "metadata": {"name": name},
        "status": {"conditions": [{"type": "Ready", "status": "True" if ready else "False"}]},
    }


class FakeKubectl:
    """Stands in for `run_shell`, answering kubectl commands from in-memory state."""

    def __init__(self):
        self.pods = {"nginx-a": "Running", "nginx-b": "Running", "nginx-c": "Running"}
        self.pod_labels = {"nginx-a": "app=nginx", "nginx-b": "app=nginx", "nginx-c": "app=nginx"}
        self.nodes = ["node-1", "node-2"]
        self.services = 2
        self.events = []
        self.cordoned = set()
        self.reachable = True
        self.installed = True
        self.fail_on = None
        self.calls = []

    def __call__(self, command, do_not_log=False):
        if not self.installed:
            raise FileNotFoundError(2, "No such file or directory", command[0])
        args = list(command[1:])
        while args and args[0] in ("--kubeconfig", "--context"):
            args = args[2:]
        self.calls.append(args)
        if self.fail_on and args[0] == self.fail_on:
            return "", "Error from server (Forbidden): not allowed", 1
        return self.handle(args)

    def handle(self, args):
        verb = args[0]
        if verb == "version":
            return json.dumps({"clientVersion": {"gitVersion": "v1.31.0"}}), "", 0
        if verb == "cluster-info":
            if not self.reachable:
                return "", "The connection to the server localhost:8080 was refused", 1
            return "Kubernetes control plane is running", "", 0
        if verb == "get" and args[1] == "pods" and "-l" in args:
            selector = args[args.index("-l") + 1]
            names = [n for n in self.pods if self.pod_labels.get(n) == selector]
            return " ".join(names), "", 0
        if verb == "get" and args[1] == "pods":
            items = [_pod(n, phase) for n, phase in self.pods.items()]
            return json.dumps({"items": items}), "", 0
        if verb == "get" and args[1] == "nodes" and args[-1] == "jsonpath={.items[0].metadata.name}":
            if not self.nodes:
                return "", "error: error executing jsonpath: array index out of bounds: index 0, length 0", 1
            return self.nodes[0], "", 0
        if verb == "get" and args[1] == "nodes" and args[-1].startswith("jsonpath"):
            return " ".join(self.nodes), "", 0
        if verb == "get" and args[1] == "nodes":
            items = [_node(n, ready=n not in self.cordoned) for n in self.nodes]
            return json.dumps({"items": items}), "", 0
        if verb == "get" and args[1] == "services":
            return json.dumps({"items": [{}] * self.services}), "", 0
        if verb == "get" and args[1] == "events":
            return json.dumps({"items": self.events}), "", 0
        if verb == "delete":
            name = args[2]
            if name not in self.pods:
                return "", f'Error from server (NotFound): pods "{name}" not found', 1
            del self.pods[name]
            return f'pod "{name}" deleted\n', "", 0
        if verb == "cordon":
            self.cordoned.add(args[1])
            return f"node/{args[1]} cordoned\n", "", 0
        if verb == "uncordon":
            self.cordoned.discard(args[1])
            return f"node/{args[1]} uncordoned\n", "", 0
        if verb == "logs":
            return "log line 1\nlog line 2\n", "", 0
        return "", f"unknown command {args}", 1

    def verbs(self):
        return [c[0] for c in self.calls]

    def mutations(self):
        return [c for c in self.calls if c[0] in ("delete", "cordon", "uncordon")]


class FakeTimer:
    """Manually fired replacement for threading.Timer."""

    created = []

    def __init__(self, interval, function, args=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function(*self.args)


class FakeCompletions:
    """Records chat-completion requests and replies with a canned answer."""

    def __init__(self, content="Pods restart because the ReplicaSet reconciles. Fix: run 3 replicas."):
        self.content = content
        self.status_code = 200
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"message": "rate limited"}})
        return httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": self.content}}]}
        )

    def last_payload(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_kubectl(monkeypatch):
    fake = FakeKubectl()
    monkeypatch.setattr(kubectl_runner, "run_shell", fake)
    return fake


@pytest.fixture
def kube_config():
    return KubeConfig()


@pytest.fixture
def runner(fake_kubectl, kube_config):
    return KubectlRunner(kube_config)


@pytest.fixture
def fake_timer():
    FakeTimer.created = []
    return FakeTimer


@pytest.fixture
def scheduler(runner, fake_timer):
    return UncordonScheduler(runner.uncordon_node, delay_seconds=30.0, timer_factory=fake_timer)


@pytest.fixture
def completions():
    return FakeCompletions()


@pytest.fixture
def narration_config():
    return NarrationConfig(api_key="gsk_test")


@pytest.fixture
def narrator(narration_config, completions):
    client = httpx.Client(
        transport=httpx.MockTransport(completions), base_url=narration_config.base_url
    )
    return NarrationClient(narration_config, client=client)


@pytest.fixture
def components(kube_config, narration_config, runner, scheduler, narrator):
    settings = Settings(kube=kube_config, narration=narration_config)
    return Components(settings, runner=runner, scheduler=scheduler, narrator=narrator)
