from kiki_chaos.models.config import Settings


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk_live")
    monkeypatch.setenv("KESTRA_API_URL", "http://localhost:8080")
    monkeypatch.setenv("KUBECONFIG", "/etc/kube/config")
    monkeypatch.setenv("KIKI_UNCORDON_DELAY", "5")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:3000, http://dash")

    settings = Settings.from_env(context="kind-chaos", namespace=None)

    assert settings.narration.api_key == "gsk_live"
    assert settings.workflow_api_url == "http://localhost:8080"
    assert settings.kube.kubeconfig_file_path == "/etc/kube/config"
    assert settings.kube.context == "kind-chaos"
    assert settings.kube.namespace == "default"
    assert settings.kube.uncordon_delay_seconds == 5.0
    assert settings.allowed_origins == ["http://localhost:3000", "http://dash"]


def test_settings_defaults(monkeypatch):
    for var in ("GROQ_API_KEY", "KESTRA_API_URL", "KUBECONFIG", "KUBE_CONTEXT",
                "KIKI_UNCORDON_DELAY", "KIKI_FORCE_SIMULATION", "ALLOWED_ORIGINS"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings.from_env()

    assert settings.narration.api_key is None
    assert settings.narration.temperature == 0.7
    assert settings.narration.max_tokens == 300
    assert settings.kube.pod_selector == "app=nginx"
    assert settings.kube.uncordon_delay_seconds == 30.0
    assert settings.kube.force_simulation is False
    assert settings.allowed_origins == ["*"]


def test_invalid_uncordon_delay_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("KIKI_UNCORDON_DELAY", "thirty")

    settings = Settings.from_env()

    assert settings.kube.uncordon_delay_seconds == 30.0
