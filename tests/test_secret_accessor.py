"""
Tests for secret lookup with environment fallback.
"""

from counsel_ai.protocols import SecretStore
from counsel_ai.secret_accessor import SecretAccessor


class DictSecretStore:
    def __init__(self, secrets):
        self.secrets = secrets
        self.requested = []

    def get_secret(self, name):
        self.requested.append(name)
        return self.secrets.get(name)


class FailingSecretStore:
    def get_secret(self, name):
        raise PermissionError("vault access denied")


def test_store_satisfies_protocol():
    assert isinstance(DictSecretStore({}), SecretStore)


def test_store_value_wins_over_environment():
    store = DictSecretStore({"AZURE-OPENAI-API-KEY": "vault-key"})
    secrets = SecretAccessor(store=store, environ={"AZURE_OPENAI_API_KEY": "env-key"})

    assert secrets.get_secret("AZURE-OPENAI-API-KEY", "AZURE_OPENAI_API_KEY") == "vault-key"


def test_falls_back_to_environment_when_store_has_no_value():
    store = DictSecretStore({})
    secrets = SecretAccessor(store=store, environ={"AZURE_OPENAI_API_KEY": "env-key"})

    assert secrets.get_secret("AZURE-OPENAI-API-KEY", "AZURE_OPENAI_API_KEY") == "env-key"
    assert store.requested == ["AZURE-OPENAI-API-KEY"]


def test_store_failure_falls_back_to_environment():
    secrets = SecretAccessor(store=FailingSecretStore(), environ={"AZURE_OPENAI_API_KEY": "env-key"})

    assert secrets.get_secret("AZURE-OPENAI-API-KEY", "AZURE_OPENAI_API_KEY") == "env-key"


def test_env_name_defaults_to_secret_name():
    secrets = SecretAccessor(environ={"JWT_SECRET": "s3cret"})
    assert secrets.get_secret("JWT_SECRET") == "s3cret"


def test_missing_secret_returns_none():
    secrets = SecretAccessor(store=FailingSecretStore(), environ={})
    assert secrets.get_secret("AZURE-OPENAI-API-KEY", "AZURE_OPENAI_API_KEY") is None


def test_empty_environment_value_is_missing():
    secrets = SecretAccessor(environ={"AZURE_OPENAI_API_KEY": ""})
    assert secrets.get_secret("AZURE-OPENAI-API-KEY", "AZURE_OPENAI_API_KEY") is None


def test_get_secrets():
    secrets = SecretAccessor(environ={"A": "1", "B": "2"})

    assert secrets.get_secrets([("A", None), ("b-secret", "B"), ("C", None)]) == {
        "A": "1",
        "b-secret": "2",
        "C": None,
    }
