import pytest

from usagecsv.cli import parse_args
from usagecsv.config import Config, Credentials

ENV_VARS = (
    "TWILIO_ACCOUNT_SID",
    "TWILIO_ACCOUNT_SID_1",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_AUTH_TOKEN_1",
    "USAGECSV_OUTPUT_DIR",
)


@pytest.fixture()
def clean_env(monkeypatch: "pytest.MonkeyPatch") -> "pytest.MonkeyPatch":
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigFromEnv:
    def test_defaults(self, clean_env: "pytest.MonkeyPatch") -> "None":
        config = Config.from_env()
        assert config.account_sid == ""
        assert config.auth_token == ""
        assert config.output_dir == "local"

    def test_reads_env_vars(self, clean_env: "pytest.MonkeyPatch") -> "None":
        clean_env.setenv("TWILIO_ACCOUNT_SID", "AC123")
        clean_env.setenv("TWILIO_AUTH_TOKEN", "secret")
        clean_env.setenv("USAGECSV_OUTPUT_DIR", "/tmp/out")
        config = Config.from_env()
        assert config.account_sid == "AC123"
        assert config.auth_token == "secret"
        assert config.output_dir == "/tmp/out"

    def test_falls_back_to_numbered_vars(
        self, clean_env: "pytest.MonkeyPatch"
    ) -> "None":
        clean_env.setenv("TWILIO_ACCOUNT_SID_1", "AC999")
        clean_env.setenv("TWILIO_AUTH_TOKEN_1", "token-1")
        config = Config.from_env()
        assert config.account_sid == "AC999"
        assert config.auth_token == "token-1"

    def test_unnumbered_vars_win(self, clean_env: "pytest.MonkeyPatch") -> "None":
        clean_env.setenv("TWILIO_ACCOUNT_SID", "AC111")
        clean_env.setenv("TWILIO_ACCOUNT_SID_1", "AC222")
        assert Config.from_env().account_sid == "AC111"


class TestCredentials:
    def test_credentials_struct(self) -> "None":
        config = Config(account_sid="AC1", auth_token="tok")
        assert config.credentials == Credentials(account_sid="AC1", auth_token="tok")


class TestParseArgs:
    def test_no_arguments_uses_env(self, clean_env: "pytest.MonkeyPatch") -> "None":
        clean_env.setenv("TWILIO_ACCOUNT_SID", "AC123")
        config = parse_args([])
        assert config.account_sid == "AC123"
        assert config.output_dir == "local"
        assert config.log_level == "info"
        assert config.metrics_textfile == ""

    def test_flags_override(self, clean_env: "pytest.MonkeyPatch") -> "None":
        config = parse_args(
            [
                "--output.dir",
                "exports",
                "--log.level",
                "debug",
                "--metrics.textfile",
                "usage.prom",
            ]
        )
        assert config.output_dir == "exports"
        assert config.log_level == "debug"
        assert config.metrics_textfile == "usage.prom"
