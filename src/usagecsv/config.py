import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    account_sid: "str"
    auth_token: "str"


@dataclass
class Config:
    account_sid: "str" = ""
    auth_token: "str" = ""
    # relative paths resolve against the working directory
    output_dir: "str" = "local"
    log_level: "str" = "info"
    # empty disables the node-exporter textfile
    metrics_textfile: "str" = ""

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            account_sid=_first_env("TWILIO_ACCOUNT_SID", "TWILIO_ACCOUNT_SID_1"),
            auth_token=_first_env("TWILIO_AUTH_TOKEN", "TWILIO_AUTH_TOKEN_1"),
            output_dir=os.environ.get("USAGECSV_OUTPUT_DIR", "local"),
        )

    @property
    def credentials(self) -> "Credentials":
        return Credentials(account_sid=self.account_sid, auth_token=self.auth_token)


def _first_env(*names: "str") -> "str":
    """
    returns the value of the first non-empty variable in names.
    """
    for name in names:
        value = os.environ.get(name, "")
        if value:
            return value
    return ""
