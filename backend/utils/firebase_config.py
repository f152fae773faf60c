"""
Firebase Admin credentials loading.

FIREBASE_SERVICE_ACCOUNT = contents of the service account JSON (inline, minified
to one line). The .json file never has to live in the project tree.

Everything here runs before any network-capable client is built: a missing
variable, malformed JSON, a descriptor with the wrong shape or a key the SDK
can't parse all surface as a single ``ConfigError``.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Literal, Optional

from firebase_admin import credentials
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from backend.core.config import SERVICE_ACCOUNT_ENV, FirebaseSettings
from backend.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class ServiceAccountCredential(BaseModel):
    """Service account descriptor as issued by the Firebase console.

    Only the keys the Admin SDK needs are typed; anything else
    (``private_key_id``, ``client_id``, cert URLs, ``universe_domain``)
    is kept and handed to the SDK as-is.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    type: Literal["service_account"]
    project_id: str = Field(min_length=1)
    client_email: str = Field(min_length=1)
    private_key: SecretStr
    token_uri: str = GOOGLE_TOKEN_URI

    @field_validator("private_key")
    @classmethod
    def _private_key_not_blank(cls, v: SecretStr) -> SecretStr:
        key = v.get_secret_value()
        if not key.strip():
            raise ValueError("private_key is empty")
        # Keys pasted into .env files often carry literal "\n" sequences
        if "\\n" in key:
            return SecretStr(key.replace("\\n", "\n"))
        return v

    def to_certificate_info(self) -> dict:
        info = self.model_dump()
        info["private_key"] = self.private_key.get_secret_value()
        return info


def _describe_errors(exc: ValidationError) -> str:
    # Never echo input values: one of them is the private key
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def parse_service_account(
    raw: Optional[str],
    variable: str = SERVICE_ACCOUNT_ENV,
) -> ServiceAccountCredential:
    """
    Parse and validate the inline service account JSON.

    Raises:
        ConfigError: variable unset/blank, not JSON, not an object, or not a
            valid service account descriptor.
    """
    if raw is None or not raw.strip():
        raise ConfigError(f"{variable} is not set", variable=variable)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{variable} is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})", variable=variable) from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"{variable} must contain a JSON object, got {type(data).__name__}",
            variable=variable,
        )

    try:
        return ServiceAccountCredential.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            f"{variable} is not a valid service account: {_describe_errors(e)}",
            variable=variable,
        ) from e


def get_firebase_credentials(settings: FirebaseSettings) -> credentials.Certificate:
    """
    Return ``credentials.Certificate`` built from FIREBASE_SERVICE_ACCOUNT.

    Raises:
        ConfigError: if the variable is missing/invalid or the SDK rejects the key.
    """
    account = parse_service_account(settings.service_account_json)

    try:
        cred = credentials.Certificate(account.to_certificate_info())
    except ValueError as e:
        raise ConfigError(
            f"{SERVICE_ACCOUNT_ENV} was rejected by firebase_admin: {e}",
            variable=SERVICE_ACCOUNT_ENV,
        ) from e

    logger.info(
        f"Service account loaded (project={account.project_id}, client={account.client_email})"
    )
    return cred


def write_inline_credential(
    json_path: str | Path,
    env_path: str | Path,
    variable: str = SERVICE_ACCOUNT_ENV,
) -> str:
    """
    Minify a downloaded service account JSON and store it inline in a .env file.

    An existing ``variable=`` line is replaced; every other line is preserved.

    Returns:
        The line written (without trailing newline).
    """
    json_path = Path(json_path)
    env_path = Path(env_path)

    with open(json_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    # Validate before writing so a wrong file never lands in .env
    parse_service_account(json.dumps(data), variable=variable)

    json_one_line = json.dumps(data, separators=(",", ":"))
    escaped = json_one_line.replace("\\", "\\\\").replace('"', '\\"')
    cred_line = f'{variable}="{escaped}"'

    lines = []
    if env_path.exists():
        with open(env_path, "r", encoding="utf-8") as f:
            for line in f:
                if line.strip().startswith(f"{variable}="):
                    continue
                if not line.endswith("\n"):
                    line += "\n"
                lines.append(line)
    lines.append(cred_line + "\n")

    # Write next to the target and swap in, so a crash never truncates .env
    fd, tmp_name = tempfile.mkstemp(dir=env_path.parent, prefix=f".{env_path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.writelines(lines)
        os.replace(tmp_name, env_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"{variable} written to {env_path} (inline JSON)")
    return cred_line
