"""
Environment-backed settings for the Firebase bootstrap.

Variables:
- FIREBASE_SERVICE_ACCOUNT : service account JSON, inline (minified to one line)
- FIREBASE_APP_NAME        : optional firebase_admin app name (default "[DEFAULT]")
- FIREBASE_PROJECT_ID      : optional project id override (``projectId`` app option)
- LOG_LEVEL                : root log level (default "INFO")

A ``.env`` file in the working directory is loaded first; variables already
present in the environment win.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv


SERVICE_ACCOUNT_ENV = "FIREBASE_SERVICE_ACCOUNT"
APP_NAME_ENV = "FIREBASE_APP_NAME"
PROJECT_ID_ENV = "FIREBASE_PROJECT_ID"
LOG_LEVEL_ENV = "LOG_LEVEL"

# Same name firebase_admin uses for its default app
DEFAULT_APP_NAME = "[DEFAULT]"


@dataclass(frozen=True)
class FirebaseSettings:
    service_account_json: Optional[str] = None
    app_name: str = DEFAULT_APP_NAME
    project_id: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FirebaseSettings":
        env = os.environ if environ is None else environ
        return cls(
            service_account_json=env.get(SERVICE_ACCOUNT_ENV),
            app_name=(env.get(APP_NAME_ENV) or "").strip() or DEFAULT_APP_NAME,
            project_id=(env.get(PROJECT_ID_ENV) or "").strip() or None,
            log_level=(env.get(LOG_LEVEL_ENV) or "INFO").strip().upper(),
        )

    def app_options(self) -> dict:
        """Options passed to ``firebase_admin.initialize_app``."""
        options = {}
        if self.project_id:
            options["projectId"] = self.project_id
        return options


def load_settings() -> FirebaseSettings:
    load_dotenv()
    return FirebaseSettings.from_env()
