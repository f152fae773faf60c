"""Read a Firebase service account JSON and set FIREBASE_SERVICE_ACCOUNT in .env (inline)."""
import argparse
import logging
import os
import sys

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, REPO_ROOT)

from backend.core.config import SERVICE_ACCOUNT_ENV  # noqa: E402
from backend.core.exceptions import ConfigError  # noqa: E402
from backend.core.logging import setup_logger  # noqa: E402
from backend.utils.firebase_config import write_inline_credential  # noqa: E402

logger = logging.getLogger("set_firebase_env")


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("json_path", help="Service account JSON downloaded from the Firebase console")
    parser.add_argument("--env", default=os.path.join(REPO_ROOT, ".env"), help="Target .env file (default: repo root)")
    parser.add_argument("--var", default=SERVICE_ACCOUNT_ENV, help=f"Variable name (default: {SERVICE_ACCOUNT_ENV})")
    args = parser.parse_args(argv)

    setup_logger()
    try:
        write_inline_credential(args.json_path, args.env, args.var)
    except (OSError, ValueError, ConfigError) as e:
        logger.error(f"Could not write {args.var}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
