"""Loading of the session signing secret.

SECRETS_BACKEND selects where it lives:
- env: SESSION_SECRET from environment variables / .env file (default, dev only)
- aws_secrets: AWS Secrets Manager, secret '<SECRETS_PREFIX>/session_secret',
  or a JSON bundle stored under '<SECRETS_PREFIX>' with a 'session_secret' key
- gcp_secrets: GCP Secret Manager, projects/<SECRETS_PREFIX or GCP_PROJECT_ID>/secrets/session_secret

The value is loaded once per process. Rotating it requires a restart and
invalidates every session token issued under the old value.
"""

import json
import logging
from functools import lru_cache

from agents_hub.auth.errors import SecretNotConfiguredError
from agents_hub.config import settings

logger = logging.getLogger(__name__)

SESSION_SECRET_NAME = "session_secret"


def _load_from_env() -> str:
    return settings.session_secret


def _load_from_aws() -> str:
    import boto3

    client = boto3.client("secretsmanager", region_name=settings.aws_region)
    prefix = settings.secrets_prefix
    secret_id = f"{prefix}/{SESSION_SECRET_NAME}" if prefix else SESSION_SECRET_NAME

    try:
        return client.get_secret_value(SecretId=secret_id)["SecretString"]
    except client.exceptions.ResourceNotFoundException:
        if not prefix:
            raise SecretNotConfiguredError(f"AWS secret '{secret_id}' does not exist")

    bundle = json.loads(client.get_secret_value(SecretId=prefix)["SecretString"])
    return bundle.get(SESSION_SECRET_NAME, "")


def _load_from_gcp() -> str:
    from google.cloud import secretmanager

    project = settings.secrets_prefix or settings.gcp_project_id
    client = secretmanager.SecretManagerServiceClient()
    response = client.access_secret_version(
        request={"name": f"projects/{project}/secrets/{SESSION_SECRET_NAME}/versions/latest"}
    )
    return response.payload.data.decode("UTF-8")


_LOADERS = {
    "env": _load_from_env,
    "aws_secrets": _load_from_aws,
    "gcp_secrets": _load_from_gcp,
}


@lru_cache(maxsize=1)
def get_session_secret() -> str:
    """Return the session signing secret, or raise SecretNotConfiguredError."""
    loader = _LOADERS.get(settings.secrets_backend)
    if loader is None:
        raise SecretNotConfiguredError(
            f"Unknown secrets backend '{settings.secrets_backend}' "
            f"(expected one of: {', '.join(_LOADERS)})"
        )

    logger.info("Loading session secret via %s backend", settings.secrets_backend)
    secret = loader()
    if not secret:
        raise SecretNotConfiguredError(
            f"Session secret is empty in the {settings.secrets_backend} backend"
        )
    return secret
