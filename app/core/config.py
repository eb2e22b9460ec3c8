"""
Application configuration.
Secrets can be loaded from Azure Key Vault when KEY_VAULT_NAME is set, then
fall back to environment variables / .env file so local development works
without Key Vault access.
"""
import os
import logging
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Key Vault → environment variable mapping
# Secret names in Key Vault use lowercase-dashes; env vars use UPPER_SNAKE.
# ---------------------------------------------------------------------------
_KV_TO_ENV: dict[str, str] = {
    "database-url":   "DATABASE_URL",
    "jwt-secret-key": "JWT_SECRET_KEY",
}


def _load_from_key_vault(vault_name: str) -> int:
    """
    Fetch secrets from Azure Key Vault and inject them into os.environ.
    Returns the number of secrets loaded.
    """
    try:
        from azure.identity import DefaultAzureCredential
        from azure.keyvault.secrets import SecretClient
        from azure.core.exceptions import ResourceNotFoundError

        vault_url = f"https://{vault_name}.vault.azure.net/"
        client = SecretClient(vault_url=vault_url, credential=DefaultAzureCredential())
        loaded = 0

        for kv_name, env_name in _KV_TO_ENV.items():
            try:
                secret = client.get_secret(kv_name)
                if secret.value:
                    os.environ[env_name] = secret.value
                    loaded += 1
            except ResourceNotFoundError:
                pass
            except Exception as e:
                logger.warning("KV: could not load '%s': %s", kv_name, e)

        return loaded

    except ImportError:
        logger.warning("azure-keyvault-secrets / azure-identity not installed; skipping Key Vault load.")
        return 0
    except Exception as e:
        logger.warning("Key Vault load failed (%s); falling back to environment / .env file.", e)
        return 0


_kv_name = os.environ.get("KEY_VAULT_NAME", "")
if _kv_name:
    _n = _load_from_key_vault(_kv_name)
    if _n:
        logger.info("Loaded %d secrets from Key Vault '%s'", _n, _kv_name)


class Settings(BaseSettings):
    APP_ENV: str = "development"
    DATABASE_URL: str
    DB_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # Tokens are issued by the external auth provider; we only verify them
    JWT_SECRET_KEY: str = ""
    JWT_ALGORITHM: str = "HS256"

    CORS_ORIGINS: str = "*"
    PUBLIC_BOOKING_BASE_URL: str = "http://localhost:5173/book"
    KEY_VAULT_NAME: str = ""

    class Config:
        env_file = ".env"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()

if not settings.JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY is not set. Configure it in the environment, .env file or Key Vault."
    )
