"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
"""

import os
from pathlib import Path

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

# Détermination du fichier .env à utiliser avec priorité:
# 1) ENV_FILE (chemin explicite)
# 2) .env.{APP_ENV} si présent
# 3) .env (défaut)
_cwd = Path.cwd()
_env_file_from_env = os.getenv("ENV_FILE")
if _env_file_from_env:
    _ENV_FILE_PATH = _env_file_from_env
else:
    _app_env = os.getenv("APP_ENV", "dev")
    _candidate_specific = _cwd / f".env.{_app_env}"
    _candidate_default = _cwd / ".env"
    if _candidate_specific.exists():
        _ENV_FILE_PATH = _candidate_specific
    elif _candidate_default.exists():
        _ENV_FILE_PATH = _candidate_default
    else:
        _ENV_FILE_PATH = _candidate_default


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
    )
    APP_NAME: str = "docportal-bff"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = True
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 3000
    PREVIEW_PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: list[AnyHttpUrl] | list[str] = ["*"]

    # Store de contenus publiés et shell SPA
    STORE_ROOT: str = "dist"
    SHELL_DIR: str = "portal/public"

    # Contrat de chemins partagé build / BFF / preview
    DOCS_VERSION: str = "v1"
    METADATA_FILENAME: str = "docs.yaml"
    CONTENT_EXTENSION: str = ".html"
    DEFAULT_PAGE: str = "intro"
    SOURCE_DIRNAME: str = "src"

    # Moteur de conversion
    ASCIIDOCTOR_BIN: str = "asciidoctor"
    ASCIIDOCTOR_REQUIRES: list[str] = []  # ex: ["asciidoctor-kroki"]
    CONVERSION_TIMEOUT: float = 60.0


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
