from __future__ import annotations

import os

from pydantic import BaseModel


class Settings(BaseModel):
    ADMIN_API_URL: str = os.getenv("ADMIN_API_URL", "http://localhost:2368/ghost/api/admin")
    ADMIN_API_TOKEN: str = os.getenv("ADMIN_API_TOKEN", "")
    ADMIN_API_TIMEOUT_S: float = float(os.getenv("ADMIN_API_TIMEOUT_S", "10"))

    INVITE_ROLE_NAME: str = os.getenv("INVITE_ROLE_NAME", "Author")
    INVITE_FALLBACK_TIMEOUT_MS: int = int(os.getenv("INVITE_FALLBACK_TIMEOUT_MS", "4000"))
    MAIL_CONFIG_DOCS_URL: str = os.getenv(
        "MAIL_CONFIG_DOCS_URL", "https://docs.ghost.org/v1.0.0/docs/mail-config"
    )
    NEXT_STAGE: str = os.getenv("NEXT_STAGE", "posts.index")

    CORS_ALLOW_ORIGINS: list[str] = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:2368").split(
        ","
    )


settings = Settings()
