"""Runtime configuration read from the environment.

Values come from environment variables (a ``.env`` file is loaded by the
CLI beforehand); keyword overrides passed to :meth:`Settings.from_env`
take precedence over the environment.
"""

import os
from typing import Any, Optional

from pydantic import BaseModel

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_GITHUB_WEB_URL = "https://github.com"
DEFAULT_GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"


class Settings(BaseModel):
    """Credentials and endpoints used by the explorer."""

    github_token: Optional[str] = None
    github_api_url: str = DEFAULT_GITHUB_API_URL
    github_web_url: str = DEFAULT_GITHUB_WEB_URL
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_api_url: str = DEFAULT_GEMINI_API_URL
    timeout: float = 30.0
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, **overrides: Any) -> "Settings":
        env = os.environ
        values: dict[str, Any] = {
            "github_token": env.get("GITHUB_TOKEN") or env.get("GH_TOKEN") or None,
            "github_api_url": env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL,
            "github_web_url": env.get("GITHUB_WEB_URL") or DEFAULT_GITHUB_WEB_URL,
            "gemini_api_key": env.get("GEMINI_API_KEY") or None,
            "gemini_model": env.get("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            "gemini_api_url": env.get("GEMINI_API_URL") or DEFAULT_GEMINI_API_URL,
            "log_level": (env.get("GITSCOPE_LOG_LEVEL") or "WARNING").upper(),
            "log_file": env.get("GITSCOPE_LOG_FILE") or None,
        }
        if env.get("GITSCOPE_TIMEOUT"):
            values["timeout"] = float(env["GITSCOPE_TIMEOUT"])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
