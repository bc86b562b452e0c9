# ENV vars like collaborator endpoints and top-view mode
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    API_BASE_URL = os.getenv("LANDSCAPE_API_BASE_URL", "http://localhost:3000")
    GENERATE_PATH = os.getenv("GENERATE_PATH", "/api/generate")
    BREAKDOWN_PATH = os.getenv("BREAKDOWN_PATH", "/api/breakdown")
    TOPVIEW_PATH = os.getenv("TOPVIEW_PATH", "/api/topview")

    # "simulated" until a real plan service is deployed, then "remote"
    TOPVIEW_MODE = os.getenv("TOPVIEW_MODE", "simulated").lower()
    TOPVIEW_DELAY_SECONDS = float(os.getenv("TOPVIEW_DELAY_SECONDS", "2.5"))
    TOPVIEW_PLACEHOLDER_URL = os.getenv("TOPVIEW_PLACEHOLDER_URL", "/top-view-placeholder.png")

    REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "120"))
    MAX_REFERENCE_BYTES = int(os.getenv("MAX_REFERENCE_BYTES", str(5 * 1024 * 1024)))

    BREAKDOWN_TIER = os.getenv("BREAKDOWN_TIER", "Custom Landscape")
    DESIGN_ASPECT = os.getenv("DESIGN_ASPECT", "16:9")
    DESIGN_COUNT = int(os.getenv("DESIGN_COUNT", "1"))

    REBATE_URL = os.getenv(
        "REBATE_URL",
        "https://www.fortcollins.gov/Services/Utilities/Programs-and-Rebates/Water-Programs/XIP",
    )
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
        if origin.strip()
    ]
    # abandoned sessions are dropped after this long without a request
    SESSION_TTL_SECONDS = float(os.getenv("SESSION_TTL_SECONDS", "3600"))
    MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "1000"))
    DEBUG = _env_bool("DEBUG")

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise AttributeError(f"Unknown config key: {key}")
            setattr(self, key, value)

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """New instance with overrides applied.

        Defaults are the class attributes, read from the environment (and .env)
        once at import; later os.environ changes need an explicit override.
        """
        return cls(**overrides)

    def endpoint(self, path: str) -> str:
        return self.API_BASE_URL.rstrip("/") + path
