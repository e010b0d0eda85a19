"""
Configuration module for PageDeck (configs).
"""

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_BASE = "https://alai-standalone-backend.getalai.com"
DEFAULT_WS_BASE = "wss://alai-standalone-backend.getalai.com/ws"
DEFAULT_SHARE_BASE = "https://app.getalai.com/view/"
DEFAULT_THEME_ID = "a6bff6e5-3afc-4336-830b-fbc710081012"


class Config:
    def __init__(self) -> None:
        # Credentials
        self.access_token = os.getenv("ACCESS_TOKEN", "")
        self.firecrawl_api_key = os.getenv("FIRECRAWL_API_KEY", "")

        # Endpoints
        self.alai_api_base = os.getenv("ALAI_API_BASE", DEFAULT_API_BASE).rstrip("/")
        self.alai_ws_base = os.getenv("ALAI_WS_BASE", DEFAULT_WS_BASE).rstrip("/")
        self.alai_share_base = os.getenv("ALAI_SHARE_BASE", DEFAULT_SHARE_BASE)
        self.firecrawl_api_url = os.getenv(
            "FIRECRAWL_API_URL", "https://api.firecrawl.dev/v1"
        ).rstrip("/")

        # Presentation defaults
        self.presentation_title = os.getenv(
            "PRESENTATION_TITLE", "Website Presentation"
        )
        self.theme_id = os.getenv("THEME_ID", DEFAULT_THEME_ID)
        self.color_set_id = int(os.getenv("COLOR_SET_ID", "0"))
        self.slide_range = os.getenv("SLIDE_RANGE", "2-5")
        self.layout_type = os.getenv("LAYOUT_TYPE", "AI_GENERATED_LAYOUT")

        # Context truncation
        self.raw_context_limit = int(os.getenv("RAW_CONTEXT_LIMIT", "50000"))
        self.excerpt_limit = int(os.getenv("EXCERPT_LIMIT", "1000"))

        # Deadlines (seconds)
        self.outline_timeout = float(os.getenv("OUTLINE_TIMEOUT", "30"))
        self.create_slides_timeout = float(os.getenv("CREATE_SLIDES_TIMEOUT", "45"))
        self.variant_timeout = float(os.getenv("VARIANT_TIMEOUT", "30"))
        self.http_timeout = float(os.getenv("HTTP_TIMEOUT", "15"))

        # Logging / runtime
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.log_file = os.getenv("LOG_FILE")
        self.log_dir = os.getenv("LOG_DIR", "logs")

    def missing_credentials(self) -> list[str]:
        """Return the names of required credentials that are not configured."""
        missing = []
        if not self.access_token:
            missing.append("ACCESS_TOKEN")
        if not self.firecrawl_api_key:
            missing.append("FIRECRAWL_API_KEY")
        return missing

    def ws_endpoint(self, name: str) -> str:
        return f"{self.alai_ws_base}/{name}"

    def api_endpoint(self, path: str) -> str:
        return f"{self.alai_api_base}/{path.lstrip('/')}"

    def share_url(self, token: str) -> str:
        return f"{self.alai_share_base}{token}"


config = Config()
