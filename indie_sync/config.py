"""
Configuration Management
========================

Centralized configuration for the sync pipeline.
Values come from the environment (optionally a .env file at the project root).
"""

import os
from typing import Dict, Any, Optional

from dotenv import load_dotenv

from .errors import ConfigError

# Load environment variables from .env file
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
env_path = os.path.join(project_root, '.env')
load_dotenv(env_path)


# Source site
SOURCE_URL = "https://www.indiehackers.com/products"
SOURCE_HOST = "indiehackers.com"
ASSET_HOST = "storage.googleapis.com"
THUMBNAIL_TEMPLATE = (
    "https://storage.googleapis.com/indie-hackers.appspot.com/"
    "product-avatars/{slug}/128x128_{slug}.webp"
)

# Only this many listings get a detail page visit
DETAIL_CAP = 30

# Timings (ms)
LISTING_NAV_TIMEOUT = 120000
CHALLENGE_SETTLE = 15000
RENDER_SETTLE = 5000
RETRY_WAIT = 5000
SCROLL_WAIT = 3000
DETAIL_NAV_TIMEOUT = 20000
DETAIL_SETTLE = 3000
WEBSITE_NAV_TIMEOUT = 15000
WEBSITE_SETTLE = 2000


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Application configuration"""

    def __init__(self, env: Optional[Dict[str, str]] = None):
        get = (env if env is not None else os.environ).get

        # Notion
        self.notion_api_key = get('NOTION_API_KEY') or None
        self.notion_db_id = get('NOTION_DB_ID') or None
        self.notion_db_id_2 = get('NOTION_DB_ID_2') or None
        self.notion_report_db_id = get('NOTION_REPORT_DB_ID') or None
        self.notion_report_page_id = get('NOTION_REPORT_PAGE_ID') or None

        # LLM
        self.llm_provider = (get('LLM_PROVIDER') or 'openai').lower()
        self.openai_api_key = get('OPENAI_API_KEY') or None
        self.claude_api_key = get('CLAUDE_API_KEY') or get('ANTHROPIC_API_KEY') or None
        self.llm_model = get('LLM_MODEL') or None

        # Browser: the listing site challenge passes more reliably with a real window
        self.headless = _parse_bool(get('HEADLESS'), False)

        self.log_level = (get('LOG_LEVEL') or 'INFO').upper()

    def require(self, *names: str) -> None:
        """Raise ConfigError naming every attribute in `names` that is unset."""
        missing = [name.upper() for name in names if not getattr(self, name, None)]
        if missing:
            raise ConfigError(f"Missing required configuration: {', '.join(missing)}")

    def llm_api_key(self) -> Optional[str]:
        if self.llm_provider == 'claude':
            return self.claude_api_key
        return self.openai_api_key

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary (secrets masked)"""
        return {
            'notion_api_key': '***' if self.notion_api_key else None,
            'notion_db_id': self.notion_db_id,
            'notion_db_id_2': self.notion_db_id_2,
            'notion_report_db_id': self.notion_report_db_id,
            'notion_report_page_id': self.notion_report_page_id,
            'llm_provider': self.llm_provider,
            'llm_model': self.llm_model,
            'headless': self.headless,
            'log_level': self.log_level,
        }
