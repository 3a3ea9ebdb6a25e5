"""
Application settings.

Values come from the process environment, with `invoice-hub/.env` loaded first
when present. Nothing here talks to the network; missing Supabase credentials
are only reported when a client is actually created.

Environment variables:
- SUPABASE_URL: Supabase project URL
- SUPABASE_KEY: Supabase API key (server-side key, backend only)
- LOG_LEVEL: root log level for the API process (default: INFO)
- COMPANY_NAME / COMPANY_ADDRESS / COMPANY_EMAIL: letterhead on invoice PDFs
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Look for .env in the invoice-hub directory
ENV_PATH = Path(__file__).parent.parent / ".env"


@dataclass(frozen=True, slots=True)
class Settings:
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    log_level: str = "INFO"
    company_name: str = "InvoiceHub"
    company_address: str = "123 Business Street\nBusiness City, 12345"
    company_email: str = "contact@invoicehub.com"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""

    load_dotenv(dotenv_path=ENV_PATH)
    defaults = Settings(supabase_url=None, supabase_key=None)

    return Settings(
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=os.getenv("SUPABASE_KEY"),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        company_name=os.getenv("COMPANY_NAME", defaults.company_name),
        company_address=os.getenv("COMPANY_ADDRESS", defaults.company_address).replace("\\n", "\n"),
        company_email=os.getenv("COMPANY_EMAIL", defaults.company_email),
    )


__all__ = ["Settings", "get_settings"]
