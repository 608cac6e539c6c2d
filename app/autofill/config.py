from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

BASE_DIR = Path(__file__).parent
EQUIVALENT_DOMAINS_URL_ENV = "AUTOFILL_EQUIVALENT_DOMAINS_URL"


def _load_dotenv() -> None:
    repo_root = Path(__file__).resolve().parents[2]
    candidates = [repo_root / ".env", Path.cwd() / ".env"]
    for env_path in candidates:
        if not env_path.exists():
            continue
        try:
            for line in env_path.read_text().splitlines():
                stripped = line.strip()
                if not stripped or stripped.startswith("#") or "=" not in stripped:
                    continue
                key, value = stripped.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value
        except Exception:  # noqa: BLE001
            continue
        break


_load_dotenv()


@dataclass(frozen=True)
class FillConfig:
    delay_between_actions_ms: int = int(os.getenv("AUTOFILL_DELAY_BETWEEN_ACTIONS_MS", "20"))
    default_uri_match: str = os.getenv("AUTOFILL_DEFAULT_URI_MATCH", "domain").strip().lower()


@dataclass(frozen=True)
class DomainsConfig:
    equivalent_domains_url: Optional[str] = os.getenv(EQUIVALENT_DOMAINS_URL_ENV) or None
    http_timeout: float = float(os.getenv("AUTOFILL_HTTP_TIMEOUT", "10"))


@dataclass(frozen=True)
class AppConfig:
    log_level: str = os.getenv("AUTOFILL_LOG_LEVEL", "INFO").upper()
    fill: FillConfig = field(default_factory=FillConfig)
    domains: DomainsConfig = field(default_factory=DomainsConfig)


CONFIG = AppConfig()


def resolve_equivalent_domains_url(override: Optional[str] = None) -> Optional[str]:
    if override:
        return override
    env_value = os.getenv(EQUIVALENT_DOMAINS_URL_ENV)
    if env_value:
        return env_value
    return CONFIG.domains.equivalent_domains_url
