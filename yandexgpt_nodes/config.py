import logging
import os
import sys
from dataclasses import dataclass
from dotenv import load_dotenv


COMPLETION_ENDPOINT = "https://llm.api.cloud.yandex.net/foundationModels/v1/completion"


@dataclass
class Settings:
    yandex_api_key: str | None = None
    completion_endpoint: str = COMPLETION_ENDPOINT
    http_timeout: float = 60.0
    continue_on_fail: bool = False
    log_level: str = "INFO"


def get_settings() -> Settings:
    # Load .env if present
    load_dotenv(override=False)
    return Settings(
        yandex_api_key=os.getenv("YANDEX_GPT_API_KEY"),
        completion_endpoint=os.getenv("YANDEX_GPT_ENDPOINT", COMPLETION_ENDPOINT),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "60")),
        continue_on_fail=os.getenv("CONTINUE_ON_FAIL", "0") in ("1", "true", "True"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("yandexgpt_nodes")
    logger.setLevel(level)
    if not logger.handlers:
        sh = logging.StreamHandler(sys.stdout)
        sh.setLevel(level)
        sh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(sh)
    return logger
