import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    WHATSUP_CONFIG_PATH: str = os.getenv("WHATSUP_CONFIG_PATH", "config.json")
    WHATSUP_TIMEOUT_SECONDS: float = float(os.getenv("WHATSUP_TIMEOUT_SECONDS", "10"))
    WHATSUP_WEBHOOK_TIMEOUT_SECONDS: float = float(
        os.getenv("WHATSUP_WEBHOOK_TIMEOUT_SECONDS", "10")
    )
    # 0 keeps one worker per endpoint
    WHATSUP_MAX_WORKERS: int = int(os.getenv("WHATSUP_MAX_WORKERS", 0))
    WHATSUP_LOG_LEVEL: str = os.getenv("WHATSUP_LOG_LEVEL", "INFO")
    WHATSUP_HOST: str = os.getenv("WHATSUP_HOST", "127.0.0.1")
    WHATSUP_PORT: int = int(os.getenv("WHATSUP_PORT", 8080))


settings = Settings()
