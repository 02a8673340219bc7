#!/usr/bin/env python3
import os

import dotenv

dotenv.load_dotenv()

__all__ = ["DefaultConfig", "config"]


class DefaultConfig:
    PORT = int(os.environ.get("PORT", "3980"))
    PLATFORM = os.environ.get("PLATFORM", "wecom")
    SUPPORTED_PLATFORMS = ("wecom",)
    WEBHOOK_URL = os.environ.get("WEBHOOK_URL", "")
    DELIVERY_TIMEOUT = float(os.environ.get("DELIVERY_TIMEOUT", "10"))

    def __init__(self):
        self.platform = self.PLATFORM.strip().lower()

    def is_supported_platform(self) -> bool:
        return self.platform in self.SUPPORTED_PLATFORMS

    def webhook_url(self, group: str | None = None) -> str:
        """Chat webhook for a group, read from WEBHOOK_URL_<GROUP> at call time."""
        if not group:
            return os.environ.get("WEBHOOK_URL", self.WEBHOOK_URL)
        return os.environ.get(f"WEBHOOK_URL_{group.upper()}", "")


config = DefaultConfig()
