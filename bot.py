# bot.py
import logging
import os
from typing import Optional
from zoneinfo import ZoneInfo

import discord
from discord.ext import commands
from tortoise import Tortoise

from config.settings import Settings, load_settings
from service.clock import SystemClock
from service.engine import SoloistEngine
from service.persistence.tortoise_store import TortoiseStateStore

settings = load_settings()

# 로그 기본 설정
logging.basicConfig(
    level=settings.log_level,  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)


class SoloistBot(commands.Bot):
    def __init__(self, settings: Settings):
        intents = discord.Intents.default()
        super().__init__(command_prefix="!", intents=intents)
        self.settings = settings
        self.engine: Optional[SoloistEngine] = None

    async def setup_hook(self):
        logging.info("데이터 베이스 연결 시작")
        await self.init_db()
        logging.info("데이터 베이스 연결")

        tz = ZoneInfo(self.settings.timezone) if self.settings.timezone else None
        self.engine = await SoloistEngine.load(
            TortoiseStateStore(self.settings.owner_key),
            clock=SystemClock(tz),
        )
        logging.info(f"Engine loaded for owner '{self.settings.owner_key}'")

        for fn in os.listdir("./cogs"):
            if fn.endswith(".py") and not fn.startswith("_"):
                await self.load_extension(f"cogs.{fn[:-3]}")
                logging.info(f"Loaded cogs.{fn[:-3]}")

    async def init_db(self):
        await Tortoise.init(
            db_url=self.settings.database_url,
            modules={"models": ["models"]}
        )
        await Tortoise.generate_schemas()

    async def close(self):
        if self.engine is not None:
            await self.engine.flush()
        await Tortoise.close_connections()
        await super().close()

    async def on_ready(self):
        logging.info(f"Logged in as {self.user} (ID: {self.user.id})")


if __name__ == "__main__":
    if not settings.discord_token:
        raise RuntimeError("환경변수 DISCORD_TOKEN을 .env에 설정해주세요")

    bot = SoloistBot(settings)
    bot.run(settings.discord_token, log_handler=None)
