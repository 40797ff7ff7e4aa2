"""배경 작업 Cog - 주기적 저주 점검 및 일/주 리셋"""
import logging
from discord.ext import commands, tasks

from config import PENALTY

logger = logging.getLogger(__name__)


class BackgroundTasksCog(commands.Cog):
    """주기적 배경 작업 관리"""

    def __init__(self, bot):
        self.bot = bot
        self.engine_tick.change_interval(minutes=bot.settings.tick_minutes)
        self.engine_tick.start()
        logger.info("BackgroundTasksCog initialized")

    def cog_unload(self):
        """Cog 언로드 시 작업 정지"""
        self.engine_tick.cancel()
        logger.info("BackgroundTasksCog unloaded")

    @tasks.loop(minutes=PENALTY.CURSE_CHECK_INTERVAL_MINUTES)
    async def engine_tick(self):
        """저주 점검, 마감 처리, 일/주 리셋 (기본 5분마다)"""
        try:
            result = self.bot.engine.on_tick()
        except Exception as e:
            logger.error(f"Engine tick failed: {e}", exc_info=True)
            return

        if not result.ok:
            logger.warning(f"Tick rejected: {result.reason} {result.message}")
            return

        penalty = self.bot.engine.state.penalty
        logger.debug(
            f"Tick done: chances={penalty.chance_counter}, cursed={penalty.is_cursed}, "
            f"fatigue={penalty.has_shadow_fatigue}"
        )

    @engine_tick.before_loop
    async def before_tick(self):
        """봇 준비 대기"""
        await self.bot.wait_until_ready()
        logger.info("Background tick task ready")


async def setup(bot):
    """Cog 로드"""
    await bot.add_cog(BackgroundTasksCog(bot))
