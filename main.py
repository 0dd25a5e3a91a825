import logging

from bot.setup_bot import create_bot
from core.config import load_settings
from core.diagnostics import print_startup_diagnostics
from core.logging_setup import setup_logging

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    setup_logging()
    settings = load_settings()
    print_startup_diagnostics(settings)
    app = create_bot(settings)
    logger.info("Vibe Reel bot started (Ctrl+C to exit).")
    app.run_polling()
