"""
Socket Mode event listener for PCC Link Bot.
Connects to Slack via WebSocket - no public URL needed.
"""
import logging
from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler
from .config import get_settings
from .log import setup_logging
from .pipeline.run import process_event_sync

setup_logging()
logger = logging.getLogger("socket_listener")
settings = get_settings()

def create_app() -> App:
    app = App(token=settings.SLACK_BOT_TOKEN)

    @app.event("message")
    def handle_message_events(event, logger):
        """
        Handle incoming message events from Slack via Socket Mode.
        Replies in thread when the message carries tender links.
        """
        logger.debug(f"Message event {event.get('ts')} in {event.get('channel')}")
        process_event_sync(event)

    return app

def main():
    """Start the Socket Mode handler."""
    if not settings.SLACK_BOT_TOKEN or not settings.SLACK_APP_TOKEN:
        logger.error("Missing Slack configuration. Please set SLACK_BOT_TOKEN and SLACK_APP_TOKEN.")
        return

    logger.info("Starting Socket Mode listener...")
    if settings.WATCH_CHANNEL_ID:
        logger.info(f"Monitoring channel: {settings.WATCH_CHANNEL_ID}")
    else:
        logger.info("Monitoring all channels the bot is a member of")

    # Start Socket Mode handler (blocks)
    handler = SocketModeHandler(create_app(), settings.SLACK_APP_TOKEN)
    handler.start()

if __name__ == "__main__":
    main()
