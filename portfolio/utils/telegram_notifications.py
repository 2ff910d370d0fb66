import asyncio
import logging
import threading
from telegram import Bot

logger = logging.getLogger(__name__)

def format_message_notification(message):
    return (
        "📧 New message from the portfolio site\n\n"
        f"👤 Name: {message['name']}\n"
        f"📧 Email: {message['email']}\n"
        f"📌 Subject: {message['subject']}\n\n"
        f"💬 Message:\n{message['message']}\n\n"
        f"⏰ Received: {message['created_at']}"
    )

async def send_telegram_message(bot_token, chat_id, text):
    try:
        bot = Bot(token=bot_token)
        result = await bot.send_message(chat_id=chat_id, text=text)
        return result.message_id
    except Exception as e:
        logger.error(f"Error sending Telegram notification to {chat_id}: {e}")
        return None

def notify_new_message(message, bot_token, chat_id):
    """Sends the message summary from a background thread; returns the thread or None."""
    if not bot_token or not chat_id:
        return None

    text = format_message_notification(message)

    def send_notification_async():
        asyncio.run(send_telegram_message(bot_token, chat_id, text))

    thread = threading.Thread(target=send_notification_async, daemon=True)
    thread.start()
    return thread
