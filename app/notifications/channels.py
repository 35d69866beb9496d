from enum import Enum


class Channel(str, Enum):
    WEBHOOK_BROADCAST = "webhook_broadcast"
    WEBHOOK_OWNER = "webhook_owner"
    DISCORD_DM = "discord_dm"
    EMAIL_USER = "email_user"
