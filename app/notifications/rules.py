from app.notifications.events import StoreEvent
from app.notifications.channels import Channel


NOTIFICATION_RULES = {

    StoreEvent.NEW_RELEASE: {
        Channel.WEBHOOK_BROADCAST: True,
    },

    # DM and email are alternatives, picked by the downloader's auth provider
    StoreEvent.DOWNLOAD_COMPLETED: {
        Channel.DISCORD_DM: True,
        Channel.EMAIL_USER: True,
        Channel.WEBHOOK_OWNER: True,
    },
}
