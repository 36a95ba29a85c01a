"""Constant definitions for quotecord."""

# Identity defaults
DEFAULT_AVATAR_URL = "https://cdn.discordapp.com/embed/avatars/0.png"
AUTHOR_DEFAULT_COLOR = "#ffffff"
REPLY_DEFAULT_COLOR = "#b5bac1"
UNKNOWN_USER_NAME = "Unknown User"

# Asset sources
EMOJI_CDN_URL = "https://cdn.jsdelivr.net/gh/jdecked/twemoji@latest/assets/svg"
CUSTOM_EMOJI_CDN_URL = "https://cdn.discordapp.com/emojis"
STICKER_CDN_URL = "https://media.discordapp.net/stickers"

# Rendering collaborator
RENDER_SERVICE_URL = "http://localhost:3000/render"
RENDER_REQUEST_TIMEOUT = 30.0

# Reply previews
REPLY_PREVIEW_LIMIT = 100
REPLY_ELLIPSIS = "..."
REPLY_EMPTY_PLACEHOLDER = "Click to see attachment"

# Mention placeholders for ids that cannot be resolved
UNKNOWN_USER_MENTION = "@User"
UNKNOWN_CHANNEL_MENTION = "#channel"
UNKNOWN_ROLE_MENTION = "@role"
