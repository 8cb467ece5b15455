from yarl import URL

DEFAULT_SERVER = URL("https://authserver.mojang.com")
DEFAULT_SESSION_SERVER = URL("https://sessionserver.mojang.com")

DEFAULT_AGENT_NAME = "Minecraft"
DEFAULT_AGENT_VERSION = 1
