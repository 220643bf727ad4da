from datetime import timedelta

# Enables detailed tracebacks and an interactive Python console on errors.
# Never use in production!
DEBUG = False

# Address for development server to listen on
HOST = "127.0.0.1"
# Port for development server to listen on
PORT = 5000

# Directory holding the JSON documents.  Created on first write.
DATA_DIR = "data"

# Document names inside DATA_DIR
SERVERS_FILE = "servers.json"
VOTES_FILE = "votes.json"
REGISTRATIONS_FILE = "user_servers.json"

# Storage backend, "json" (files in DATA_DIR) or "memory" (lost on restart)
STORE = "json"

# Salt mixed into client addresses before hashing them.
# Change this for every deployment.
IP_SALT = "change-me"

# Use the Client-IP and X-Forwarded-For headers to find the client address.
# Only disable this if the server is not behind a reverse proxy.
TRUST_PROXY_HEADERS = True

# Time a client has to wait before voting for the same server again
VOTE_COOLDOWN = timedelta(hours=24)

# Tags that may be attached to a server.  Others are dropped silently.
ALLOWED_TAGS = ["survival", "pvp", "creativo", "minijuegos", "roleplay", "español"]

# List of banned IP addresses for registrations and votes
# e.g. ['2620:101::44']
BANNED_IPS = []

# Origins allowed to call the API from a browser
CORS_ORIGINS = "*"

# Largest request body accepted, in bytes
MAX_CONTENT_LENGTH = 8192

LOG_LEVEL = "INFO"
