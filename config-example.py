
# Copy this file to config.py and adjust it, or point the
# SERVER_DIRECTORY_CONFIG environment variable at your own copy.

# Enables detailed tracebacks and an interactive Python console on errors.
# Never use in production!
DEBUG = False

# Address for development server to listen on
HOST = "127.0.0.1"
# Port for development server to listen on
PORT = 5000

# Directory holding servers.json, votes.json and user_servers.json,
# relative to the repository root.
DATA_DIR = "data"

# Salt mixed into client addresses before hashing them.  Changing it
# resets every vote cooldown and registration limit.
IP_SALT = "change-me"

# Use the Client-IP and X-Forwarded-For headers to find the client address.
# Disable this if the server is not behind a reverse proxy, since clients
# can set these headers to anything.
TRUST_PROXY_HEADERS = True

# Time a client has to wait before voting for the same server again
#from datetime import timedelta
#VOTE_COOLDOWN = timedelta(hours=24)

# List of banned IP addresses for registrations and votes
# e.g. ['2620:101::44']
BANNED_IPS = []

# Origins allowed to call the API from a browser
# e.g. ["https://example.org"]
CORS_ORIGINS = "*"

LOG_LEVEL = "INFO"
