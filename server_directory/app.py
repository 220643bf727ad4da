import os

from flask import Flask
from flask_cors import CORS

from .store import JSONFileStore, MemoryStore


app = Flask(__name__)

# Load defaults
app.config.from_pyfile("config.py")

# Load configuration
if os.path.isfile(os.path.join(app.root_path, "..", "config.py")):
	app.config.from_pyfile("../config.py")
app.config.from_envvar("SERVER_DIRECTORY_CONFIG", silent=True)

app.logger.setLevel(app.config["LOG_LEVEL"])

# Keep accented tag and server names readable in responses
app.json.ensure_ascii = False

CORS(app,
	origins=app.config["CORS_ORIGINS"],
	methods=["GET", "POST", "OPTIONS"],
	allow_headers=["Content-Type"],
	send_wildcard=app.config["CORS_ORIGINS"] == "*")

if app.config["STORE"] == "memory":
	app.extensions["store"] = MemoryStore()
else:
	data_dir = os.path.join(app.root_path, "..", app.config["DATA_DIR"])
	app.extensions["store"] = JSONFileStore(os.path.normpath(data_dir))


def get_store():
	return app.extensions["store"]
