import ipaddress
import re

from markupsafe import escape


NAME_RE = re.compile(r"[a-zA-Z0-9áéíóúÁÉÍÓÚñÑ\s\-_]+")
DOMAIN_RE = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9\-.]+\.[a-zA-Z]{2,}(:[0-9]{1,5})?")
TAG_RE = re.compile(r"<!--.*?-->|<[^>]*>", re.S)
USERNAME_RE = re.compile(r"[a-zA-Z0-9_]+")

NAME_LENGTH = (3, 32)
DESCRIPTION_LENGTH = (20, 300)
USERNAME_LENGTH = (3, 16)

# Longest stored value of each free text field
MAX_NAME = 32
MAX_ADDRESS = 64
MAX_DESCRIPTION = 300


# fieldName: (Required, Type)
server_fields = {
	"name": (True, "str"),
	"ip": (True, "str"),
	"description": (True, "str"),
	"tags": (False, "list"),
}

vote_fields = {
	"username": (True, "str"),
	# A missing server ID is reported as an unknown server
	"serverId": (False, "str"),
}


def check_request_json(obj, fields):
	"""Checks the types of fields in the request.

	Returns error string or None.
	"""
	for name, data in fields.items():
		if not name in obj:
			if data[0]:
				return f"Required field '{name}' is missing."
			continue

		type_str = type(obj[name]).__name__
		if type_str != data[1]:
			return f"Field '{name}' has incorrect type (expected {data[1]} found {type_str})."

	return None


def check_length(s, limits):
	return limits[0] <= len(s.strip()) <= limits[1]


def check_name(name):
	return check_length(name, NAME_LENGTH) and \
		NAME_RE.fullmatch(name.strip()) is not None


def check_address(address):
	"""Accepts IP literals and domain names with an optional port."""
	address = address.strip()
	try:
		ipaddress.ip_address(address)
		return True
	except ValueError:
		return DOMAIN_RE.fullmatch(address) is not None


def check_username(username):
	return check_length(username, USERNAME_LENGTH) and \
		USERNAME_RE.fullmatch(username.strip()) is not None


def sanitize_username(username):
	return re.sub(r"[^a-zA-Z0-9_]", "", username)


def sanitize_string(s, max_length=255):
	"""Strips markup, escapes HTML special characters and caps the length."""
	s = TAG_RE.sub("", s.strip())
	return str(escape(s))[:max_length]


def filter_tags(tags, allowed):
	result = []
	for tag in tags:
		if isinstance(tag, str) and tag in allowed and tag not in result:
			result.append(tag)
	return result


def slugify(name):
	slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
	return slug or "server"


def unique_slug(name, taken):
	base = slugify(name)
	slug = base
	counter = 1
	while slug in taken:
		slug = f"{base}-{counter}"
		counter += 1
	return slug


def format_remaining(seconds):
	hours, rest = divmod(int(seconds), 3600)
	minutes = rest // 60
	if hours > 0:
		return f"{hours}h {minutes}m"
	return f"{minutes} minutes"
