import time

from .app import app, get_store
from .errors import ConflictError, NotFoundError, RateLimitError, ValidationError
from .models import Registration, Server
from .util import (MAX_ADDRESS, MAX_DESCRIPTION, MAX_NAME, DESCRIPTION_LENGTH,
	check_address, check_length, check_name, check_request_json, filter_tags,
	sanitize_string, server_fields, unique_slug)


FLAGS = ("featured", "verified")
COUNTERS = ("votes", "votesAllTime")


def check_counters(obj):
	for field in COUNTERS:
		value = obj.get(field, 0)
		if type(value) is not int or value < 0:
			return False
	return True


def server_ranking(server):
	# Featured servers always come first, then by votes.
	return (not server.featured, -server.votes)


class ServerDirectory:
	"""The list of registered servers."""

	def __init__(self, store, allowed_tags, servers_document="servers.json",
			registrations_document="user_servers.json"):
		self.store = store
		self.allowed_tags = allowed_tags
		self.servers_document = servers_document
		self.registrations_document = registrations_document

	def load(self):
		return [Server.from_json(obj) for obj in
			self.store.read(self.servers_document, list)
			if isinstance(obj, dict) and "id" in obj]

	def save(self, servers):
		return self.store.write(self.servers_document,
			[s.as_json() for s in servers])

	def list(self):
		servers = self.load()
		# sort() is stable, so equally ranked servers keep their stored order
		servers.sort(key=server_ranking)
		for i, server in enumerate(servers):
			server.rank = i + 1
		return servers

	def register(self, client_id, obj, now=None):
		if now is None:
			now = time.time()

		with self.store.lock(self.servers_document), \
				self.store.lock(self.registrations_document):
			registrations = self.store.read(self.registrations_document)
			if client_id in registrations:
				app.logger.warning("Client %s already registered server %r.",
					client_id[:12], registrations[client_id].get("serverId"))
				raise RateLimitError("You have already registered a server. "
					"Only one server per user is allowed.")

			if not isinstance(obj, dict) or not obj:
				raise ValidationError("JSON data is not an object.")

			error_str = check_request_json(obj, server_fields)
			if error_str is not None:
				raise ValidationError("Invalid JSON data: " + error_str)

			name = obj["name"]
			address = obj["ip"]
			description = obj["description"]

			if not check_name(name):
				raise ValidationError("Invalid name. Use 3-32 alphanumeric characters.")

			if not check_address(address):
				raise ValidationError("Invalid IP address or domain.")

			if not check_length(description, DESCRIPTION_LENGTH):
				raise ValidationError("The description must be between "
					"20 and 300 characters long.")

			tags = filter_tags(obj.get("tags", []), self.allowed_tags)

			name = sanitize_string(name, MAX_NAME)
			address = sanitize_string(address, MAX_ADDRESS)
			description = sanitize_string(description, MAX_DESCRIPTION)

			servers = self.load()
			for server in servers:
				if server.ip.lower() == address.lower():
					raise ConflictError("A server with that IP address already exists.")
				if server.name.lower() == name.lower():
					raise ConflictError("A server with that name already exists.")

			server = Server(
				id=unique_slug(name, {s.id for s in servers}),
				name=name,
				ip=address,
				description=description,
				tags=tags,
				created_at=int(now * 1000),
			)

			servers.append(server)
			self.save(servers)

			registrations[client_id] = Registration(server.id, int(now)).as_json()
			self.store.write(self.registrations_document, registrations)

		app.logger.info("Registered server %r (%s).", server.id, server.ip)

		return server

	def set_flag(self, server_id, flag, value=True):
		"""Sets one of the flags that can not be changed through the API."""
		if flag not in FLAGS:
			raise ValidationError(f"Unknown flag {flag!r}.")

		with self.store.lock(self.servers_document):
			servers = self.load()
			for server in servers:
				if server.id == server_id:
					break
			else:
				raise NotFoundError("Server not found.")

			setattr(server, flag, value)
			self.save(servers)

		app.logger.info("Set %s=%r on server %r.", flag, value, server_id)

		return server

	def import_servers(self, records, replace=False):
		"""Loads servers from a JSON listing.

		Returns the number of servers added.  Servers whose ID, name or
		address is already listed are skipped unless ``replace`` is set,
		in which case the current list is discarded first.
		"""
		with self.store.lock(self.servers_document):
			servers = [] if replace else self.load()
			ids = {s.id for s in servers}
			names = {s.name.lower() for s in servers}
			addresses = {s.ip.lower() for s in servers}

			added = 0
			for obj in records:
				if not isinstance(obj, dict) or not obj.get("id"):
					continue
				if not check_counters(obj):
					app.logger.warning("Skipping server %r with invalid vote counters.",
						obj["id"])
					continue
				server = Server.from_json(obj)
				if server.id in ids or server.name.lower() in names or \
						server.ip.lower() in addresses:
					continue
				servers.append(server)
				ids.add(server.id)
				names.add(server.name.lower())
				addresses.add(server.ip.lower())
				added += 1

			self.save(servers)

		return added


def get_directory():
	return ServerDirectory(get_store(), app.config["ALLOWED_TAGS"],
		app.config["SERVERS_FILE"], app.config["REGISTRATIONS_FILE"])
