import time


class Server:
	def __init__(self, id, name, ip, description, tags=None, votes=0,
			votes_all_time=0, featured=False, verified=False, created_at=None):
		self.id = id
		self.name = name
		self.ip = ip
		self.description = description
		self.tags = list(tags or [])
		self.votes = votes
		self.votes_all_time = votes_all_time
		self.featured = featured
		self.verified = verified
		if created_at is None:
			created_at = int(time.time() * 1000)
		self.created_at = created_at

		# Position in the listing.  Computed per listing, never stored.
		self.rank = None

	@staticmethod
	def from_json(obj):
		return Server(
			id=obj["id"],
			name=obj.get("name", ""),
			ip=obj.get("ip", ""),
			description=obj.get("description", ""),
			tags=obj.get("tags") or [],
			votes=obj.get("votes") or 0,
			votes_all_time=obj.get("votesAllTime") or 0,
			featured=bool(obj.get("featured", False)),
			verified=bool(obj.get("verified", False)),
			created_at=obj.get("createdAt") or 0,
		)

	def as_json(self):
		obj = {
			"id": self.id,
			"name": self.name,
			"ip": self.ip,
			"description": self.description,
			"tags": self.tags,
			"votes": self.votes,
			"votesAllTime": self.votes_all_time,
			"featured": self.featured,
			"verified": self.verified,
			"createdAt": self.created_at,
		}

		# Optional fields
		if self.rank is not None:
			obj["rank"] = self.rank

		return obj

	def add_vote(self):
		self.votes += 1
		self.votes_all_time += 1

	def __repr__(self):
		return f"<Server {self.id!r}>"


class Vote:
	"""Most recent vote of one client for one server."""

	def __init__(self, timestamp, username):
		self.timestamp = timestamp
		self.username = username

	@staticmethod
	def key(client_id, server_id):
		return f"{client_id}_{server_id}"

	@staticmethod
	def from_json(obj):
		return Vote(obj.get("timestamp") or 0, obj.get("username", ""))

	def as_json(self):
		return {"timestamp": self.timestamp, "username": self.username}


class Registration:
	"""Server registered by a client.  Each client may only register one."""

	def __init__(self, server_id, timestamp):
		self.server_id = server_id
		self.timestamp = timestamp

	@staticmethod
	def from_json(obj):
		return Registration(obj.get("serverId"), obj.get("timestamp") or 0)

	def as_json(self):
		return {"serverId": self.server_id, "timestamp": self.timestamp}
