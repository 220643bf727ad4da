import time

from datetime import timedelta

from markupsafe import escape

from .app import app, get_store
from .errors import NotFoundError, RateLimitError, ValidationError
from .models import Server, Vote
from .util import check_username, format_remaining, sanitize_username


class VoteService:
	"""Votes for servers, limited to one per client and server per cooldown.

	Only the most recent vote of each client for each server is kept.
	Whether a client may vote again is computed from its timestamp on every
	query, so nothing ever has to expire the ledger.
	"""

	def __init__(self, store, cooldown=timedelta(hours=24),
			votes_document="votes.json", servers_document="servers.json"):
		self.store = store
		self.cooldown = int(cooldown.total_seconds())
		self.votes_document = votes_document
		self.servers_document = servers_document

	def _status(self, votes, client_id, server_id, now):
		obj = votes.get(Vote.key(client_id, server_id))
		if not isinstance(obj, dict):
			return {"canVote": True, "timeRemaining": 0}

		elapsed = int(now) - Vote.from_json(obj).timestamp
		remaining = max(0, self.cooldown - elapsed)
		return {"canVote": remaining == 0, "timeRemaining": remaining}

	def status(self, client_id, server_id, now=None):
		if now is None:
			now = time.time()
		votes = self.store.read(self.votes_document)
		return self._status(votes, client_id, server_id, now)

	def status_all(self, client_id, now=None):
		if now is None:
			now = time.time()
		votes = self.store.read(self.votes_document)
		servers = self.store.read(self.servers_document, list)
		return {obj["id"]: self._status(votes, client_id, obj["id"], now)
			for obj in servers if isinstance(obj, dict) and "id" in obj}

	def cast_vote(self, client_id, server_id, username, now=None):
		if now is None:
			now = time.time()

		if not isinstance(username, str) or not check_username(username):
			raise ValidationError("Invalid username. Use 3-16 characters "
				"(letters, numbers, _).")

		with self.store.lock(self.servers_document), \
				self.store.lock(self.votes_document):
			servers = [Server.from_json(s) for s in
				self.store.read(self.servers_document, list)
				if isinstance(s, dict) and "id" in s]
			for server in servers:
				if server.id == server_id:
					break
			else:
				raise NotFoundError("Server not found.")

			votes = self.store.read(self.votes_document)
			status = self._status(votes, client_id, server_id, now)
			if not status["canVote"]:
				raise RateLimitError("You already voted. You can vote again in " +
					format_remaining(status["timeRemaining"]))

			votes[Vote.key(client_id, server_id)] = \
				Vote(int(now), sanitize_username(username)).as_json()
			self.store.write(self.votes_document, votes)

			server.add_vote()
			self.store.write(self.servers_document, [s.as_json() for s in servers])

		app.logger.info("Vote for server %r, now at %d votes.",
			server_id, server.votes)

		return {
			"message": f"Thanks {escape(username.strip())}! Your vote has been registered.",
			"newVoteCount": server.votes,
		}


def get_vote_service():
	return VoteService(get_store(), app.config["VOTE_COOLDOWN"],
		app.config["VOTES_FILE"], app.config["SERVERS_FILE"])
