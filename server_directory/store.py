import copy
import fcntl
import json
import logging
import os
import threading

from contextlib import contextmanager


log = logging.getLogger(__name__)


class Store:
	"""Read and write whole JSON documents by name.

	Reads never fail: a missing or broken document reads as an empty
	container.  Writers that need a read-modify-write cycle hold
	``lock(name)`` around it; plain reads take no lock.
	"""

	def read(self, name, empty=dict):
		raise NotImplementedError

	def write(self, name, document):
		raise NotImplementedError

	def lock(self, name):
		raise NotImplementedError


class JSONFileStore(Store):
	def __init__(self, directory):
		self.directory = directory
		self._held = threading.local()

	def path(self, name):
		return os.path.join(self.directory, name)

	def read(self, name, empty=dict):
		try:
			with open(self.path(name), "r", encoding="utf-8") as fd:
				data = json.load(fd)
		except FileNotFoundError:
			return empty()
		except (OSError, ValueError) as e:
			log.warning("Unable to read %s: %s", name, e)
			return empty()

		if not isinstance(data, type(empty())):
			log.warning("Document %s has unexpected type %s.", name, type(data).__name__)
			return empty()

		return data

	def write(self, name, document):
		path = self.path(name)
		try:
			with self.lock(name):
				# Write to temporary file, then do an atomic replace so that
				# readers never see a truncated document.
				with open(path + "~", "w", encoding="utf-8") as fd:
					json.dump(document, fd, indent="\t", ensure_ascii=False)
				os.replace(path + "~", path)
		except OSError as e:
			log.error("Unable to write %s: %s", name, e)
			return False
		return True

	@contextmanager
	def lock(self, name):
		counts = self._held.__dict__.setdefault("counts", {})
		if counts.get(name):
			# Already held by this thread
			counts[name] += 1
			try:
				yield
			finally:
				counts[name] -= 1
			return

		os.makedirs(self.directory, exist_ok=True)
		with open(self.path(name) + ".lock", "a") as fd:
			fcntl.flock(fd, fcntl.LOCK_EX)
			counts[name] = 1
			try:
				yield
			finally:
				counts[name] = 0
				fcntl.flock(fd, fcntl.LOCK_UN)


class MemoryStore(Store):
	"""Keeps documents in process memory.  Used by the tests."""

	def __init__(self, documents=None):
		self.documents = copy.deepcopy(documents) if documents else {}
		self._locks = {}
		self._locks_lock = threading.Lock()

	def read(self, name, empty=dict):
		data = self.documents.get(name)
		if not isinstance(data, type(empty())):
			return empty()
		return copy.deepcopy(data)

	def write(self, name, document):
		with self.lock(name):
			self.documents[name] = copy.deepcopy(document)
		return True

	def lock(self, name):
		with self._locks_lock:
			return self._locks.setdefault(name, threading.RLock())
