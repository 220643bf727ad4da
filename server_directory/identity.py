"""Pseudo-identity of a client, used for rate limiting.

Clients are identified by a salted hash of their apparent address.  This is
a heuristic, not authentication: anything behind the same NAT shares an
identity and a client that controls its headers can pick one.
"""
import hashlib
import ipaddress

from flask import current_app, request


UNKNOWN_ADDRESS = "unknown"


def normalize_address(address):
	"""Returns the address if it is a valid IP literal, else ``"unknown"``."""
	if not address:
		return UNKNOWN_ADDRESS

	address = address.strip()
	if address.startswith("::ffff:"):
		address = address[7:]

	try:
		return str(ipaddress.ip_address(address))
	except ValueError:
		return UNKNOWN_ADDRESS


def client_address(headers, remote_addr, trust_proxy=True):
	address = None
	if trust_proxy:
		if headers.get("Client-IP"):
			address = headers["Client-IP"]
		elif headers.get("X-Forwarded-For"):
			address = headers["X-Forwarded-For"].split(",")[0]

	if address is None:
		address = remote_addr

	return normalize_address(address)


def hash_address(address, salt):
	return hashlib.sha256((address + salt).encode("utf-8")).hexdigest()


def get_client_address():
	return client_address(request.headers, request.remote_addr,
		current_app.config["TRUST_PROXY_HEADERS"])


def get_client_id(address=None):
	"""Client identifier of the current request."""
	if address is None:
		address = get_client_address()
	return hash_address(address, current_app.config["IP_SALT"])


def is_banned(address):
	return address in current_app.config["BANNED_IPS"]
