import time

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from .app import app
from .directory import get_directory
from .errors import (ApiError, ForbiddenError, MethodNotAllowedError, NotFoundError,
	PayloadTooLargeError, ValidationError)
from .identity import get_client_address, get_client_id, is_banned
from .util import check_request_json, vote_fields
from .voting import get_vote_service


# HTTP errors raised by Flask itself, reported like our own
HTTP_ERRORS = {
	404: (NotFoundError, "Not found."),
	405: (MethodNotAllowedError, "Method not allowed."),
	413: (PayloadTooLargeError, "JSON data is too big."),
}


def api_response(data=None, error=None, status=200):
	return jsonify({
		"success": error is None,
		"data": data,
		"error": error,
		"timestamp": int(time.time()),
	}), status


@app.errorhandler(ApiError)
def handle_api_error(e):
	return api_response(error=e.message, status=e.status)


@app.errorhandler(HTTPException)
def handle_http_error(e):
	# Routing redirects are not errors
	if e.code is None or e.code < 400:
		return e.get_response()

	error_class, message = HTTP_ERRORS.get(e.code, (ApiError, e.description))
	resp, status = handle_api_error(error_class(message, e.code))

	allow = e.get_response().headers.get("Allow")
	if allow:
		resp.headers["Allow"] = allow
	return resp, status


def get_request_object():
	obj = request.get_json(force=True, silent=True)
	if not isinstance(obj, dict) or not obj:
		raise ValidationError("Invalid JSON data.")
	return obj


def get_unbanned_client_id():
	address = get_client_address()
	if is_banned(address):
		app.logger.warning("Rejected request from banned address %s.", address)
		raise ForbiddenError("Banned.")
	return get_client_id(address)


@app.get("/servers")
def server_list():
	servers = get_directory().list()
	return api_response({"servers": [s.as_json() for s in servers]})


@app.post("/servers")
def add_server():
	client_id = get_unbanned_client_id()

	# Body errors are reported after the registration limit
	obj = request.get_json(force=True, silent=True)

	server = get_directory().register(client_id, obj)
	return api_response({"server": server.as_json()})


@app.get("/vote")
def vote_status():
	votes = get_vote_service()
	client_id = get_client_id()

	server_id = request.args.get("serverId")
	if server_id:
		return api_response(votes.status(client_id, server_id))

	return api_response({"voteStatuses": votes.status_all(client_id)})


@app.post("/vote")
def cast_vote():
	client_id = get_unbanned_client_id()

	obj = get_request_object()
	error_str = check_request_json(obj, vote_fields)
	if error_str is not None:
		raise ValidationError("Invalid JSON data: " + error_str)

	result = get_vote_service().cast_vote(client_id,
		obj.get("serverId", ""), obj["username"])
	return api_response(result)
