class ApiError(Exception):
	"""An error that is reported to the client in the response envelope."""
	status = 500

	def __init__(self, message, status=None):
		super().__init__(message)
		self.message = message
		if status is not None:
			self.status = status


class ValidationError(ApiError):
	status = 400


class ForbiddenError(ApiError):
	status = 403


class NotFoundError(ApiError):
	status = 404


class MethodNotAllowedError(ApiError):
	status = 405


class ConflictError(ApiError):
	status = 409


class PayloadTooLargeError(ApiError):
	status = 413


class RateLimitError(ApiError):
	status = 429
