from rest_framework.exceptions import APIException
from rest_framework import status


class CoreException(APIException):
	"""Base exception for ldapfilter.

	The detail is always a dict with at least ``code`` and ``detail`` keys,
	so it may be returned as-is in a REST framework response.
	"""
	def __init__(self, data=None):
		super().__init__()
		if data is not None:
			self.set_detail(data)
		else:
			self.detail = {
				"code": self.default_code,
				"detail": self.default_detail,
			}

	def set_detail(self, data):
		if isinstance(data, str):
			data = {"detail": data}
		self.detail = data
		if isinstance(self.detail, dict):
			if "code" not in self.detail:
				self.detail["code"] = self.default_code
			if "detail" not in self.detail:
				self.detail["detail"] = self.default_detail

	def __str__(self) -> str:
		if isinstance(self.detail, dict):
			return str(self.detail["detail"])
		return str(self.detail)


class BadRequest(CoreException):
	status_code = status.HTTP_400_BAD_REQUEST
	default_detail = "Bad Request"
	default_code = "bad_request"
