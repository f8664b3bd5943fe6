from ldapfilter.exceptions.base import BadRequest

# LDAP Filter Custom Exceptions


class ExpressionError(BadRequest, ValueError):
	"""Raised when a string or symbolic literal matches no filter production."""
	default_detail = "Unable to parse LDAP Filter Expression"
	default_code = "ldap_filter_expression_error"

	def __init__(self, data=None, fragment=None):
		if isinstance(data, str):
			data = {"detail": data}
		if fragment is not None:
			data = data or {}
			data["fragment"] = fragment
		super().__init__(data=data)

	@property
	def fragment(self):
		if isinstance(self.detail, dict):
			return self.detail.get("fragment")
		return None


class FilterArgumentError(BadRequest, TypeError):
	"""Raised on structural misuse of a filter component constructor."""
	default_detail = "Invalid arguments for LDAP Filter Component"
	default_code = "ldap_filter_argument_error"
