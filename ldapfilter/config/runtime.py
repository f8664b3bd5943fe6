################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapfilter.config.runtime
# Contains the RuntimeSettingsSingleton and its global instance.
# Values start from ldapfilter.defaults and may be overridden through
# the Django settings module.

# ---------------------------------- IMPORTS -----------------------------------#
from ldapfilter import defaults
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
import logging
################################################################################

logger = logging.getLogger(__name__)

LDAP_FILTER_SETTING_KEYS = (
	"LDAP_FILTER_ESCAPE_VALUES",
	"LDAP_FILTER_MAX_DEPTH",
)


# ! You also have to add the settings to the following files:
# ldapfilter.config.runtime <--- You're Here
# ldapfilter.defaults
class RuntimeSettingsSingleton:
	_instance = None
	_initialized = False
	LDAP_FILTER_ESCAPE_VALUES = defaults.LDAP_FILTER_ESCAPE_VALUES
	LDAP_FILTER_MAX_DEPTH = defaults.LDAP_FILTER_MAX_DEPTH

	# Singleton def
	def __new__(cls, *args, **kwargs):
		if cls._instance is None:
			cls._instance = super().__new__(cls, *args, **kwargs)
		return cls._instance

	def __init__(self):
		if self._initialized:
			return
		self.reset()
		self.resync()
		self._initialized = True

	def reset(self) -> None:
		"""Set every setting back to its value in ldapfilter.defaults"""
		for k in LDAP_FILTER_SETTING_KEYS:
			setattr(self, k, getattr(defaults, k))

	def resync(self, raise_exc=False) -> bool:
		"""Re-read overrides from the Django settings module.

		Returns:
			bool: False if the overrides could not be read.
		"""
		try:
			_current_settings: dict = self.get_settings()
			for k, v in _current_settings.items():
				setattr(self, k, v)
		except Exception as e:
			if raise_exc:
				raise e
			else:
				logger.exception(e)
				return False
		return True

	def get_settings(self) -> dict:
		r = {}
		# Reading an attribute loads DJANGO_SETTINGS_MODULE if it has not
		# been loaded yet, settings.configured stays False until then
		try:
			for k in LDAP_FILTER_SETTING_KEYS:
				if hasattr(settings, k):
					r[k] = getattr(settings, k)
					logger.debug("Setting override %s: %s", k, r[k])
		except ImproperlyConfigured:
			logger.debug(
				"Django settings are not configured, using defaults for %s",
				self.__class__.__name__,
			)
			return {}
		return r


RuntimeSettings = RuntimeSettingsSingleton()
