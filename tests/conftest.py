import pytest
from pytest_mock import MockerFixture
from ldapfilter import defaults
from ldapfilter.config.runtime import RuntimeSettings

@pytest.fixture(autouse=True)
def reset_runtime_settings(mocker: MockerFixture):
	mocker.patch.object(
		RuntimeSettings,
		"LDAP_FILTER_ESCAPE_VALUES",
		defaults.LDAP_FILTER_ESCAPE_VALUES,
	)
	mocker.patch.object(
		RuntimeSettings,
		"LDAP_FILTER_MAX_DEPTH",
		defaults.LDAP_FILTER_MAX_DEPTH,
	)
