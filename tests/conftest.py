import pytest

from tableau_optimizer import reset_default_options


@pytest.fixture(autouse=True)
def _restore_default_options():
    reset_default_options()
    yield
    reset_default_options()
