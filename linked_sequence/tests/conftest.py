import pytest

from linked_sequence.configuration.loaders import reset_hub


@pytest.fixture(autouse=True)
def fresh_settings_hub():
    reset_hub()
    yield
    reset_hub()
