import pytest

from pixcode.config import Settings
from pixcode.payload import Payload


@pytest.fixture
def settings():
    return Settings(default_merchant_name="Piggly", default_merchant_city="Maceio")


@pytest.fixture
def payload():
    return (
        Payload()
        .set_pix_key("email", "user@example.com")
        .set_merchant_name("Piggly")
        .set_merchant_city("Maceio")
    )
