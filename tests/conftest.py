import pytest

from ircwire.irc.client import IRCClient
from ircwire.irc.models import User
from tests.fixtures.irc_fixtures import (
    NICK,
    SERVER,
    WELCOME,
    FakeTransport,
    RecordingObserver,
)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def client(transport: FakeTransport, observer: RecordingObserver) -> IRCClient:
    return IRCClient(SERVER, User(NICK, username="tester"), observer, transport)


@pytest.fixture
def connected_client(client: IRCClient, transport: FakeTransport) -> IRCClient:
    """Client whose transport reported a connection; handshake output discarded."""
    transport.connected = True
    client.on_connected()
    transport.sent.clear()
    return client


@pytest.fixture
def authenticated_client(connected_client: IRCClient, transport: FakeTransport) -> IRCClient:
    """Connected client that has received the welcome numeric."""
    transport.receive(WELCOME)
    transport.sent.clear()
    return connected_client
