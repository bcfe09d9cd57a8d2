from __future__ import annotations

from typing import Any

import pytest

from ircwire.irc.client import IRCClient
from ircwire.irc.codes import ResponseCode
from ircwire.irc.models import ConnectionState
from ircwire.irc.parser import tokenize
from tests.fixtures.irc_fixtures import (
    OTHER_JOIN,
    OTHER_PART,
    PRIVMSG,
    SELF_JOIN,
    SELF_PART,
    WELCOME,
    FakeTransport,
    RecordingObserver,
)


def test_welcome_sets_authenticated(connected_client: IRCClient, transport: FakeTransport):
    assert not connected_client.session.authenticated
    transport.receive(WELCOME)
    assert connected_client.session.authenticated
    assert connected_client.session.state is ConnectionState.READY


def test_welcome_adopts_registered_nickname(connected_client: IRCClient, transport: FakeTransport):
    transport.receive(":irc.example.net 001 tester_ :Welcome\r\n")
    assert connected_client.nickname == "tester_"


def test_prefixed_ping_answers_pong(connected_client: IRCClient, transport: FakeTransport):
    transport.receive(":irc.example.net PING :abc123\r\n")
    assert transport.lines == ["PONG :abc123"]


def test_self_join_creates_channel_once(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(SELF_JOIN)
    transport.receive(SELF_JOIN)
    assert list(authenticated_client.channels) == ["#chan"]
    assert observer.events == [("joined_channel", "#chan")]


def test_self_join_matches_nickname_case_insensitively(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":TESTER!t@h JOIN #chan\r\n")
    assert "#chan" in authenticated_client.channels


def test_other_join_adds_member(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(SELF_JOIN)
    transport.receive(OTHER_JOIN)
    channel = authenticated_client.channels["#chan"]
    assert "alice" in channel
    assert channel.members["alice"].hostname == "host.example"
    assert observer.events[-1] == ("user_joined_channel", "alice", "#chan")


def test_other_join_on_untracked_channel_is_ignored(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(OTHER_JOIN)
    assert authenticated_client.channels == {}
    assert observer.events == []


def test_self_part_removes_channel(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(SELF_JOIN)
    transport.receive(SELF_PART)
    assert authenticated_client.channels == {}
    assert observer.events[-1] == ("parted_channel", "#chan")


def test_self_part_of_untracked_channel_fires_nothing(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(SELF_PART)
    assert observer.events == []


def test_other_part_removes_member_with_reason(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(SELF_JOIN)
    transport.receive(OTHER_JOIN)
    transport.receive(OTHER_PART)
    assert "alice" not in authenticated_client.channels["#chan"]
    assert observer.events[-1] == ("user_parted_channel", "alice", "#chan", "gone fishing")


def test_other_part_without_reason(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(SELF_JOIN)
    transport.receive(":bob!b@h PART #chan\r\n")
    assert observer.events[-1] == ("user_parted_channel", "bob", "#chan", None)


def test_privmsg_notifies_observer(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(PRIVMSG)
    assert observer.events == [("private_message", "alice", "#chan", "hello world")]


def test_privmsg_with_wrong_param_count_is_a_logged_no_op(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver, caplog
):
    caplog.set_level("WARNING", logger="ircwire")
    transport.receive(":alice!a@h PRIVMSG #chan\r\n")
    assert observer.events == []
    assert any("PRIVMSG: expected 2" in r.getMessage() for r in caplog.records)


def test_fragmented_privmsg_dispatches_once(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":alice!a@h PRIVMSG #c :hi")
    assert observer.events == []
    transport.receive("\r\n")
    assert observer.events == [("private_message", "alice", "#c", "hi")]


def test_motd_accumulates_and_is_delivered(
    connected_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(
        ":srv 375 tester :line1\r\n"
        ":srv 372 tester :line2\r\n"
        ":srv 372 tester :line3\r\n"
        ":srv 376 tester :End of /MOTD command.\r\n"
    )
    assert observer.events == [("new_motd", "line1\nline2\nline3")]
    assert connected_client.session.motd == "line1\nline2\nline3"


def test_motd_start_resets_previous_text(
    connected_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":srv 375 tester :old\r\n:srv 372 tester :stale\r\n")
    transport.receive(":srv 375 tester :new\r\n:srv 376 tester :End\r\n")
    assert observer.events == [("new_motd", "new")]


def test_motd_line_without_start(
    connected_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":srv 372 tester :orphan\r\n:srv 376 tester :End\r\n")
    assert observer.events == [("new_motd", "\norphan")]


def test_end_of_motd_without_motd_fires_nothing(
    connected_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":srv 376 tester :End\r\n")
    assert observer.events == []


def test_no_motd_reports_empty_text(
    connected_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":srv 422 tester :MOTD File is missing\r\n")
    assert observer.events == [("new_motd", "")]


def test_unhandled_recognised_code(
    connected_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":srv 002 tester :Your host is srv\r\n")
    assert observer.events == [
        ("unhandled_command", "srv", ResponseCode.YOUR_HOST, ["tester", "Your host is srv"])
    ]


def test_unknown_code(
    connected_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":srv 999 tester :odd\r\n")
    assert observer.events == [("unknown_command", "srv", "999", ["tester", "odd"])]


def test_names_reply_populates_members(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(SELF_JOIN)
    transport.receive(":srv 353 tester = #chan :tester @alice +bob %carol\r\n")
    members = authenticated_client.channels["#chan"].members
    assert sorted(members) == ["alice", "bob", "carol", "tester"]
    assert observer.names() == ["joined_channel"]


def test_names_reply_for_untracked_channel_is_ignored(
    authenticated_client: IRCClient, transport: FakeTransport
):
    transport.receive(":srv 353 tester = #other :alice\r\n")
    assert authenticated_client.channels == {}


def test_nick_change_of_other_user_renames_member(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(SELF_JOIN)
    transport.receive(OTHER_JOIN)
    transport.receive(":alice!alice@host.example NICK :alicia\r\n")
    channel = authenticated_client.channels["#chan"]
    assert "alicia" in channel and "alice" not in channel
    assert observer.events[-1] == ("nick_changed", "alice", "alicia")


def test_own_nick_change_updates_identity(
    authenticated_client: IRCClient, transport: FakeTransport
):
    transport.receive(":tester!t@h NICK :tester2\r\n")
    assert authenticated_client.nickname == "tester2"


def test_quit_of_other_user_removes_from_all_channels(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(SELF_JOIN)
    transport.receive(":tester!t@h JOIN #two\r\n")
    transport.receive(OTHER_JOIN)
    transport.receive(":alice!a@h JOIN #two\r\n")
    transport.receive(":alice!a@h QUIT :Ping timeout\r\n")
    assert all("alice" not in c for c in authenticated_client.channels.values())
    assert observer.events[-1] == ("user_quit", "alice", "Ping timeout")


def test_nickname_in_use_before_registration_retries(
    connected_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":srv 433 * tester :Nickname is already in use.\r\n")
    assert transport.lines == ["NICK tester_"]
    assert connected_client.nickname == "tester_"
    assert observer.events == []


def test_nickname_in_use_after_registration_keeps_nick(
    authenticated_client: IRCClient, transport: FakeTransport
):
    transport.receive(":srv 433 tester other :Nickname is already in use.\r\n")
    assert transport.sent == []
    assert authenticated_client.nickname == "tester"


def test_notice_notifies_observer(
    connected_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":srv NOTICE tester :*** Looking up your hostname\r\n")
    assert observer.events == [("notice", "srv", "tester", "*** Looking up your hostname")]


def test_observer_exception_does_not_escape_dispatch(
    authenticated_client: IRCClient, transport: FakeTransport, monkeypatch, caplog
):
    def boom(*args: Any) -> None:
        raise RuntimeError("observer failed")

    monkeypatch.setattr(authenticated_client.observer, "private_message", boom)
    caplog.set_level("ERROR", logger="ircwire")
    transport.receive(PRIVMSG)
    transport.receive(SELF_JOIN)
    assert "#chan" in authenticated_client.channels
    assert any("private_message failed" in r.getMessage() for r in caplog.records)


def test_dispatch_without_observer(authenticated_client: IRCClient, transport: FakeTransport):
    authenticated_client.set_observer(None)
    transport.receive(SELF_JOIN)
    transport.receive(PRIVMSG)
    assert "#chan" in authenticated_client.channels


@pytest.mark.parametrize(
    "raw",
    [
        ":alice!a@h JOIN\r\n",
        ":alice!a@h PART\r\n",
        ":srv 375 tester\r\n",
        ":srv 372 tester\r\n",
        ":alice!a@h NICK\r\n",
    ],
)
def test_parameter_mismatch_leaves_state_untouched(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver, raw: str
):
    transport.receive(SELF_JOIN)
    observer.events.clear()
    before = dict(authenticated_client.channels)
    transport.receive(raw)
    assert authenticated_client.channels == before
    assert authenticated_client.session.motd is None
    assert observer.events == []


def test_dispatcher_handles_expected_codes(authenticated_client: IRCClient):
    codes = authenticated_client.dispatcher.handled_codes
    for code in (
        ResponseCode.PING,
        ResponseCode.WELCOME,
        ResponseCode.JOIN,
        ResponseCode.PART,
        ResponseCode.PRIVMSG,
        ResponseCode.MOTD_START,
        ResponseCode.MOTD,
        ResponseCode.END_OF_MOTD,
    ):
        assert code in codes


def test_dispatch_parsed_line_directly(
    authenticated_client: IRCClient, observer: RecordingObserver
):
    authenticated_client.dispatcher.dispatch(tokenize(":bob!b@h PRIVMSG tester :psst"))
    assert observer.events == [("private_message", "bob", "tester", "psst")]


def test_member_lookups_ignore_case(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(":tester!t@h JOIN #Chan\r\n")
    transport.receive(":srv 353 tester = #CHAN :@alice bob\r\n")
    channel = authenticated_client.channels["#chan"]
    assert channel.name == "#Chan"
    assert "Alice" in channel

    transport.receive(":Alice!a@h QUIT :bye\r\n")
    transport.receive(":BOB!b@h PART #chan\r\n")
    assert len(channel) == 0
    assert observer.events[-2:] == [
        ("user_quit", "Alice", "bye"),
        ("user_parted_channel", "BOB", "#Chan", None),
    ]


def test_self_part_ignores_channel_case(
    authenticated_client: IRCClient, transport: FakeTransport, observer: RecordingObserver
):
    transport.receive(SELF_JOIN)
    transport.receive(":tester!t@h PART #CHAN\r\n")
    assert authenticated_client.channels == {}
    assert observer.events[-1] == ("parted_channel", "#CHAN")


def test_nick_change_across_case(
    authenticated_client: IRCClient, transport: FakeTransport
):
    transport.receive(SELF_JOIN)
    transport.receive(OTHER_JOIN)
    transport.receive(":ALICE!a@h NICK :Alicia\r\n")
    channel = authenticated_client.channels["#chan"]
    assert "alice" not in channel
    assert channel.members["alicia"].nickname == "Alicia"
