"""Response code table.

A non-complete list of command words and numeric replies a server may send.
Tokens missing from the table are a legitimate outcome: ``resolve`` returns
``None`` for them and the dispatcher reports them as unknown commands.
"""

from __future__ import annotations

from enum import Enum


class ResponseCode(str, Enum):
    # Non-numeric response codes
    NOTICE = "NOTICE"
    MODE = "MODE"
    JOIN = "JOIN"
    PART = "PART"
    PRIVMSG = "PRIVMSG"
    PING = "PING"
    PONG = "PONG"
    NICK = "NICK"
    QUIT = "QUIT"
    KICK = "KICK"
    TOPIC = "TOPIC"
    INVITE = "INVITE"
    ERROR = "ERROR"

    # Client-server connection info only
    WELCOME = "001"
    YOUR_HOST = "002"
    CREATED = "003"
    MY_INFO = "004"
    BOUNCE = "005"

    # Server info
    USER_MODE_IS = "221"
    SERVER_LIST = "234"
    SERVER_LIST_END = "235"
    STATS_UPTIME = "242"
    STATS_ONLINE = "243"
    LUSER_CLIENT = "251"
    LUSER_OP = "252"
    LUSER_UNKNOWN = "253"
    LUSER_CHANNELS = "254"
    LUSER_ME = "255"

    # Generated in response to commands
    AWAY = "301"
    USER_HOST = "302"
    ISON = "303"
    UNAWAY = "305"
    NOW_AWAY = "306"

    # WHOIS / WHOWAS
    WHOIS_USER = "311"
    WHOIS_SERVER = "312"
    WHOIS_OPERATOR = "313"
    WHOWAS_USER = "314"
    END_OF_WHO = "315"
    WHOIS_IDLE = "317"
    END_OF_WHOIS = "318"
    WHOIS_CHANNELS = "319"
    END_OF_WHOWAS = "369"

    # Channel info
    LIST = "322"
    LIST_END = "323"
    CHANNEL_MODE_IS = "324"
    UNIQ_OP_IS = "325"
    NO_TOPIC = "331"
    TOPIC_REPLY = "332"
    INVITING = "341"
    SUMMONING = "342"
    INVITE_LIST = "346"
    END_OF_INVITE_LIST = "347"
    EXCEPT_LIST = "348"
    END_OF_EXCEPT_LIST = "349"
    VERSION = "351"
    WHO_REPLY = "352"
    NAME_REPLY = "353"
    LINKS = "364"
    END_OF_LINKS = "365"
    END_OF_NAMES = "366"
    BAN_LIST = "367"
    END_OF_BAN_LIST = "368"
    INFO = "371"
    MOTD = "372"
    END_OF_INFO = "374"
    MOTD_START = "375"
    END_OF_MOTD = "376"
    YOURE_OPERATOR = "381"
    YOURE_SERVICE = "383"
    TIME = "391"

    # Errors
    NO_SUCH_NICK = "401"
    NO_SUCH_SERVER = "402"
    NO_SUCH_CHANNEL = "403"
    CANNOT_SEND_TO_CHANNEL = "404"
    TOO_MANY_CHANNELS = "405"
    WAS_NO_SUCH_NICK = "406"
    TOO_MANY_TARGETS = "407"
    NO_SUCH_SERVICE = "408"
    NO_ORIGIN = "409"
    NO_RECIPIENT = "411"
    NO_TEXT_TO_SEND = "412"
    NO_TOP_LEVEL = "413"
    WILD_TOP_LEVEL = "414"
    BAD_MASK = "415"
    UNKNOWN_COMMAND = "421"
    NO_MOTD = "422"
    NO_NICKNAME_GIVEN = "431"
    ERRONEOUS_NICKNAME = "432"
    NICKNAME_IN_USE = "433"
    NICK_COLLISION = "436"
    UNAVAILABLE_RESOURCE = "437"
    USER_NOT_IN_CHANNEL = "441"
    NOT_ON_CHANNEL = "442"
    USER_ON_CHANNEL = "443"
    NO_LOGIN = "444"
    NOT_REGISTERED = "451"
    NEED_MORE_PARAMS = "461"
    ALREADY_REGISTERED = "462"
    PASSWORD_MISMATCH = "464"
    YOURE_BANNED_CREEP = "465"
    KEY_SET = "467"
    CHANNEL_IS_FULL = "471"
    UNKNOWN_MODE = "472"
    INVITE_ONLY_CHANNEL = "473"
    BANNED_FROM_CHANNEL = "474"
    BAD_CHANNEL_KEY = "475"
    NO_CHANNEL_MODES = "476"
    NO_PRIVILEGES = "481"
    USER_MODE_UNKNOWN_FLAG = "501"
    USERS_DONT_MATCH = "502"

    @property
    def is_numeric(self) -> bool:
        return self.value.isdigit()

    def __str__(self) -> str:
        return self.value


def resolve(token: str) -> ResponseCode | None:
    """Look up a wire token; command words match case-insensitively."""
    try:
        return ResponseCode(token.upper())
    except ValueError:
        return None


__all__ = ["ResponseCode", "resolve"]
