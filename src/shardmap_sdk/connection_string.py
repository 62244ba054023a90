"""
Connection string grammar for SQL-style ``key=value;key=value`` descriptors.

``ConnectionDescriptor`` is a read-only, case-insensitive, ordered mapping
parsed from a raw connection string. Recognised keywords (``Data Source``,
``Initial Catalog``, ``User ID``, ...) and their common synonyms are
normalised to a canonical spelling; any other key is kept verbatim so it
survives a parse/format cycle untouched.

Derivation never mutates a descriptor: ``with_value()`` and ``without()``
return new descriptors.

Example:
    >>> d = ConnectionDescriptor.parse("Server=srv1;Database=smm;Integrated Security=SSPI")
    >>> d[DATA_SOURCE]
    'srv1'
    >>> d.without(DATA_SOURCE, INITIAL_CATALOG).to_connection_string()
    'Integrated Security=SSPI'
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from shardmap_sdk.exceptions import MalformedConnectionString


DATA_SOURCE = "Data Source"
INITIAL_CATALOG = "Initial Catalog"
USER_ID = "User ID"
PASSWORD = "Password"
INTEGRATED_SECURITY = "Integrated Security"
AUTHENTICATION = "Authentication"
APPLICATION_NAME = "Application Name"

REDACTED = "***"

# lower-cased keyword -> canonical keyword
_KEYWORDS: dict[str, str] = {
    "data source": DATA_SOURCE,
    "server": DATA_SOURCE,
    "address": DATA_SOURCE,
    "addr": DATA_SOURCE,
    "network address": DATA_SOURCE,
    "initial catalog": INITIAL_CATALOG,
    "database": INITIAL_CATALOG,
    "user id": USER_ID,
    "uid": USER_ID,
    "user": USER_ID,
    "password": PASSWORD,
    "pwd": PASSWORD,
    "integrated security": INTEGRATED_SECURITY,
    "trusted_connection": INTEGRATED_SECURITY,
    "authentication": AUTHENTICATION,
    "application name": APPLICATION_NAME,
    "app": APPLICATION_NAME,
}

_TRUE_VALUES = frozenset({"true", "yes", "sspi"})
_FALSE_VALUES = frozenset({"false", "no", ""})
_QUOTES = "\"'"


def normalize_keyword(key: str) -> str:
    """Return the canonical spelling of a recognised keyword, or the key itself."""
    key = key.strip()
    return _KEYWORDS.get(key.lower(), key)


def _fold(key: str) -> str:
    return normalize_keyword(key).lower()


def parse_pairs(raw: str, parameter_name: str = "connection_string") -> list[tuple[str, str]]:
    """
    Split a raw connection string into ``(key, value)`` pairs.

    Keys and unquoted values are whitespace-trimmed. ``==`` inside a key is a
    literal ``=``; values may be wrapped in single or double quotes, with a
    doubled quote standing for a literal one. Empty segments are skipped.

    Raises:
        MalformedConnectionString: On a segment without ``=``, an empty key,
            an unterminated quote, or text trailing a quoted value.
    """
    pairs: list[tuple[str, str]] = []
    i, n = 0, len(raw)

    while i < n:
        while i < n and (raw[i].isspace() or raw[i] == ";"):
            i += 1
        if i >= n:
            break

        key_chars: list[str] = []
        while True:
            if i >= n or raw[i] == ";":
                partial = "".join(key_chars).strip()
                raise MalformedConnectionString(
                    f"expected '=' after key '{partial}'", parameter_name
                )
            ch = raw[i]
            if ch == "=":
                if i + 1 < n and raw[i + 1] == "=":
                    key_chars.append("=")
                    i += 2
                    continue
                i += 1
                break
            key_chars.append(ch)
            i += 1

        key = "".join(key_chars).strip()
        if not key:
            raise MalformedConnectionString("empty key", parameter_name)

        while i < n and raw[i].isspace():
            i += 1

        if i < n and raw[i] in _QUOTES:
            quote = raw[i]
            i += 1
            value_chars: list[str] = []
            while True:
                if i >= n:
                    raise MalformedConnectionString(
                        f"unterminated quoted value for key '{key}'", parameter_name
                    )
                ch = raw[i]
                if ch == quote:
                    if i + 1 < n and raw[i + 1] == quote:
                        value_chars.append(quote)
                        i += 2
                        continue
                    i += 1
                    break
                value_chars.append(ch)
                i += 1
            value = "".join(value_chars)
            while i < n and raw[i].isspace():
                i += 1
            if i < n and raw[i] != ";":
                raise MalformedConnectionString(
                    f"unexpected text after quoted value for key '{key}'", parameter_name
                )
        else:
            end = raw.find(";", i)
            if end == -1:
                end = n
            value = raw[i:end].strip()
            i = end

        pairs.append((key, value))

    return pairs


def format_value(value: str) -> str:
    """Quote a value if it would not survive an unquoted round trip."""
    if not value:
        return value
    needs_quotes = (
        ";" in value
        or value[0] in _QUOTES
        or value[0] == "="
        or value != value.strip()
    )
    if not needs_quotes:
        return value
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    return '"' + value.replace('"', '""') + '"'


def format_key(key: str) -> str:
    return key.replace("=", "==")


class ConnectionDescriptor(Mapping[str, str]):
    """
    Immutable, ordered, case-insensitive view over connection string pairs.

    Lookups accept any spelling or synonym of a recognised keyword, so
    ``d["server"]`` and ``d["Data Source"]`` are the same entry. Duplicate
    keys resolve last-write-wins; an entry keeps the position of its first
    occurrence.
    """

    __slots__ = ("_entries",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        entries: dict[str, tuple[str, str]] = {}
        for key, value in pairs:
            display = normalize_keyword(key)
            folded = display.lower()
            if folded in entries:
                display = entries[folded][0]
            entries[folded] = (display, value)
        self._entries = entries

    @classmethod
    def parse(cls, raw: str, parameter_name: str = "connection_string") -> "ConnectionDescriptor":
        """
        Parse a raw connection string.

        Raises:
            MalformedConnectionString: If ``raw`` is not a non-blank string or
                does not follow the grammar.
        """
        if not isinstance(raw, str):
            raise MalformedConnectionString(
                f"expected a string, got {type(raw).__name__}", parameter_name
            )
        if not raw.strip():
            raise MalformedConnectionString("connection string is empty", parameter_name)
        descriptor = cls(parse_pairs(raw, parameter_name))
        descriptor.integrated_security_for(parameter_name)
        return descriptor

    # --- Mapping protocol ---

    def __getitem__(self, key: str) -> str:
        return self._entries[_fold(key)][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _fold(key) in self._entries

    def __iter__(self) -> Iterator[str]:
        return (display for display, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConnectionDescriptor):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ConnectionDescriptor({redact_descriptor(self).to_connection_string()!r})"

    # --- Accessors ---

    def get_value(self, key: str) -> str:
        """Return the value for ``key``, or an empty string when absent."""
        return self.get(key, "") or ""

    @property
    def data_source(self) -> str:
        return self.get_value(DATA_SOURCE)

    @property
    def initial_catalog(self) -> str:
        return self.get_value(INITIAL_CATALOG)

    @property
    def user_id(self) -> str:
        return self.get_value(USER_ID)

    @property
    def password(self) -> str:
        return self.get_value(PASSWORD)

    @property
    def application_name(self) -> str:
        return self.get_value(APPLICATION_NAME)

    @property
    def integrated_security(self) -> bool:
        return self.integrated_security_for("connection_string")

    def integrated_security_for(self, parameter_name: str) -> bool:
        """Interpret ``Integrated Security`` as a flag (true/yes/sspi, false/no)."""
        raw = self.get_value(INTEGRATED_SECURITY).strip().lower()
        if raw in _TRUE_VALUES:
            return True
        if raw in _FALSE_VALUES:
            return False
        raise MalformedConnectionString(
            f"invalid value for '{INTEGRATED_SECURITY}': '{self.get_value(INTEGRATED_SECURITY)}'",
            parameter_name,
        )

    # --- Derivation ---

    def with_value(self, key: str, value: str) -> "ConnectionDescriptor":
        """Return a copy with ``key`` set to ``value``."""
        return ConnectionDescriptor([*self.items(), (key, value)])

    def without(self, *keys: str) -> "ConnectionDescriptor":
        """Return a copy with every given key (and its synonyms) removed."""
        drop = {_fold(k) for k in keys}
        return ConnectionDescriptor(
            [(k, v) for k, v in self.items() if _fold(k) not in drop]
        )

    def to_connection_string(self) -> str:
        return ";".join(f"{format_key(k)}={format_value(v)}" for k, v in self.items())

    def __str__(self) -> str:
        return self.to_connection_string()


def redact_descriptor(descriptor: ConnectionDescriptor) -> ConnectionDescriptor:
    """Return a copy with any password value replaced by ``***``."""
    if PASSWORD not in descriptor:
        return descriptor
    return descriptor.with_value(PASSWORD, REDACTED)


def redact_connection_string(connection_string: str) -> str:
    """
    Mask the password in a connection string for safe logging.

    A string that cannot be parsed is not echoed back at all, since its
    secret portion cannot be located reliably.
    """
    try:
        descriptor = ConnectionDescriptor.parse(connection_string)
    except MalformedConnectionString:
        return "<malformed connection string>"
    return redact_descriptor(descriptor).to_connection_string()
