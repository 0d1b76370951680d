"""Reading and writing of the Grails project descriptors.

``application.properties`` is a Java properties file; it is parsed here
with the subset of the format Grails writes and edited in place on
write-back, so comments and unrelated keys survive. The plugin descriptor
is a Groovy class; only its name and ``version`` are read, by pattern.
"""

import re
from pathlib import Path

from .descriptor_models import ApplicationDescriptor, PluginDescriptor
from .errors import DescriptorNotFoundError, ExecutionError

APPLICATION_PROPERTIES = "application.properties"
PLUGIN_DESCRIPTOR_SUFFIX = "GrailsPlugin.groovy"

APP_NAME = "app.name"
APP_VERSION = "app.version"
APP_GRAILS_VERSION = "app.grails.version"

# Java properties files are ISO-8859-1; anything else goes through \uXXXX.
PROPERTIES_ENCODING = "latin-1"

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}

# ``def version = "1.0"`` anywhere a declaration can start; Grails 1.0-era
# descriptors also use a bare number (``def version = 0.1``).
_VERSION_RE = re.compile(
    r"""(?:^|[{;\s])(?:def|String)\s+version\s*=\s*(?:(['"])(.*?)\1|([\w.\-]+))""",
    re.MULTILINE,
)


def _is_comment_or_blank(line: str) -> bool:
    stripped = line.lstrip()
    return not stripped or stripped[0] in "#!"


def _continues(line: str) -> bool:
    """A line continues onto the next when it ends in an odd number of backslashes."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(lines: list):
    """Yield ``(start, end, text)`` for each key/value entry.

    ``start`` and ``end`` are the indexes of the first and last physical line
    of the entry; ``text`` has the continuations joined.
    """
    i = 0
    while i < len(lines):
        line = lines[i]
        if _is_comment_or_blank(line):
            i += 1
            continue
        start = i
        text = line.lstrip()
        while _continues(text) and i + 1 < len(lines):
            i += 1
            text = text[:-1] + lines[i].lstrip()
        if _continues(text):
            text = text[:-1]
        yield start, i, text
        i += 1


def _unescape(s: str) -> str:
    out = []
    i = 0
    while i < len(s):
        c = s[i]
        if c != "\\" or i + 1 == len(s):
            out.append(c)
            i += 1
            continue
        nxt = s[i + 1]
        if nxt == "u" and re.fullmatch(r"[0-9a-fA-F]{4}", s[i + 2:i + 6]):
            out.append(chr(int(s[i + 2:i + 6], 16)))
            i += 6
        else:
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
    return "".join(out)


def _split_entry(text: str):
    """Split a logical line into its raw key and raw value."""
    i = 0
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c in "=: \t\f":
            break
        i += 1
    key = text[:i]
    rest = text[i:].lstrip(" \t\f")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t\f")
    return key, rest


def parse_properties(text: str) -> dict:
    """Parse the contents of a Java properties file into an ordered dict.

    Leading whitespace of values is dropped and trailing whitespace kept,
    as ``java.util.Properties`` does. Later duplicates win.
    """
    props = {}
    for _, _, entry in _logical_lines(text.splitlines()):
        key, value = _split_entry(entry)
        props[_unescape(key)] = _unescape(value)
    return props


def _escape(s: str, is_key: bool = False) -> str:
    out = []
    for pos, c in enumerate(s):
        if c == "\\":
            out.append("\\\\")
        elif c in "\t\n\r\f":
            out.append("\\" + {"\t": "t", "\n": "n", "\r": "r", "\f": "f"}[c])
        elif c == " " and (is_key or pos == 0):
            out.append("\\ ")
        elif is_key and c in "=:#!":
            out.append("\\" + c)
        elif ord(c) > 0xFF:
            out.append(f"\\u{ord(c):04x}")
        else:
            out.append(c)
    return "".join(out)


def set_property(lines: list, key: str, value: str) -> list:
    """Return ``lines`` with ``key`` set to ``value``.

    The last entry for ``key`` is replaced in place (it is the one that
    wins on read); if there is none, the entry is appended.
    """
    match = None
    for start, end, entry in _logical_lines(lines):
        raw_key, _ = _split_entry(entry)
        if _unescape(raw_key) == key:
            match = (start, end)
    new_line = f"{_escape(key, is_key=True)}={_escape(value)}"
    if match is None:
        return lines + [new_line]
    start, end = match
    return lines[:start] + [new_line] + lines[end + 1:]


def _line_ending(text: str) -> str:
    """The first line ending used in ``text``, ``"\\n"`` when there is none."""
    match = re.search(r"\r\n|\r|\n", text)
    return match.group(0) if match else "\n"


def plugin_name_from_class(class_name: str) -> str:
    """Derive the logical plugin name from a descriptor class name.

    ``ShiroGrailsPlugin`` → ``shiro``; ``AcegiSecurityGrailsPlugin`` →
    ``acegi-security``; ``HTTPClientGrailsPlugin`` → ``http-client``. A bare
    ``GrailsPlugin`` has no logical name and gives ``""``.
    """
    logical = class_name
    if logical.endswith("GrailsPlugin"):
        logical = logical[:-len("GrailsPlugin")]
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])", "-", logical).lower()


class GrailsServices:
    """Project descriptor service rooted at a Grails project directory."""

    def __init__(self, basedir: Path):
        self.basedir = Path(basedir)

    def read_project_descriptor(self) -> ApplicationDescriptor:
        """Load ``application.properties`` from the base directory.

        Raises:
            DescriptorNotFoundError: If the file does not exist.
            ExecutionError: If it exists but cannot be read.
        """
        path = self.basedir / APPLICATION_PROPERTIES
        if not path.is_file():
            raise DescriptorNotFoundError(f"No {APPLICATION_PROPERTIES} found at {path}")
        try:
            text = path.read_text(encoding=PROPERTIES_ENCODING)
        except OSError as e:
            raise ExecutionError(f"Unable to read {path}: {e}") from e

        props = parse_properties(text)
        return ApplicationDescriptor(
            app_name=props.get(APP_NAME),
            app_version=props.get(APP_VERSION),
            grails_version=props.get(APP_GRAILS_VERSION),
            properties=props,
        )

    def write_project_descriptor(self, basedir: Path, descriptor: ApplicationDescriptor):
        """Write the descriptor's fields back to ``basedir/application.properties``.

        Only keys whose value differs from the file are rewritten; every other
        line, comments included, is kept as it was, and so is the file's
        line ending.

        Raises:
            ExecutionError: If the file cannot be read or written.
        """
        path = Path(basedir) / APPLICATION_PROPERTIES
        text = ""
        try:
            if path.exists():
                with open(path, encoding=PROPERTIES_ENCODING, newline="") as f:
                    text = f.read()
        except OSError as e:
            raise ExecutionError(f"Unable to read {path}: {e}") from e

        newline = _line_ending(text)
        lines = text.splitlines()
        current = parse_properties(text)
        for key, value in [
            (APP_NAME, descriptor.app_name),
            (APP_VERSION, descriptor.app_version),
            (APP_GRAILS_VERSION, descriptor.grails_version),
        ]:
            if value is not None and current.get(key) != value:
                lines = set_property(lines, key, value)
                descriptor.properties[key] = value

        try:
            with open(path, "w", encoding=PROPERTIES_ENCODING, newline="") as f:
                f.write(newline.join(lines) + newline)
        except OSError as e:
            raise ExecutionError(f"Unable to write {path}: {e}") from e

    def read_grails_plugin_project(self) -> PluginDescriptor:
        """Load the single ``*GrailsPlugin.groovy`` descriptor in the base directory.

        Raises:
            DescriptorNotFoundError: If there is no plugin descriptor.
            ExecutionError: If there are several, or the one found cannot be
                read or declares no version.
        """
        candidates = sorted(self.basedir.glob(f"*{PLUGIN_DESCRIPTOR_SUFFIX}"))
        if not candidates:
            raise DescriptorNotFoundError(
                f"No Grails plugin descriptor (*{PLUGIN_DESCRIPTOR_SUFFIX}) found in {self.basedir}"
            )
        if len(candidates) > 1:
            names = ", ".join(p.name for p in candidates)
            raise ExecutionError(f"More than one Grails plugin descriptor found: {names}")

        path = candidates[0]
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ExecutionError(f"Unable to read {path}: {e}") from e

        plugin_name = plugin_name_from_class(path.name[:-len(".groovy")])
        if not plugin_name:
            raise ExecutionError(
                f"{path.name} does not name a plugin (expected <Name>{PLUGIN_DESCRIPTOR_SUFFIX})"
            )

        match = _VERSION_RE.search(source)
        if match is None:
            raise ExecutionError(f"No version declared in {path.name}")
        version = match.group(2) if match.group(1) else match.group(3)

        return PluginDescriptor(
            plugin_name=plugin_name,
            version=version,
            file_name=path.name,
        )
