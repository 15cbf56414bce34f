"""Project name validation.

Names become both the directory name and the ``name`` field of the generated
package.json, so they follow npm package-name rules.
"""
import re
from dataclasses import dataclass, field
from typing import List

MAX_NAME_LENGTH = 214

RESERVED_NAMES = {"node_modules", "favicon.ico"}

# Node core modules cannot be shadowed by a local package name
NODE_BUILTINS = {
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "diagnostics_channel", "dns", "domain",
    "events", "fs", "http", "http2", "https", "inspector", "module", "net",
    "os", "path", "perf_hooks", "process", "punycode", "querystring",
    "readline", "repl", "stream", "string_decoder", "sys", "timers", "tls",
    "trace_events", "tty", "url", "util", "v8", "vm", "wasi",
    "worker_threads", "zlib",
}

_URL_SAFE = re.compile(r'^[a-z0-9\-._~]+$')


@dataclass
class NameValidation:
    valid: bool
    problems: List[str] = field(default_factory=list)


def validate_project_name(name: str) -> NameValidation:
    """Check a project name and collect every problem found.

    Args:
        name: Candidate project name

    Returns:
        NameValidation with ``valid`` False and ordered problems on failure
    """
    problems: List[str] = []

    if name is None or name == "":
        return NameValidation(False, ["name cannot be empty"])

    if name != name.strip():
        problems.append("name cannot contain leading or trailing spaces")
    if name.startswith("."):
        problems.append("name cannot start with a period")
    if name.startswith("_"):
        problems.append("name cannot start with an underscore")
    if len(name) > MAX_NAME_LENGTH:
        problems.append(f"name cannot be longer than {MAX_NAME_LENGTH} characters")
    if name.lower() != name:
        problems.append("name can no longer contain capital letters")
    if not _URL_SAFE.match(name.lower().strip()):
        problems.append("name can only contain URL-friendly characters")
    if name.lower() in RESERVED_NAMES:
        problems.append(f"{name} is a reserved name")
    if name.lower() in NODE_BUILTINS:
        problems.append(f"{name} is a Node.js core module name")

    return NameValidation(not problems, problems)
