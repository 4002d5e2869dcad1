from __future__ import annotations

from typing import Final, Tuple

from whichport.models import Role

HIGH: Final = "high"
MEDIUM: Final = "medium"

# Checked in order against the lower-cased command; first substring hit wins.
COMMAND_RULES: Final[Tuple[Tuple[str, Role], ...]] = (
    ("postgres", Role("PostgreSQL database", HIGH)),
    ("redis", Role("Redis cache or message broker", HIGH)),
    ("nginx", Role("Web server or reverse proxy", HIGH)),
    ("docker", Role("Container runtime backend", HIGH)),
    ("ollama", Role("Local LLM serving runtime", HIGH)),
    ("rustrover", Role("IDE or developer tooling service", MEDIUM)),
    ("jetbrains", Role("IDE or developer tooling service", MEDIUM)),
    ("toolbox", Role("IDE or developer tooling service", MEDIUM)),
    ("raycast", Role("Productivity launcher local service", MEDIUM)),
    ("adobe", Role("Adobe desktop background service", MEDIUM)),
    ("node", Role("Node.js application server", MEDIUM)),
)

PORT_RULES: Final[Tuple[Tuple[int, Role], ...]] = (
    (22, Role("SSH service", MEDIUM)),
    (80, Role("HTTP web service", MEDIUM)),
    (443, Role("HTTPS web service", MEDIUM)),
    (3306, Role("MySQL database", MEDIUM)),
    (5432, Role("PostgreSQL database", MEDIUM)),
    (6379, Role("Redis cache or message broker", MEDIUM)),
)

UNKNOWN_ROLE: Final = Role("Unknown application service", MEDIUM)


def infer_role(port: int, command: str) -> Role:
    """Guess what a listener is for, from its command name first and port second."""
    cmd = command.lower()
    for pattern, role in COMMAND_RULES:
        if pattern in cmd:
            return role
    for rule_port, role in PORT_RULES:
        if port == rule_port:
            return role
    return UNKNOWN_ROLE
