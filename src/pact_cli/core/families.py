"""Extension families and the well-known names they provide.

A family is the unit that is downloaded and versioned together. pactflow-ai
ships as one binary; pact-legacy ships as an archive of Ruby standalone tools
that are bridged into individual commands.
"""

from enum import StrEnum

from pact_cli.core.models import ExtensionKind


class ExtensionFamily(StrEnum):
    PACTFLOW_AI = "pactflow-ai"
    PACT_LEGACY = "pact-legacy"

    @property
    def kind(self) -> ExtensionKind:
        if self is ExtensionFamily.PACTFLOW_AI:
            return ExtensionKind.REMOTE_SINGLE_BINARY
        return ExtensionKind.BUNDLED_LEGACY_TOOL


LEGACY_MASTER_NAME = ExtensionFamily.PACT_LEGACY.value

# Binary name inside the bundle's bin/ directory -> command name exposed by pact
LEGACY_TOOL_MAPPINGS: tuple[tuple[str, str], ...] = (
    ("pact-broker", "pact-broker-legacy"),
    ("pactflow", "pactflow-legacy"),
    ("pact-message", "message-legacy"),
    ("pact-mock-service", "mock-legacy"),
    ("pact-provider-verifier", "verifier-legacy"),
    ("pact-stub-service", "stub-legacy"),
)

LEGACY_TOOL_NAMES: tuple[str, ...] = tuple(target for _, target in LEGACY_TOOL_MAPPINGS)

# Names that always show up in `pact extension list`, installed or not
BUILTIN_EXTENSIONS: tuple[tuple[str, ExtensionKind], ...] = (
    (ExtensionFamily.PACTFLOW_AI.value, ExtensionKind.REMOTE_SINGLE_BINARY),
    *((name, ExtensionKind.BUNDLED_LEGACY_TOOL) for name in LEGACY_TOOL_NAMES),
)


def family_for_name(name: str) -> ExtensionFamily | None:
    """Map an extension name to the family that installs it.

    Derived legacy tool names map to the bundle family.
    """
    if name == ExtensionFamily.PACTFLOW_AI.value:
        return ExtensionFamily.PACTFLOW_AI
    if name == LEGACY_MASTER_NAME or name in LEGACY_TOOL_NAMES:
        return ExtensionFamily.PACT_LEGACY
    return None


def family_for_kind(kind: ExtensionKind) -> ExtensionFamily | None:
    """Map a record kind to the family that installs it (None for external)."""
    for family in ExtensionFamily:
        if family.kind is kind:
            return family
    return None
