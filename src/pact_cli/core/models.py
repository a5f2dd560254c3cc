"""Registry data models.

The registry document is a JSON object mapping extension name to an
ExtensionRecord. Records written by the earlier CLI used the key
``extension_type`` and variant names ``PactflowAi``/``PactRubyStandalone``/
``External``; both spellings are accepted on load.
"""

from enum import StrEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

LATEST_VERSION = "latest"

_LEGACY_KIND_NAMES = {
    "PactflowAi": "RemoteSingleBinary",
    "PactRubyStandalone": "BundledLegacyTool",
    "External": "ExternalOnPath",
}


class ExtensionKind(StrEnum):
    """How an extension is distributed, versioned and removed."""

    REMOTE_SINGLE_BINARY = "RemoteSingleBinary"
    BUNDLED_LEGACY_TOOL = "BundledLegacyTool"
    EXTERNAL_ON_PATH = "ExternalOnPath"

    @classmethod
    def _missing_(cls, value: object) -> "ExtensionKind | None":
        if isinstance(value, str) and value in _LEGACY_KIND_NAMES:
            return cls(_LEGACY_KIND_NAMES[value])
        return None

    @property
    def display_name(self) -> str:
        return {
            ExtensionKind.REMOTE_SINGLE_BINARY: "PactFlow AI",
            ExtensionKind.BUNDLED_LEGACY_TOOL: "Pact Legacy",
            ExtensionKind.EXTERNAL_ON_PATH: "External",
        }[self]


class ExtensionRecord(BaseModel):
    """One installable command in the registry."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    binary_path: str
    extension_kind: ExtensionKind = Field(
        validation_alias=AliasChoices("extension_kind", "extension_type")
    )
    installed: bool


Registry = dict[str, ExtensionRecord]

REGISTRY_ADAPTER: TypeAdapter[Registry] = TypeAdapter(Registry)
