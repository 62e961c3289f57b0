"""Per-run configuration for the CTRF reporter."""

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_OUTPUT_DIR = "ctrf"
DEFAULT_OUTPUT_FILE = "ctrf-report.json"
DEFAULT_TEST_TYPE = "e2e"

# Descriptor fields copied verbatim into the report's environment block.
ENVIRONMENT_FIELDS = (
    "app_name",
    "app_version",
    "os_platform",
    "os_release",
    "os_version",
    "build_name",
    "build_number",
    "build_url",
    "repository_name",
    "repository_url",
    "branch_name",
    "test_environment",
)


class RunConfiguration(BaseModel):
    """Reporter options, fixed for the lifetime of one run.

    Accepts both snake_case names and the camelCase names used by the host
    runner's plugin options (``outputFile``, ``appName``...).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    output_dir: str = Field(default=DEFAULT_OUTPUT_DIR, min_length=1)
    output_file: str = Field(default=DEFAULT_OUTPUT_FILE, min_length=1)
    minimal: bool = False  # only name/status/duration per test
    screenshot: bool = False  # embed a base64 screenshot per test
    test_type: str = DEFAULT_TEST_TYPE

    app_name: Optional[str] = None
    app_version: Optional[str] = None
    os_platform: Optional[str] = None
    os_release: Optional[str] = None
    os_version: Optional[str] = None
    build_name: Optional[str] = None
    build_number: Optional[str] = None
    build_url: Optional[str] = None
    repository_name: Optional[str] = None
    repository_url: Optional[str] = None
    branch_name: Optional[str] = None
    test_environment: Optional[str] = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "RunConfiguration":
        """Build a configuration from a host-style options mapping.

        Keys whose value is ``None`` are treated as absent so the defaults
        apply, matching how the host runner passes unset options.
        """
        return cls.model_validate({key: value for key, value in options.items() if value is not None})

    def environment_details(self) -> Dict[str, str]:
        """Return supplied environment descriptors keyed by their CTRF names."""
        details: Dict[str, str] = {}
        for name in ENVIRONMENT_FIELDS:
            value = getattr(self, name)
            if value is not None:
                details[to_camel(name)] = value
        return details
