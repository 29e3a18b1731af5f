"""Configuration loader for the index inspection pipeline."""

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from ..errors import ConfigError
from ..models.page_state import PageClassification


class Credentials(BaseModel):
    """Login identity, secret and the Search Console property to inspect."""

    identity: str = Field(default="")
    secret: Optional[str] = Field(default=None, repr=False)
    secret_env: str = Field(default="GSC_PASSWORD")
    site: str = Field(default="", description="Property identifier, e.g. https://example.com/")

    def resolve_secret(self) -> str:
        """Inline secret wins; otherwise read the configured environment variable."""
        return self.secret or os.environ.get(self.secret_env, "")

    def check(self) -> None:
        missing = []
        if not self.identity:
            missing.append("identity")
        if not self.resolve_secret():
            missing.append(f"secret (or ${self.secret_env})")
        if not self.site:
            missing.append("site")
        if missing:
            raise ConfigError("Missing credentials: " + ", ".join(missing))


class BrowserConfig(BaseModel):
    """Which Playwright engine to launch and how."""

    engine: Literal["firefox", "chromium", "webkit"] = Field(default="firefox")
    headless: bool = Field(default=True)
    type_delay_ms: int = Field(default=50, ge=0)
    query_type_delay_ms: int = Field(default=5, ge=0)


class Timeouts(BaseModel):
    """Every page wait is bounded by one of these (milliseconds)."""

    default_timeout_ms: int = Field(default=240000, ge=1000)
    landing_timeout_ms: int = Field(default=240000, ge=1000)
    second_factor_probe_ms: int = Field(default=3000, ge=0)
    second_factor_wait_ms: int = Field(default=10000, ge=0)
    search_settle_ms: int = Field(default=1000, ge=0)
    quota_settle_ms: int = Field(default=1000, ge=0)
    snapshot_settle_ms: int = Field(default=1000, ge=0)


class Selectors(BaseModel):
    """Selectors for the login flow and the URL inspection surface."""

    login_url: str = "https://search.google.com/search-console/welcome"
    identity_input: str = "css=input"
    secret_input: str = "[name=password]"
    second_factor_marker: str = 'text="2-step Verification"'
    landing_marker: str = 'text="Welcome to Google Search Console"'

    inspect_url_template: str = "https://search.google.com/search-console?resource_id={site}"
    search_box: str = 'xpath=//*[@aria-label="Search"]'
    search_form: str = "form[role=search]"
    query_input: str = "input[dir=ltr]"
    submit: str = "[aria-label=Search]"

    result_marker: str = ".CC5fre"
    coverage: str = ".OJb48e"
    index_state: str = ".CC5fre"
    index_state_description: str = ".iMB8w"
    details_toggle: str = ".QB1Nub"
    last_crawl: str = ".zVF5Ie"
    detail_groups: str = ".bakgf"


class MarkerRule(BaseModel):
    """One row of the failure policy: a page marker and what it means."""

    name: str
    selector: str
    classification: PageClassification
    message: str = ""

    @field_validator("classification")
    @classmethod
    def _loop_classification_only(cls, value: PageClassification) -> PageClassification:
        if value in (PageClassification.READY, PageClassification.SECOND_FACTOR_REQUIRED):
            raise ValueError(f"{value.value} cannot be used as a failure policy marker")
        return value


def default_failure_policy() -> list[MarkerRule]:
    # Evaluated in order; the first marker present on the page wins.
    return [
        MarkerRule(
            name="quota_exceeded",
            selector="text=Quota exceeded",
            classification=PageClassification.QUOTA_EXCEEDED,
            message="Quota exceeded, sorry come back tomorrow.",
        ),
        MarkerRule(
            name="service_error",
            selector="text=Something went wrong",
            classification=PageClassification.TRANSIENT_ERROR,
            message=(
                "Something went wrong within Search Console. Continuing with the next URL; "
                "if you see this message multiple times stop the run."
            ),
        ),
        MarkerRule(
            name="not_in_property",
            selector="text=URL not in property",
            classification=PageClassification.ITEM_NOT_APPLICABLE,
            message="URL is not in this Search Console property",
        ),
    ]


class ExtractionConfig(BaseModel):
    """Shape of the detail groups and how they are folded into result fields."""

    detail_groups: list[str] = Field(
        default_factory=lambda: ["Sitemaps", "Referring page", "User-canonical", "Google-canonical"],
        min_length=1,
    )
    multi_value_groups: list[str] = Field(default_factory=lambda: ["Referring page"])
    self_canonical_group: str = Field(default="Google-canonical")
    self_canonical_placeholder: str = Field(default="Inspected URL")


class RetryPolicy(BaseModel):
    """Retry configuration for navigation failures."""

    max_attempts: int = Field(default=3, ge=1)
    backoff_seconds: float = Field(default=2.0, ge=0)


class OutputConfig(BaseModel):
    """Output configuration."""

    json_path: str = Field(default="./output/results.json")
    csv_path: str = Field(default="./output/results.csv")
    snapshot_path: str = Field(default="./output/quota-exc.png")


class Config(BaseModel):
    """Full pipeline configuration."""

    credentials: Credentials = Field(default_factory=Credentials)
    input_path: str = Field(default="urls.csv")
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    timeouts: Timeouts = Field(default_factory=Timeouts)
    selectors: Selectors = Field(default_factory=Selectors)
    failure_policy: list[MarkerRule] = Field(default_factory=default_failure_policy)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    extraction_errors: Literal["skip", "abort"] = Field(default="skip")
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Load config from dictionary."""
        return cls(**data)


def load_config(path: str | Path) -> Config:
    """Load configuration from file (YAML or JSON)."""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        content = f.read()

    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        else:
            data = json.loads(content)
        return Config.from_dict(data)
    except (yaml.YAMLError, json.JSONDecodeError, ValueError) as e:
        # pydantic.ValidationError is a ValueError
        raise ConfigError(f"Invalid config {path}: {e}") from e
