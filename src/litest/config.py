from __future__ import annotations

from enum import Enum
from functools import partial
from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from litest.models import SuiteMode
from litest.reporting import (
    HtmlReporter,
    JUnitReporter,
    LogLevel,
    MarkdownReporter,
    PlainReporter,
    ReporterFactory,
)


class ReporterType(str, Enum):
    MARKDOWN = "markdown"
    HTML = "html"
    JUNIT = "junit"
    PLAIN = "plain"


class LogLevelName(str, Enum):
    ERRORS = "errors"
    MESSAGES = "messages"
    EVERYTHING = "everything"

    def to_level(self) -> LogLevel:
        return LogLevel[self.name]


class RunConfig(BaseModel):
    """Settings for one ``litest run``, usually read from ``litest.yaml``."""

    model_config = ConfigDict(extra="forbid")
    suite: str
    reporter: ReporterType = ReporterType.MARKDOWN
    output: str | None = None
    mode: SuiteMode = SuiteMode.CONTINUE
    log_level: LogLevelName = LogLevelName.MESSAGES
    tests: list[int] | None = None

    @field_validator("suite")
    @classmethod
    def suite_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("suite must not be empty")
        return v

    @field_validator("output")
    @classmethod
    def expand_output(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            return expandvars(v, nounset=True)
        except Exception as e:
            raise ValueError(f"output '{v}' references an unset variable: {e}")

    @model_validator(mode="after")
    def file_reporters_need_output(self) -> RunConfig:
        if self.reporter == ReporterType.JUNIT and not self.output:
            raise ValueError("the junit reporter requires 'output'")
        return self


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    config = RunConfig(**raw)

    # Resolve relative paths relative to config file location
    suite_path, sep, attr = config.suite.partition(":")
    if not Path(suite_path).is_absolute():
        config.suite = str((config_dir / suite_path).resolve()) + sep + attr
    if config.output and not Path(config.output).is_absolute():
        config.output = str((config_dir / config.output).resolve())

    return config


def build_reporter_factory(config: RunConfig) -> ReporterFactory:
    """Return a zero-argument factory for the configured reporter."""
    output = Path(config.output) if config.output else None

    if config.reporter == ReporterType.MARKDOWN:
        return partial(MarkdownReporter, level=config.log_level.to_level(), path=output)
    if config.reporter == ReporterType.HTML:
        return partial(HtmlReporter, output)
    if config.reporter == ReporterType.JUNIT:
        return partial(JUnitReporter, output)
    return partial(PlainReporter, path=output)
