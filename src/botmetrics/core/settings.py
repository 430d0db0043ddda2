"""Configuration surface consumed by the write pipeline."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from botmetrics.core.models import ClassificationRule, SinkConnection

HELPER_NAME = "influxdb-helper"
SETTINGS_NAMESPACE = "influxdb_helper"


@dataclass(frozen=True)
class InfluxSettings:
    """Settings for the InfluxDB sink and subject classification.

    Attributes:
        url: Sink endpoint.
        token: Sink credential.
        organization: Organization the points are written to.
        bucket: Bucket the points are written to.
        subjects: Candidate subjects, in priority order.
        default_subject: Subject used when no candidate matches.
        subject_tagname: Tag key holding the resolved subject.
    """

    url: str = "http://influxdb:8086/"
    token: str = "mytoken"
    organization: str = "Hexastack"
    bucket: str = "Hexabot"
    subjects: tuple[str, ...] = ("Greeting", "Question", "Handover")
    default_subject: str = "Other"
    subject_tagname: str = "subject"

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if item.name == "subjects":
                if isinstance(value, str) or not all(
                    isinstance(subject, str) for subject in value
                ):
                    raise TypeError("subjects must be a sequence of strings")
                object.__setattr__(self, "subjects", tuple(value))
            elif not isinstance(value, str):
                raise TypeError(f"{item.name} must be a string")
        if not self.subject_tagname:
            raise ValueError("subject_tagname must not be empty")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "InfluxSettings":
        """Build settings from a label -> value mapping.

        Unknown labels are ignored. ``subjects`` may be given as a
        comma-separated string.
        """
        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        subjects = values.get("subjects")
        if isinstance(subjects, str):
            values["subjects"] = tuple(
                part.strip() for part in subjects.split(",") if part.strip()
            )
        return cls(**values)

    def replace(self, **changes: Any) -> "InfluxSettings":
        return replace(self, **changes)

    @property
    def connection(self) -> SinkConnection:
        return SinkConnection(endpoint=self.url, credential=self.token)

    @property
    def classification_rule(self) -> ClassificationRule:
        return ClassificationRule(
            candidate_subjects=self.subjects,
            default_subject=self.default_subject,
        )
