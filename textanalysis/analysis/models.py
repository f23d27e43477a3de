from dataclasses import dataclass, field
from enum import Enum


class AnalysisKind(str, Enum):
    SENTIMENT = "sentiment"
    ENTITIES = "entities"
    KEY_PHRASES = "key phrases"


class ProcessingPath(str, Enum):
    SYNC = "sync"
    ASYNC = "async"


class JobStatus(str, Enum):
    """Lifecycle states reported by the analysis service for a detection job."""

    SUBMITTED = "SUBMITTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    STOP_REQUESTED = "STOP_REQUESTED"
    STOPPED = "STOPPED"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.STOPPED)


class EntityCategory(str, Enum):
    PERSON = "PERSON"
    LOCATION = "LOCATION"
    DATE = "DATE"
    ORGANIZATION = "ORGANIZATION"
    IGNORED = "IGNORED"

    @classmethod
    def from_tag(cls, tag: str) -> "EntityCategory":
        """Map a raw service tag to a category; unknown tags are IGNORED."""
        try:
            return cls(tag)
        except ValueError:
            return cls.IGNORED


@dataclass(frozen=True)
class Entity:
    text: str
    type: str


@dataclass(frozen=True)
class KeyPhrase:
    text: str


@dataclass(frozen=True)
class SentimentFinding:
    """A scored sentence together with its three-sentence context window."""

    sentence: str
    surrounding_sentences: str
    negative_sentiment: float


@dataclass(frozen=True)
class CategorizedEntities:
    people: list[Entity] = field(default_factory=list)
    places: list[Entity] = field(default_factory=list)
    dates: list[Entity] = field(default_factory=list)
    organisations: list[Entity] = field(default_factory=list)


@dataclass
class AsyncJobHandle:
    """Tracks one submitted detection job until it reaches a terminal state."""

    job_id: str
    kind: AnalysisKind
    status: JobStatus = JobStatus.SUBMITTED
    output_uri: str | None = None


@dataclass(frozen=True)
class AnalysisResult:
    """Consolidated output of one analysis run. Unset sections stay None."""

    data_source: str
    top_negative_sentiment: list[SentimentFinding] | None = None
    people: list[Entity] | None = None
    places: list[Entity] | None = None
    dates: list[Entity] | None = None
    organisations: list[Entity] | None = None
    key_phrases: list[KeyPhrase] | None = None


@dataclass
class AnalysisResultBuilder:
    """Mutable accumulator the orchestrator's branches write into."""

    data_source: str
    top_negative_sentiment: list[SentimentFinding] | None = None
    people: list[Entity] | None = None
    places: list[Entity] | None = None
    dates: list[Entity] | None = None
    organisations: list[Entity] | None = None
    key_phrases: list[KeyPhrase] | None = None

    def build(self) -> AnalysisResult:
        return AnalysisResult(
            data_source=self.data_source,
            top_negative_sentiment=self.top_negative_sentiment,
            people=self.people,
            places=self.places,
            dates=self.dates,
            organisations=self.organisations,
            key_phrases=self.key_phrases,
        )
