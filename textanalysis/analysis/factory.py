import boto3
from botocore.exceptions import BotoCoreError

from textanalysis.analysis.comprehend_client_adapter import ComprehendClientAdapter
from textanalysis.analysis.exceptions import SessionError
from textanalysis.analysis.job_pipeline import (
    AwaitJobStep,
    DownloadOutputStep,
    JobPipeline,
    ParseOutputStep,
    SubmitJobStep,
    UnpackOutputStep,
)
from textanalysis.analysis.models import AnalysisKind
from textanalysis.analysis.orchestrator import TextAnalyzer
from textanalysis.analysis.poller import JobPoller
from textanalysis.analysis.sentiment import SentimentAnalyzer
from textanalysis.config.settings import Settings
from textanalysis.logging.logger import Log
from textanalysis.storage.base import BaseObjectStorage
from textanalysis.storage.s3_adapter import S3StorageAdapter


def create_session(settings: Settings) -> boto3.Session:
    """Create an AWS session for the configured profile and verify its credentials."""
    Log.info(f"Creating session for profile {settings.aws_profile or 'default'}")
    try:
        session = boto3.Session(
            profile_name=settings.aws_profile or None,
            region_name=settings.aws_region,
        )
        credentials = session.get_credentials()
    except BotoCoreError as exc:
        raise SessionError(f"unable to create new session: {exc}") from exc
    if credentials is None:
        raise SessionError("unable to get credentials")
    return session


class TextAnalyzerFactory:
    """Wires the Comprehend and S3 adapters into a TextAnalyzer."""

    @classmethod
    def create(
        cls,
        settings: Settings,
        session: boto3.Session,
        storage: BaseObjectStorage | None = None,
    ) -> TextAnalyzer:
        client = ComprehendClientAdapter(
            session.client("comprehend"),
            language_code=settings.language_code,
            data_access_role_arn=settings.data_access_role_arn,
        )
        if storage is None:
            storage = S3StorageAdapter(session.client("s3"))
        poller = JobPoller(
            client,
            input_bucket=settings.input_bucket,
            output_bucket=settings.analysis_bucket,
            output_prefixes={
                AnalysisKind.ENTITIES: settings.entities_output_prefix,
                AnalysisKind.KEY_PHRASES: settings.key_phrases_output_prefix,
            },
            poll_interval_seconds=settings.job_poll_interval_seconds,
        )
        job_pipeline = JobPipeline(
            [
                SubmitJobStep(poller),
                AwaitJobStep(poller, timeout_seconds=settings.job_timeout_seconds),
                DownloadOutputStep(storage),
                UnpackOutputStep(),
                ParseOutputStep(),
            ]
        )
        return TextAnalyzer(
            client=client,
            job_pipeline=job_pipeline,
            sentiment_analyzer=SentimentAnalyzer(client, limit=settings.top_negative_sentences),
        )
