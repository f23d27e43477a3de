from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from textanalysis.analysis.client_base import BaseAnalysisClient
from textanalysis.analysis.exceptions import DetectionError, PollError, SubmissionError
from textanalysis.analysis.models import AnalysisKind, JobStatus


class ComprehendClientAdapter(BaseAnalysisClient):
    """Analysis client adapter built on the Amazon Comprehend API."""

    def __init__(
        self,
        client: Any,
        *,
        language_code: str,
        data_access_role_arn: str,
    ) -> None:
        self._client = client
        self._language_code = language_code
        self._data_access_role_arn = data_access_role_arn

    def detect_sentiment(self, text: str) -> float:
        try:
            response = self._client.detect_sentiment(
                Text=text, LanguageCode=self._language_code
            )
        except (ClientError, BotoCoreError) as exc:
            raise DetectionError(f"Unable to detect sentiment: {exc}") from exc
        return float(response["SentimentScore"]["Negative"])

    def batch_detect_entities(self, text: str) -> list[dict[str, str]]:
        try:
            response = self._client.batch_detect_entities(
                TextList=[text], LanguageCode=self._language_code
            )
        except (ClientError, BotoCoreError) as exc:
            raise DetectionError(f"Comprehend API error: {exc}") from exc
        result = self._first_result(response)
        return [
            {"Text": entity["Text"], "Type": entity["Type"]}
            for entity in result.get("Entities", [])
        ]

    def batch_detect_key_phrases(self, text: str) -> list[dict[str, str]]:
        try:
            response = self._client.batch_detect_key_phrases(
                TextList=[text], LanguageCode=self._language_code
            )
        except (ClientError, BotoCoreError) as exc:
            raise DetectionError(f"Comprehend API error: {exc}") from exc
        result = self._first_result(response)
        return [{"Text": phrase["Text"]} for phrase in result.get("KeyPhrases", [])]

    def start_job(self, kind: AnalysisKind, *, input_uri: str, output_uri: str) -> str:
        params = {
            "InputDataConfig": {"S3Uri": input_uri, "InputFormat": "ONE_DOC_PER_FILE"},
            "OutputDataConfig": {"S3Uri": output_uri},
            "DataAccessRoleArn": self._data_access_role_arn,
            "LanguageCode": self._language_code,
        }
        try:
            if kind is AnalysisKind.ENTITIES:
                response = self._client.start_entities_detection_job(**params)
            elif kind is AnalysisKind.KEY_PHRASES:
                response = self._client.start_key_phrases_detection_job(**params)
            else:
                raise SubmissionError(f"No detection job available for {kind.value}")
        except (ClientError, BotoCoreError) as exc:
            raise SubmissionError(f"Comprehend rejected {kind.value} job: {exc}") from exc
        return response["JobId"]

    def describe_job(self, kind: AnalysisKind, job_id: str) -> tuple[JobStatus, str | None]:
        try:
            if kind is AnalysisKind.ENTITIES:
                response = self._client.describe_entities_detection_job(JobId=job_id)
                properties = response["EntitiesDetectionJobProperties"]
            elif kind is AnalysisKind.KEY_PHRASES:
                response = self._client.describe_key_phrases_detection_job(JobId=job_id)
                properties = response["KeyPhrasesDetectionJobProperties"]
            else:
                raise PollError(f"No detection job available for {kind.value}")
        except (ClientError, BotoCoreError) as exc:
            raise PollError(f"Cannot check status of {kind.value} job {job_id}: {exc}") from exc

        try:
            status = JobStatus(properties["JobStatus"])
        except (KeyError, ValueError) as exc:
            raise PollError(f"Missing or unknown status for {kind.value} job {job_id}: {exc}") from exc
        output_uri = properties.get("OutputDataConfig", {}).get("S3Uri")
        return status, output_uri if status is JobStatus.COMPLETED else None

    @staticmethod
    def _first_result(response: dict[str, Any]) -> dict[str, Any]:
        errors = response.get("ErrorList") or []
        if errors:
            error = errors[0]
            raise DetectionError(
                f"Comprehend batch error {error.get('ErrorCode')}: {error.get('ErrorMessage')}"
            )
        results = response.get("ResultList") or []
        if not results:
            raise DetectionError("Comprehend returned no results")
        return results[0]
