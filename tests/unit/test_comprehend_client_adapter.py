from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from textanalysis.analysis.comprehend_client_adapter import ComprehendClientAdapter
from textanalysis.analysis.exceptions import DetectionError, PollError, SubmissionError
from textanalysis.analysis.models import AnalysisKind, JobStatus

ROLE_ARN = "arn:aws:iam::123456789012:role/comprehend-s3-access"


def _client_error(operation: str, code: str = "AccessDeniedException") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "not allowed"}}, operation)


def _make_adapter() -> tuple[ComprehendClientAdapter, MagicMock]:
    client = MagicMock()
    adapter = ComprehendClientAdapter(client, language_code="en", data_access_role_arn=ROLE_ARN)
    return adapter, client


class TestDetectSentiment:
    def test_returns_negative_score(self) -> None:
        adapter, client = _make_adapter()
        client.detect_sentiment.return_value = {
            "Sentiment": "NEGATIVE",
            "SentimentScore": {"Positive": 0.01, "Negative": 0.93, "Neutral": 0.05, "Mixed": 0.01},
        }

        assert adapter.detect_sentiment("It was awful") == pytest.approx(0.93)
        client.detect_sentiment.assert_called_once_with(Text="It was awful", LanguageCode="en")

    def test_client_error_raises_detection_error(self) -> None:
        adapter, client = _make_adapter()
        client.detect_sentiment.side_effect = _client_error("DetectSentiment")

        with pytest.raises(DetectionError, match="Unable to detect sentiment"):
            adapter.detect_sentiment("text")

    def test_connection_error_raises_detection_error(self) -> None:
        adapter, client = _make_adapter()
        client.detect_sentiment.side_effect = EndpointConnectionError(endpoint_url="https://x")

        with pytest.raises(DetectionError):
            adapter.detect_sentiment("text")


class TestBatchDetection:
    def test_entities_from_first_result(self) -> None:
        adapter, client = _make_adapter()
        client.batch_detect_entities.return_value = {
            "ResultList": [
                {
                    "Index": 0,
                    "Entities": [
                        {"Text": "Alice", "Type": "PERSON", "Score": 0.99},
                        {"Text": "Paris", "Type": "LOCATION", "Score": 0.98},
                    ],
                }
            ],
            "ErrorList": [],
        }

        assert adapter.batch_detect_entities("Alice went to Paris") == [
            {"Text": "Alice", "Type": "PERSON"},
            {"Text": "Paris", "Type": "LOCATION"},
        ]
        client.batch_detect_entities.assert_called_once_with(
            TextList=["Alice went to Paris"], LanguageCode="en"
        )

    def test_key_phrases_from_first_result(self) -> None:
        adapter, client = _make_adapter()
        client.batch_detect_key_phrases.return_value = {
            "ResultList": [{"Index": 0, "KeyPhrases": [{"Text": "the trip", "Score": 0.9}]}],
            "ErrorList": [],
        }

        assert adapter.batch_detect_key_phrases("the trip") == [{"Text": "the trip"}]

    def test_batch_item_error_raises(self) -> None:
        adapter, client = _make_adapter()
        client.batch_detect_entities.return_value = {
            "ResultList": [],
            "ErrorList": [{"Index": 0, "ErrorCode": "TEXT_SIZE_LIMIT_EXCEEDED", "ErrorMessage": "big"}],
        }

        with pytest.raises(DetectionError, match="TEXT_SIZE_LIMIT_EXCEEDED"):
            adapter.batch_detect_entities("text")

    def test_empty_result_list_raises(self) -> None:
        adapter, client = _make_adapter()
        client.batch_detect_key_phrases.return_value = {"ResultList": [], "ErrorList": []}

        with pytest.raises(DetectionError, match="no results"):
            adapter.batch_detect_key_phrases("text")

    def test_client_error_raises_detection_error(self) -> None:
        adapter, client = _make_adapter()
        client.batch_detect_key_phrases.side_effect = _client_error("BatchDetectKeyPhrases")

        with pytest.raises(DetectionError, match="Comprehend API error"):
            adapter.batch_detect_key_phrases("text")


class TestStartJob:
    def test_starts_entities_job(self) -> None:
        adapter, client = _make_adapter()
        client.start_entities_detection_job.return_value = {"JobId": "e-1", "JobStatus": "SUBMITTED"}

        job_id = adapter.start_job(
            AnalysisKind.ENTITIES, input_uri="s3://in/doc.txt", output_uri="s3://out/entities"
        )

        assert job_id == "e-1"
        client.start_entities_detection_job.assert_called_once_with(
            InputDataConfig={"S3Uri": "s3://in/doc.txt", "InputFormat": "ONE_DOC_PER_FILE"},
            OutputDataConfig={"S3Uri": "s3://out/entities"},
            DataAccessRoleArn=ROLE_ARN,
            LanguageCode="en",
        )

    def test_starts_key_phrases_job(self) -> None:
        adapter, client = _make_adapter()
        client.start_key_phrases_detection_job.return_value = {"JobId": "k-1"}

        job_id = adapter.start_job(
            AnalysisKind.KEY_PHRASES, input_uri="s3://in/doc.txt", output_uri="s3://out/kp"
        )

        assert job_id == "k-1"
        client.start_entities_detection_job.assert_not_called()

    def test_rejection_raises_submission_error(self) -> None:
        adapter, client = _make_adapter()
        client.start_entities_detection_job.side_effect = _client_error(
            "StartEntitiesDetectionJob"
        )

        with pytest.raises(SubmissionError, match="AccessDeniedException"):
            adapter.start_job(AnalysisKind.ENTITIES, input_uri="s3://in/d", output_uri="s3://o")

    def test_sentiment_has_no_job(self) -> None:
        adapter, _client = _make_adapter()

        with pytest.raises(SubmissionError, match="No detection job"):
            adapter.start_job(AnalysisKind.SENTIMENT, input_uri="s3://in/d", output_uri="s3://o")


class TestDescribeJob:
    def test_in_progress_has_no_output(self) -> None:
        adapter, client = _make_adapter()
        client.describe_entities_detection_job.return_value = {
            "EntitiesDetectionJobProperties": {
                "JobId": "e-1",
                "JobStatus": "IN_PROGRESS",
                "OutputDataConfig": {"S3Uri": "s3://out/entities"},
            }
        }

        assert adapter.describe_job(AnalysisKind.ENTITIES, "e-1") == (JobStatus.IN_PROGRESS, None)
        client.describe_entities_detection_job.assert_called_once_with(JobId="e-1")

    def test_completed_returns_output_uri(self) -> None:
        adapter, client = _make_adapter()
        uri = "s3://out/kp/123-KP-k1/output/output.tar.gz"
        client.describe_key_phrases_detection_job.return_value = {
            "KeyPhrasesDetectionJobProperties": {
                "JobId": "k-1",
                "JobStatus": "COMPLETED",
                "OutputDataConfig": {"S3Uri": uri},
            }
        }

        assert adapter.describe_job(AnalysisKind.KEY_PHRASES, "k-1") == (JobStatus.COMPLETED, uri)

    def test_client_error_raises_poll_error(self) -> None:
        adapter, client = _make_adapter()
        client.describe_key_phrases_detection_job.side_effect = _client_error(
            "DescribeKeyPhrasesDetectionJob", code="ThrottlingException"
        )

        with pytest.raises(PollError, match="Cannot check status"):
            adapter.describe_job(AnalysisKind.KEY_PHRASES, "k-1")

    def test_missing_status_raises_poll_error(self) -> None:
        adapter, client = _make_adapter()
        client.describe_entities_detection_job.return_value = {
            "EntitiesDetectionJobProperties": {"JobId": "e-1"}
        }

        with pytest.raises(PollError, match="Missing or unknown status") as info:
            adapter.describe_job(AnalysisKind.ENTITIES, "e-1")
        assert isinstance(info.value.__cause__, KeyError)

    def test_unknown_status_raises_poll_error(self) -> None:
        adapter, client = _make_adapter()
        client.describe_entities_detection_job.return_value = {
            "EntitiesDetectionJobProperties": {"JobId": "e-1", "JobStatus": "PAUSED"}
        }

        with pytest.raises(PollError, match="Missing or unknown status"):
            adapter.describe_job(AnalysisKind.ENTITIES, "e-1")
