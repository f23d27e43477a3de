"""Text analysis of S3 documents via Amazon Comprehend."""
