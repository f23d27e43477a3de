"""Orchestration of sentiment, entity and key phrase analysis."""
