"""Aggregation module for student evaluation results.

- Reads completed evaluations through the repository and produces
  per-exam summaries (grouped marks, feedback, evaluators, averages)
- Forbidden: writes of any kind
"""
